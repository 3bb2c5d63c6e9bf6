"""
结构化异常体系 — 错误信息即文档。

每条异常遵循"三段式"规范：
1. What went wrong（发生了什么）
2. Why it happened（为什么发生）
3. How to fix it（怎么修）

时间管理的数值退化（time_left 下限为 1、maximum 截断为 0）不属于错误，
不会抛出异常；这里只覆盖配置问题和调用方违反前置条件的情况。

示例::

    EffortModeError(
        what="advance_effort() 只能在 nodes-as-time 模式下调用。",
        why="当前会话的 nodestime 选项为 0，尚未进入节点计时模式。",
        how="在配置中设置 options.nodestime > 0，或不要调用 advance_effort()。",
    )
"""

from __future__ import annotations

from typing import Any


class TimemanError(Exception):
    """
    timeman 异常基类。

    所有 timeman 异常都继承自此类，支持三段式错误消息。

    属性:
        what: 发生了什么
        why: 为什么发生
        how: 怎么修复
        details: 额外的上下文信息（用于调试）
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.what = what
        self.why = why
        self.how = how
        self.details = details or {}

        parts = [what]
        if why:
            parts.append(f"→ 原因：{why}")
        if how:
            parts.append(f"→ 修复建议：{how}")

        self.full_message = "\n".join(parts)
        super().__init__(self.full_message)

    def __str__(self) -> str:
        return self.full_message

    def to_dict(self) -> dict[str, Any]:
        """转换为字典格式，用于 JSON 输出。"""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "what": self.what,
        }
        if self.why:
            result["why"] = self.why
        if self.how:
            result["how"] = self.how
        if self.details:
            result["details"] = self.details
        return result


# === 配置相关异常 ===


class ConfigValidationError(TimemanError):
    """
    配置校验异常。

    当 YAML 配置文件格式正确但字段不合法时抛出
    （例如 move_overhead 超出 0..5000 的范围）。

    示例::

        raise ConfigValidationError(
            what="配置文件 'timeman.yaml' 校验失败。",
            why="字段 'options → move_overhead' 的值 -5 小于 0。",
            how="将 move_overhead 设置为 0 到 5000 之间的毫秒数。",
            config_path="timeman.yaml",
            field_path="options.move_overhead",
        )
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        config_path: str = "",
        field_path: str = "",
        **kwargs: Any,
    ) -> None:
        details = {
            "config_path": config_path,
            "field_path": field_path,
        }
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.config_path = config_path
        self.field_path = field_path


class ConfigLoadError(TimemanError):
    """
    配置加载异常。

    当配置文件不存在、无法读取或 YAML 无法解析时抛出。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        file_path: str = "",
        **kwargs: Any,
    ) -> None:
        details = {"file_path": file_path}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.file_path = file_path


# === 调用约定相关异常 ===


class InvalidStepError(TimemanError):
    """
    步参数非法。

    initialize() 的 ply 必须是非负整数。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        ply: int = 0,
        **kwargs: Any,
    ) -> None:
        details: dict[str, Any] = {"ply": ply}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.ply = ply


class EffortModeError(TimemanError):
    """
    节点计时模式未激活时调用了只在该模式下有效的操作。
    """

    pass


class SessionStateError(TimemanError):
    """
    会话生命周期调用顺序错误。

    例如在没有 start_step() 的情况下调用 finish_step()。
    """

    pass
