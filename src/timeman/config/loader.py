"""
YAML 配置文件加载与校验。

本模块负责：
1. 从文件路径加载 YAML 配置，或在默认搜索路径中自动发现
2. 使用 Pydantic Schema 校验配置内容
3. 合并运行时覆盖（默认 → 文件 → overrides）
4. 提供精确到字段的校验错误信息
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from timeman.config.schema import TimemanConfig
from timeman.errors import ConfigLoadError, ConfigValidationError

logger = logging.getLogger(__name__)

_SEARCH_PATHS = [
    Path("timeman.yaml"),
    Path("timeman.yml"),
    Path("configs/timeman.yaml"),
    Path(".timeman/config.yaml"),
]


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> TimemanConfig:
    """
    加载并校验配置。

    加载优先级：
    1. 显式指定的路径
    2. 当前目录下的默认搜索路径
    3. 内置默认值

    参数:
        path: YAML 文件路径。None 时自动搜索默认路径。
        overrides: 运行时覆盖的配置项（深度合并到文件配置之上）

    返回:
        TimemanConfig 实例

    异常:
        ConfigLoadError: 文件不存在或格式错误
        ConfigValidationError: 配置校验失败
    """
    raw_config: dict[str, Any] = {}

    if path is not None:
        raw_config = _load_yaml_file(Path(path))
    else:
        for search_path in _SEARCH_PATHS:
            if search_path.exists():
                logger.info("自动发现配置文件：%s", search_path)
                raw_config = _load_yaml_file(search_path)
                break
        if not raw_config:
            logger.info("未找到配置文件，使用默认配置。")

    if overrides:
        raw_config = _deep_merge(raw_config, overrides)

    return _validate_config(raw_config, str(path) if path else "<default>")


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """加载并解析 YAML 文件。"""
    if not path.exists():
        raise ConfigLoadError(
            what=f"配置文件 '{path}' 不存在。",
            why=f"在路径 '{path.absolute()}' 下未找到该文件。",
            how="请检查文件路径是否正确，或不传路径以使用默认配置。",
            file_path=str(path),
        )

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(
            what=f"无法读取配置文件 '{path}'。",
            why=str(e),
            how="请检查文件权限和编码（需要 UTF-8）。",
            file_path=str(path),
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(
            what=f"配置文件 '{path}' 的 YAML 格式无效。",
            why=str(e),
            how="请使用 YAML 格式校验工具检查文件语法。",
            file_path=str(path),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(
            what=f"配置文件 '{path}' 的根元素必须是字典（mapping）。",
            why=f"实际类型为 {type(data).__name__}。",
            how="请确保 YAML 文件的根元素是键值对形式，例如：\n"
                "  options:\n"
                "    move_overhead: 30",
            file_path=str(path),
        )

    return data


def _validate_config(raw: dict[str, Any], source: str) -> TimemanConfig:
    """使用 Pydantic 校验配置字典。"""
    try:
        return TimemanConfig(**raw)
    except ValidationError as e:
        error_details = []
        for err in e.errors():
            field_path = " → ".join(str(loc) for loc in err["loc"])
            error_details.append(f"  字段 '{field_path}': {err['msg']}")

        first_loc = e.errors()[0]["loc"] if e.errors() else ()
        raise ConfigValidationError(
            what=f"配置 '{source}' 校验失败（{len(e.errors())} 个错误）。",
            why="\n".join(error_details),
            how="请对照 TimemanConfig 的字段说明修正配置项，"
                "可以使用 'timeman validate <path>' 命令进行预校验。",
            config_path=source,
            field_path=".".join(str(loc) for loc in first_loc),
        ) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """深度合并两个字典，override 中的值优先。"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def validate_config_file(path: str | Path) -> list[str]:
    """
    校验配置文件，返回错误列表。

    不抛出异常，而是收集错误并返回，供 CLI 的 validate 命令使用。

    参数:
        path: YAML 文件路径

    返回:
        错误信息列表（空列表表示校验通过）
    """
    errors: list[str] = []

    try:
        load_config(path=path)
    except (ConfigLoadError, ConfigValidationError) as e:
        errors.append(e.full_message)

    return errors
