"""
错误处理单元测试。

覆盖范围:
- errors/exceptions.py: 全部自定义异常
- 三段式错误信息（What / Why / How）
- 异常继承关系
"""

from __future__ import annotations

import pytest

from timeman.errors import (
    ConfigLoadError,
    ConfigValidationError,
    EffortModeError,
    InvalidStepError,
    SessionStateError,
    TimemanError,
)


class TestTimemanError:
    """TimemanError 基类。"""

    def test_three_segments(self) -> None:
        error = TimemanError(what="发生了错误", why="因为某个原因", how="请这样修复")
        text = str(error)
        assert "发生了错误" in text
        assert "原因：因为某个原因" in text
        assert "修复建议：请这样修复" in text

    def test_what_only(self) -> None:
        error = TimemanError(what="只有一段")
        assert str(error) == "只有一段"
        assert error.details == {}

    def test_to_dict(self) -> None:
        error = TimemanError(what="w", how="h", details={"k": 1})
        assert error.to_dict() == {
            "error_type": "TimemanError",
            "what": "w",
            "how": "h",
            "details": {"k": 1},
        }


class TestSubclasses:
    """各个子类的附加字段。"""

    @pytest.mark.parametrize(
        "cls",
        [ConfigLoadError, ConfigValidationError, EffortModeError, InvalidStepError, SessionStateError],
    )
    def test_inherits_base(self, cls: type[TimemanError]) -> None:
        assert issubclass(cls, TimemanError)
        with pytest.raises(TimemanError):
            raise cls(what="x")

    def test_config_validation_fields(self) -> None:
        error = ConfigValidationError(
            what="校验失败",
            config_path="timeman.yaml",
            field_path="options.move_overhead",
        )
        assert error.config_path == "timeman.yaml"
        assert error.field_path == "options.move_overhead"
        assert error.to_dict()["details"]["field_path"] == "options.move_overhead"

    def test_config_load_fields(self) -> None:
        error = ConfigLoadError(what="读不到", file_path="a.yaml", extra="x")
        assert error.file_path == "a.yaml"
        assert error.details == {"file_path": "a.yaml", "extra": "x"}

    def test_invalid_step_fields(self) -> None:
        error = InvalidStepError(what="ply 非法", ply=-3)
        assert error.ply == -3
        assert error.to_dict()["error_type"] == "InvalidStepError"
