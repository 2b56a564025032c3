"""Exception hierarchy for pathexclude."""

from __future__ import annotations


class ExcludeError(Exception):
    """排除列表相关错误的基类。"""


class MalformedConfigError(ExcludeError, ValueError):
    """排除配置不是 string -> string 的 JSON 对象。"""


class InvalidPatternError(ExcludeError, ValueError):
    """配置的模式不是合法 glob。"""

    def __init__(self, pattern: str, cause: Exception) -> None:
        super().__init__(f"invalid pattern: pattern={pattern} err={cause}")
        self.pattern = pattern
        self.cause = cause


class PathResolutionError(ExcludeError, OSError):
    """相对模式无法转换为绝对模式。"""


class MatchEvaluationError(ExcludeError, RuntimeError):
    """已加载的模式在查询时求值失败。"""

    def __init__(self, pattern: str, path: object, cause: Exception) -> None:
        super().__init__(f"pattern {pattern!r} failed against {path!r}: {cause}")
        self.pattern = pattern
        self.path = path
        self.cause = cause


class ConfigIOError(ExcludeError, OSError):
    """排除配置或设置文件无法读取。"""


class SettingsError(ExcludeError, ValueError):
    """YAML 设置不合法。"""


__all__ = [
    "ExcludeError",
    "MalformedConfigError",
    "InvalidPatternError",
    "PathResolutionError",
    "MatchEvaluationError",
    "ConfigIOError",
    "SettingsError",
]
