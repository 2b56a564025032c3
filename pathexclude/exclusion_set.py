"""Exclusion list loading and path membership checks.

The exclusion document is a JSON object whose keys are glob patterns and whose
values explain why the matching files are excluded::

    {
        "testdata/testdata.go": "Tracked in issue #42"
    }

Relative patterns are resolved against a base directory (the process working
directory unless one is given) when the document is loaded.
"""

from __future__ import annotations

import enum
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Union

from .constants import MATCH_ERROR_POLICIES, MATCH_ERROR_RAISE, MATCH_ERROR_SKIP
from .errors import (
    ConfigIOError,
    InvalidPatternError,
    MalformedConfigError,
    MatchEvaluationError,
    SettingsError,
)
from .utils.globbing import CompiledGlob, GlobSyntaxError, compile_glob
from .utils.pathing import canonicalize_pattern, resolve_base_dir

LOGGER = logging.getLogger(__name__)

PathArg = Union[str, "os.PathLike[str]"]


class MatchStatus(enum.Enum):
    """单次查询的结果类别。"""

    MATCH = "match"
    NO_MATCH = "no_match"
    MATCH_ERROR = "match_error"


@dataclass(frozen=True, slots=True)
class MatchResult:
    """查询结果；仅 MATCH 为真值。"""

    status: MatchStatus
    pattern: Optional[str] = None
    reason: Optional[str] = None
    error: Optional[Exception] = None

    def __bool__(self) -> bool:
        return self.status is MatchStatus.MATCH


_NO_MATCH = MatchResult(MatchStatus.NO_MATCH)


def _check_policy(policy: str) -> str:
    if policy not in MATCH_ERROR_POLICIES:
        raise SettingsError(f"unknown on_match_error policy: {policy!r}")
    return policy


def _check_entry(pattern: object, reason: object) -> None:
    """模式与原因都必须是字符串。"""
    if not isinstance(pattern, str):
        raise MalformedConfigError(f"pattern must be a string, got {type(pattern).__name__}")
    if not isinstance(reason, str):
        raise MalformedConfigError(
            f"reason for pattern {pattern!r} must be a string, got {type(reason).__name__}"
        )


class ExclusionSet:
    """规范化 glob 模式到排除原因的只读映射。

    构造时逐条校验语法并转为绝对模式，遇到第一个错误即中止。
    构造完成后不再变化，可供多个线程并发查询；没有条目时不排除任何路径。
    """

    __slots__ = ("_entries", "_compiled", "_order", "_base_dir", "_on_match_error")

    def __init__(
        self,
        entries: Optional[Mapping[str, str]] = None,
        *,
        base_dir: Optional[PathArg] = None,
        on_match_error: str = MATCH_ERROR_SKIP,
    ) -> None:
        self._on_match_error = _check_policy(on_match_error)
        # 显式基目录立即解析；否则仅在遇到相对模式时读取 cwd
        self._base_dir: Optional[str] = resolve_base_dir(base_dir) if base_dir is not None else None
        canonical: Dict[str, str] = {}
        compiled: Dict[str, CompiledGlob] = {}
        for pattern, reason in (entries or {}).items():
            _check_entry(pattern, reason)
            absolute, glob = self._canonicalize(pattern)
            if absolute in canonical:
                LOGGER.debug("pattern %s overrides earlier entry for %s", pattern, absolute)
            canonical[absolute] = reason
            compiled[absolute] = glob
        self._entries: Mapping[str, str] = MappingProxyType(canonical)
        self._compiled: Mapping[str, CompiledGlob] = MappingProxyType(compiled)
        # 固定的评估顺序，保证日志可复现
        self._order = tuple(sorted(canonical))

    def _canonicalize(self, pattern: str) -> tuple[str, CompiledGlob]:
        """校验原始模式并返回 (绝对模式, 编译结果)。"""
        try:
            compile_glob(pattern)  # 语法探测
        except GlobSyntaxError as exc:
            raise InvalidPatternError(pattern, exc) from exc
        if self._base_dir is None and not os.path.isabs(pattern):
            self._base_dir = resolve_base_dir()
        absolute = canonicalize_pattern(pattern, self._base_dir or "")
        try:
            # 路径清理可能改变模式文本
            return absolute, compile_glob(absolute)
        except GlobSyntaxError as exc:
            raise InvalidPatternError(pattern, exc) from exc

    @property
    def patterns(self) -> Mapping[str, str]:
        """canonical pattern -> reason 的只读视图。"""
        return self._entries

    @property
    def base_dir(self) -> Optional[str]:
        return self._base_dir

    @property
    def on_match_error(self) -> str:
        return self._on_match_error

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._entries

    def __repr__(self) -> str:
        return f"ExclusionSet(patterns={len(self)}, base_dir={self._base_dir!r})"

    def match(self, path: PathArg) -> MatchResult:
        """按排序后的模式逐个匹配 path 并返回 MatchResult。

        命中时返回 MATCH 及其模式与原因。求值失败的模式在 skip 策略下记录日志并跳过，
        若其余模式均未命中则返回第一个失败的 MATCH_ERROR；raise 策略下直接抛出
        MatchEvaluationError。
        """
        candidate = os.fspath(path)
        first_error: Optional[MatchResult] = None
        for pattern in self._order:
            try:
                matched = self._compiled[pattern].match(candidate)
            except (TypeError, ValueError) as exc:
                if self._on_match_error == MATCH_ERROR_RAISE:
                    raise MatchEvaluationError(pattern, candidate, exc) from exc
                LOGGER.warning("pattern %s failed to evaluate against %r: %s", pattern, candidate, exc)
                if first_error is None:
                    first_error = MatchResult(MatchStatus.MATCH_ERROR, pattern=pattern, error=exc)
                continue
            if matched:
                LOGGER.debug("%s excluded by %s", candidate, pattern)
                return MatchResult(MatchStatus.MATCH, pattern=pattern, reason=self._entries[pattern])
        return first_error or _NO_MATCH

    def excluded(self, path: PathArg) -> bool:
        """任一模式命中即返回 True。"""
        return bool(self.match(path))

    def reason_for(self, path: PathArg) -> Optional[str]:
        """返回命中模式的原因，未命中时返回 None。"""
        return self.match(path).reason


def _decode_document(data: Union[bytes, bytearray, str]) -> Dict[str, str]:
    """解析 JSON 文档并校验为 string -> string 的对象。"""
    if isinstance(data, (bytes, bytearray)):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedConfigError(f"exclude config is not valid UTF-8: {exc}") from exc
    else:
        text = data
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedConfigError(f"exclude config is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise MalformedConfigError(f"exclude config must be a JSON object, got {type(raw).__name__}")
    for pattern, reason in raw.items():
        _check_entry(pattern, reason)
    return raw


def load_from_bytes(
    data: Union[bytes, bytearray, str],
    *,
    base_dir: Optional[PathArg] = None,
    on_match_error: str = MATCH_ERROR_SKIP,
) -> ExclusionSet:
    """解析排除配置并返回 ExclusionSet。

    Args:
        data: UTF-8 编码的 JSON 对象（pattern -> reason）。
        base_dir: 相对模式的基目录，缺省为当前工作目录。
        on_match_error: 查询时模式求值失败的处理策略，skip 或 raise。

    Returns:
        完整构建的 ExclusionSet；遇到第一个错误即抛出，不返回部分结果。
    """
    _check_policy(on_match_error)
    raw = _decode_document(data)
    exclusions = ExclusionSet(raw, base_dir=base_dir, on_match_error=on_match_error)
    LOGGER.info("loaded %d exclusion pattern(s)", len(exclusions))
    return exclusions


def load_from_file(
    path: PathArg,
    *,
    base_dir: Optional[PathArg] = None,
    on_match_error: str = MATCH_ERROR_SKIP,
) -> ExclusionSet:
    """从文件读取排除配置；相对模式仍相对 base_dir（默认 cwd），而非文件所在目录。"""
    file_path = Path(path).expanduser()
    try:
        data = file_path.read_bytes()
    except OSError as exc:
        raise ConfigIOError(f"unable to read exclude config {file_path}: {exc}") from exc
    LOGGER.debug("read exclude config %s (%d bytes)", file_path, len(data))
    return load_from_bytes(data, base_dir=base_dir, on_match_error=on_match_error)


__all__ = [
    "ExclusionSet",
    "MatchResult",
    "MatchStatus",
    "load_from_bytes",
    "load_from_file",
]
