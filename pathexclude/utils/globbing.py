"""Shell-style glob compilation with path-segment aware wildcards.

Unlike :func:`fnmatch.fnmatch`, ``*`` and ``?`` never match a path separator,
so ``/repo/*.go`` matches ``/repo/main.go`` but not ``/repo/sub/main.go``.

A pattern is split into star-free chunks. Each chunk has a fixed width and
compiles to its own small regex. Stars are resolved by scanning for the
earliest position where the next chunk matches. That scan never backtracks,
so a match costs at most ``len(pattern) * len(name)`` steps, whatever
the number of stars.

The grammar deliberately differs from Go's ``filepath.Match`` in a few places:
- ``[!...]`` negates a class just like ``[^...]``;
- a reversed range such as ``[z-a]`` is a syntax error rather than a class
  that never matches;
- character classes never match a separator.
"""

from __future__ import annotations

import os  # os.sep/os.altsep 决定分隔符集合
import re  # 每个无星号片段翻译为定宽正则
from typing import List, Optional, Tuple

# 需要被通配符排除的分隔符
_SEPARATORS = "".join(sorted({"/", os.sep} | ({os.altsep} if os.altsep else set())))
# Windows 下反斜杠是分隔符，不作为转义字符
_ESCAPE_ENABLED = os.sep != "\\"
_NOT_SEP = f"[^{re.escape(_SEPARATORS)}]"
_SEP_RE = re.compile(f"[{re.escape(_SEPARATORS)}]")


class GlobSyntaxError(ValueError):
    """glob 语法错误。"""


def _class_literal(char: str) -> str:
    """字符类内部的字面量转义。"""

    if char in "\\]^-[":
        return "\\" + char
    return char


def _read_class_char(pattern: str, i: int) -> tuple[str, int]:
    """读取字符类中的单个字符（处理转义），返回字符与新下标。"""

    n = len(pattern)
    if i >= n:
        raise GlobSyntaxError("unterminated character class")
    char = pattern[i]
    if char == "\\" and _ESCAPE_ENABLED:
        i += 1
        if i >= n:
            raise GlobSyntaxError("unterminated character class")
        return pattern[i], i + 1
    if char == "-":
        raise GlobSyntaxError("unescaped '-' in character class")
    if char == "]":
        raise GlobSyntaxError("missing range bound")
    return char, i + 1


def _translate_class(pattern: str, i: int) -> tuple[str, int]:
    """翻译 ``[...]``，``i`` 指向左括号之后。"""

    n = len(pattern)
    negate = i < n and pattern[i] in "!^"
    if negate:
        i += 1
    items: list[str] = []
    while True:
        if i >= n:
            raise GlobSyntaxError("unterminated character class")
        if pattern[i] == "]":
            i += 1
            break
        lo, i = _read_class_char(pattern, i)
        hi = lo
        if i < n and pattern[i] == "-":
            hi, i = _read_class_char(pattern, i + 1)
            if hi < lo:
                raise GlobSyntaxError(f"reversed range {lo}-{hi}")
        items.append(_class_literal(lo) if lo == hi else f"{_class_literal(lo)}-{_class_literal(hi)}")
    if not items:
        raise GlobSyntaxError("empty character class")
    body = "".join(items)
    # 字符类同样不跨越路径分隔符
    return f"(?![{re.escape(_SEPARATORS)}])[{'^' if negate else ''}{body}]", i


# (前面是否有星号, 片段正则；None 表示模式以星号结尾)
_Chunk = Tuple[bool, Optional["re.Pattern[str]"]]


def _scan_chunks(pattern: str) -> List[_Chunk]:
    """把模式切分为“可选星号 + 定宽片段”的序列，连续星号等价于单个。"""

    chunks: List[_Chunk] = []
    star = False
    parts: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        char = pattern[i]
        i += 1
        if char == "*":
            if parts:
                chunks.append((star, re.compile("".join(parts))))
                parts = []
            star = True
            continue
        if char == "?":
            parts.append(_NOT_SEP)
        elif char == "[":
            translated, i = _translate_class(pattern, i)
            parts.append(translated)
        elif char == "\\" and _ESCAPE_ENABLED:
            if i >= n:
                raise GlobSyntaxError("trailing escape character")
            parts.append(re.escape(pattern[i]))
            i += 1
        else:
            parts.append(re.escape(char))
    if parts:
        chunks.append((star, re.compile("".join(parts))))
    elif star:
        chunks.append((True, None))
    return chunks


class CompiledGlob:
    """已编译的 glob 模式；实例不可变，可被多个线程共享。"""

    __slots__ = ("pattern", "_chunks")

    def __init__(self, pattern: str, chunks: List[_Chunk]) -> None:
        self.pattern = pattern
        self._chunks = tuple(chunks)

    def __repr__(self) -> str:
        return f"CompiledGlob({self.pattern!r})"

    def match(self, name: str) -> bool:
        """判断 name 是否完整匹配；name 不是 str 时抛出 TypeError。"""

        if not isinstance(name, str):
            raise TypeError(f"glob can only match str paths, got {type(name).__name__}")
        pos, end = 0, len(name)
        last = len(self._chunks) - 1
        for index, (star, chunk) in enumerate(self._chunks):
            if chunk is None:
                # 结尾的星号吞掉剩余部分，但不能跨越分隔符
                return _SEP_RE.search(name, pos) is None
            final = index == last
            hit = chunk.match(name, pos)
            if hit is not None and (not final or hit.end() == end):
                pos = hit.end()
                continue
            if not star:
                return False
            # 星号每次多吞一个字符，取最早可行的位置，不回溯
            skip = pos
            while skip < end and name[skip] not in _SEPARATORS:
                skip += 1
                hit = chunk.match(name, skip)
                if hit is not None and (not final or hit.end() == end):
                    pos = hit.end()
                    break
            else:
                return False
        return pos == end


def compile_glob(pattern: str) -> CompiledGlob:
    """编译 glob 模式；语法错误抛出 GlobSyntaxError。"""

    return CompiledGlob(pattern, _scan_chunks(pattern))


def glob_match(pattern: str, name: str) -> bool:
    """判断 name 是否完整匹配 pattern。

    Args:
        pattern: glob 模式。
        name: 待匹配的路径字符串，必须是 str。

    Returns:
        匹配则返回 True。
    """

    return compile_glob(pattern).match(name)
