"""Path normalization utilities for pathexclude."""

from __future__ import annotations

import os  # os.path 做纯词法的路径拼接与清理

from ..errors import PathResolutionError


def resolve_base_dir(base_dir: str | os.PathLike[str] | None = None) -> str:
    """返回用于解析相对模式的绝对基目录。

    未显式提供时读取进程当前工作目录，这是唯一读取环境状态的位置。
    """
    if base_dir is None:  # 仅在最外层回退到 cwd
        try:
            base = os.getcwd()
        except OSError as exc:  # cwd 被删除等情况
            raise PathResolutionError(f"unable to determine working directory: {exc}") from exc
    else:
        base = os.fspath(base_dir)
    if not os.path.isabs(base):  # 相对基目录仍需借助 cwd 转为绝对路径
        try:
            base = os.path.abspath(base)
        except OSError as exc:
            raise PathResolutionError(f"unable to get absolute base: base={base} err={exc}") from exc
    return os.path.normpath(base)


def canonicalize_pattern(pattern: str, base_dir: str) -> str:
    """将模式转换为绝对模式：绝对模式只做清理，相对模式先拼接基目录。"""
    if os.path.isabs(pattern):  # 已是绝对模式
        return os.path.normpath(pattern)
    return os.path.normpath(os.path.join(base_dir, pattern))  # 拼接后清理 . 与 ..
