"""Logging bootstrap driven by the ``logging:`` settings section."""

from __future__ import annotations

import logging  # 标准库 logging 提供灵活的日志框架
from pathlib import Path  # Path 便于跨平台处理文件路径
from typing import TYPE_CHECKING, Optional

from rich.logging import RichHandler  # RichHandler 提供彩色控制台输出

if TYPE_CHECKING:  # 仅用于类型提示，避免与 config 循环导入
    from .config import LoggingConfig

_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _resolve_level(level: str | int) -> Optional[int]:
    """把级别名或数值转为 logging 常量，无法识别时返回 None。"""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())  # 未知名称返回字符串
    return value if isinstance(value, int) else None


def init_logging(level: str | int, logfile: Optional[str | Path] = None) -> None:
    """初始化根日志：控制台走 rich，可选追加 UTF-8 文件日志；库导入时不做任何配置。"""
    resolved = _resolve_level(level)
    console = RichHandler(rich_tracebacks=True, show_time=True, markup=False)
    console.setFormatter(logging.Formatter("%(name)s | %(message)s"))  # 时间与级别由 rich 渲染
    handlers: list[logging.Handler] = [console]
    if logfile:
        log_path = Path(logfile)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)
    logging.basicConfig(level=logging.INFO if resolved is None else resolved, handlers=handlers, force=True)
    if resolved is None:
        logging.getLogger(__name__).warning("Unsupported log level %r, fallback to INFO", level)


def configure_logging(cfg: "LoggingConfig") -> None:
    """按设置文件的 logging 段初始化日志。"""
    init_logging(cfg.level, cfg.file)
