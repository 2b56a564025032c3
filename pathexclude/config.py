"""Settings loading and validation for pathexclude."""

from __future__ import annotations

from dataclasses import dataclass  # dataclass 用于定义结构化配置对象
from pathlib import Path  # Path 提供跨平台路径处理
from typing import Any, Dict, Optional

import yaml  # PyYAML 用于解析配置文件

from .constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_EXCLUDE_FILE,
    DEFAULT_LOG_LEVEL,
    MATCH_ERROR_POLICIES,
    MATCH_ERROR_SKIP,
)
from .errors import ConfigIOError, SettingsError
from .exclusion_set import ExclusionSet, load_from_file
from .logging_setup import configure_logging


@dataclass(slots=True)
class ExcludeSection:
    """排除列表相关配置。"""

    file: Path  # 排除配置 JSON 的绝对路径
    base_dir: Optional[Path]  # 相对模式的基目录，None 表示加载时的 cwd
    on_match_error: str  # skip 或 raise


@dataclass(slots=True)
class LoggingConfig:
    """日志配置。"""

    level: str  # 日志级别
    file: Optional[Path]  # 日志文件


@dataclass(slots=True)
class ExcludeConfig:
    """聚合所有配置段的顶层对象。"""

    exclude: ExcludeSection  # 排除列表配置
    logging: LoggingConfig  # 日志配置


def _relative_to(base: Path, value: str) -> Path:
    """相对配置文件目录解析路径，不触碰符号链接。"""
    candidate = Path(value).expanduser()  # 展开 ~
    if candidate.is_absolute():  # 绝对路径原样使用
        return candidate
    return base / candidate  # 相对路径挂到配置文件目录下


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    """读取配置段，缺失视为空字典。"""
    value = raw.get(name) or {}  # 缺失或 null 均回退为空
    if not isinstance(value, dict):  # 配置段必须是映射
        raise SettingsError(f"Section '{name}' must be a mapping")
    return value


def _load_yaml(path: Path) -> dict:
    """辅助函数：读取 YAML 文件并返回字典。"""
    try:
        with path.open("r", encoding="utf-8") as f:  # 打开文件，使用 UTF-8 编码
            data = yaml.safe_load(f) or {}  # 安全解析 YAML，空文件回退为空字典
    except OSError as exc:  # 读取失败
        raise ConfigIOError(f"Config file {path} could not be read: {exc}") from exc
    except yaml.YAMLError as exc:  # YAML 语法错误
        raise SettingsError(f"Config file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):  # 若顶层不是 dict 则抛错
        raise SettingsError("Configuration root must be a mapping")
    return data


def load_config(config_path: str | Path = DEFAULT_CONFIG_FILE) -> ExcludeConfig:
    """加载并校验配置文件。"""
    path = Path(config_path).expanduser().absolute()  # 解析配置文件路径
    if not path.exists():  # 若文件不存在
        raise ConfigIOError(f"Config file {path} not found")
    raw = _load_yaml(path)  # 读取原始字典
    exclude_raw = _section(raw, "exclude")  # 获取 exclude 段
    logging_raw = _section(raw, "logging")  # 获取 logging 段
    policy = str(exclude_raw.get("on_match_error", MATCH_ERROR_SKIP)).lower()  # 读取失败策略
    if policy not in MATCH_ERROR_POLICIES:  # 仅允许 skip/raise
        raise SettingsError(f"Invalid on_match_error policy: {policy}")
    base_dir_value = exclude_raw.get("base_dir")  # 可选基目录
    exclude = ExcludeSection(  # 构造 ExcludeSection
        file=_relative_to(path.parent, str(exclude_raw.get("file") or DEFAULT_EXCLUDE_FILE)),
        base_dir=_relative_to(path.parent, str(base_dir_value)) if base_dir_value else None,
        on_match_error=policy,
    )
    logging_config = LoggingConfig(  # 构造 LoggingConfig
        level=str(logging_raw.get("level") or DEFAULT_LOG_LEVEL),
        file=_relative_to(path.parent, str(logging_raw["file"])) if logging_raw.get("file") else None,
    )
    return ExcludeConfig(exclude=exclude, logging=logging_config)


def load_from_config(cfg: ExcludeConfig) -> ExclusionSet:
    """按配置读取排除列表文件并构建 ExclusionSet。"""
    return load_from_file(
        cfg.exclude.file,
        base_dir=cfg.exclude.base_dir,
        on_match_error=cfg.exclude.on_match_error,
    )


def load_exclusions(config_path: str | Path = DEFAULT_CONFIG_FILE, *, setup_logging: bool = True) -> ExclusionSet:
    """宿主工具的入口：读取设置、按 logging 段初始化日志，再加载排除列表。"""
    cfg = load_config(config_path)
    if setup_logging:  # 嵌入方已自行配置日志时可关闭
        configure_logging(cfg.logging)
    return load_from_config(cfg)
