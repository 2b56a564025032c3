"""Glob-based exclusion lists for analysis tools."""

from .errors import (
    ConfigIOError,
    ExcludeError,
    InvalidPatternError,
    MalformedConfigError,
    MatchEvaluationError,
    PathResolutionError,
    SettingsError,
)
from .exclusion_set import ExclusionSet, MatchResult, MatchStatus, load_from_bytes, load_from_file

__all__ = [
    "ExclusionSet",
    "MatchResult",
    "MatchStatus",
    "load_from_bytes",
    "load_from_file",
    "ExcludeError",
    "MalformedConfigError",
    "InvalidPatternError",
    "PathResolutionError",
    "MatchEvaluationError",
    "ConfigIOError",
    "SettingsError",
]
