"""pathexclude 项目使用的常量定义。"""

DEFAULT_EXCLUDE_FILE = "exclude.json"
DEFAULT_CONFIG_FILE = "pathexclude.yaml"
DEFAULT_LOG_LEVEL = "info"

MATCH_ERROR_SKIP = "skip"
MATCH_ERROR_RAISE = "raise"
MATCH_ERROR_POLICIES = frozenset({MATCH_ERROR_SKIP, MATCH_ERROR_RAISE})
