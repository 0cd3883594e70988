"""导出配置

提供配置 Schema、验证和加载
"""

from .schema import (
    EXPORT_CONFIG_SCHEMA,
    EXPORT_CONFIG_SCHEMA_NAME,
    DEFAULT_OUTPUT_FILE,
    get_default_config,
)
from .validator import ConfigValidationError, ConfigValidator, get_validator
from .loader import (
    ENV_VARS,
    parse_timestamp,
    load_config_file,
    resolve_config,
    build_export_config,
    load_export_config,
)

__all__ = [
    "EXPORT_CONFIG_SCHEMA",
    "EXPORT_CONFIG_SCHEMA_NAME",
    "DEFAULT_OUTPUT_FILE",
    "get_default_config",
    "ConfigValidationError",
    "ConfigValidator",
    "get_validator",
    "ENV_VARS",
    "parse_timestamp",
    "load_config_file",
    "resolve_config",
    "build_export_config",
    "load_export_config",
]
