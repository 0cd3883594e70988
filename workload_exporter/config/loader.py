"""导出配置加载

按以下顺序合并配置，后者覆盖前者：

    默认值 -> JSON 配置文件 -> 环境变量 -> 命令行参数

合并结果经 JSON Schema 验证后转换为不可变的 ExportConfig。
"""

import json
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from loguru import logger

from ..export.models import ExportConfig, TimeRange
from .schema import EXPORT_CONFIG_SCHEMA_NAME, get_default_config
from .validator import ConfigValidationError, get_validator


ENV_VARS = {
    "connection_url": "WORKLOAD_EXPORTER_CONNECTION_URL",
    "output_file": "WORKLOAD_EXPORTER_OUTPUT_FILE",
}

# 秒的小数部分，位于字符串末尾或时区偏移之前
_FRACTION_RE = re.compile(r"\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")


def _normalize_fraction(match: "re.Match[str]") -> str:
    # datetime 只支持微秒精度，纳秒部分截断
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(value: str, key: str) -> datetime:
    """解析 RFC 3339 时间，必须带时区

    Args:
        value: 时间字符串，如 2025-04-18T13:45:30Z 或 2025-04-18T13:45:30.123456789+02:00
        key: 配置键，用于错误信息

    Returns:
        带时区的时间

    Raises:
        ConfigValidationError: 格式错误或缺少时区
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(_normalize_fraction, text, count=1)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ConfigValidationError(
            f"{key} 时间无效", errors=[f"{value!r} 不是 RFC 3339 时间"]
        ) from e

    if parsed.tzinfo is None:
        raise ConfigValidationError(
            f"{key} 时间无效", errors=[f"{value!r} 缺少时区偏移"]
        )
    return parsed


def load_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """从 JSON 文件加载配置

    Raises:
        ConfigValidationError: 文件不存在、无法读取或不是 JSON 对象
    """
    config_file = Path(path)
    if not config_file.exists():
        raise ConfigValidationError(f"配置文件不存在: {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"解析配置文件失败: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigValidationError(f"读取配置文件失败: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(f"配置文件必须是 JSON 对象: {config_file}")

    logger.debug(f"已从 {config_file} 加载配置")
    return data


def resolve_config(
    overrides: Optional[Mapping[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """合并各来源的配置

    Args:
        overrides: 命令行参数，值为 None 的键会被忽略
        config_file: JSON 配置文件路径
        environ: 环境变量，默认为 os.environ
        now: 计算默认时间窗口使用的当前时间

    Returns:
        合并后的配置字典
    """
    environ = os.environ if environ is None else environ

    values = get_default_config(now)

    if config_file:
        values.update(load_config_file(config_file))

    for key, env_name in ENV_VARS.items():
        if environ.get(env_name):
            values[key] = environ[env_name]

    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    return values


def build_export_config(values: Mapping[str, Any]) -> ExportConfig:
    """验证配置字典并转换为 ExportConfig

    Raises:
        ConfigValidationError: 配置无效
    """
    get_validator().validate(dict(values), EXPORT_CONFIG_SCHEMA_NAME)

    start = parse_timestamp(values["start"], "start")
    end = parse_timestamp(values["end"], "end")
    if start > end:
        raise ConfigValidationError(
            "时间范围无效", errors=[f"start {start} 晚于 end {end}"]
        )

    return ExportConfig(
        connection_string=values["connection_url"],
        output_file=values["output_file"],
        time_range=TimeRange(start=start, end=end),
    )


def load_export_config(
    overrides: Optional[Mapping[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    now: Optional[datetime] = None,
) -> ExportConfig:
    """加载并验证导出配置"""
    return build_export_config(resolve_config(overrides, config_file, environ, now))


__all__ = [
    "ENV_VARS",
    "parse_timestamp",
    "load_config_file",
    "resolve_config",
    "build_export_config",
    "load_export_config",
]
