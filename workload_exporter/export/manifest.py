"""导出清单"""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from loguru import logger

from ..version import EXPORTER_VERSION
from .constants import ExportManifest, ExportStage
from .errors import FileWriteError
from .models import ExportConfig
from .timeutil import format_duration


def build_manifest(
    config: ExportConfig,
    cluster_version: str,
    aggregation_interval: timedelta,
    flush_interval: timedelta,
    timestamp: Optional[datetime] = None,
) -> ExportManifest:
    """生成导出清单

    Args:
        config: 已脱敏的导出配置
        cluster_version: 集群版本
        aggregation_interval: sql.stats.aggregation.interval
        flush_interval: sql.stats.flush.interval
        timestamp: 导出时间，默认为当前时间

    Returns:
        导出清单
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    return ExportManifest(
        version=EXPORTER_VERSION,
        timestamp=timestamp.isoformat(),
        export_config=config.to_dict(),
        cluster_version=cluster_version,
        aggregation_interval=format_duration(aggregation_interval),
        flush_interval=format_duration(flush_interval),
    )


def write_manifest(manifest: ExportManifest, path: Path) -> Path:
    """写入清单，已存在的文件会被覆盖"""
    manifest_json = json.dumps(manifest.to_dict(), ensure_ascii=False, indent=2)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(manifest_json)
    except OSError as e:
        raise FileWriteError(
            f"写入元数据文件失败: {e}", ExportStage.MANIFEST
        ) from e

    logger.debug(f"已写入元数据 '{path}'")
    return path


__all__ = ["build_manifest", "write_manifest"]
