"""导出模块

提供集群负载诊断数据的导出和打包功能
"""

from .constants import (
    EXPORT_TABLES,
    METADATA_FILENAME,
    SYSTEM_DATABASES,
    ZONE_CONFIGURATIONS_FILENAME,
    ExportManifest,
    ExportResult,
    ExportStage,
    TableSpec,
)
from .errors import (
    ArchiveError,
    ConnectionSetupError,
    ConnectionStringError,
    ExportError,
    FileWriteError,
    QueryError,
)
from .models import ExportConfig, TimeRange
from .redact import clean_connection_string
from .timeutil import end_time, format_duration, start_time
from .exporter import WorkloadExporter, run_export

__all__ = [
    "EXPORT_TABLES",
    "METADATA_FILENAME",
    "SYSTEM_DATABASES",
    "ZONE_CONFIGURATIONS_FILENAME",
    "ExportManifest",
    "ExportResult",
    "ExportStage",
    "TableSpec",
    "ArchiveError",
    "ConnectionSetupError",
    "ConnectionStringError",
    "ExportError",
    "FileWriteError",
    "QueryError",
    "ExportConfig",
    "TimeRange",
    "clean_connection_string",
    "end_time",
    "format_duration",
    "start_time",
    "WorkloadExporter",
    "run_export",
]
