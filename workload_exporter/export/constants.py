"""导出模块常量

定义导出流水线共享的文件名、表清单和结果结构
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional


METADATA_FILENAME = "metadata.json"
ZONE_CONFIGURATIONS_FILENAME = "zone_configurations.txt"
STAGING_DIR_PREFIX = "crdb-export-"

SQL_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
"""时间过滤条件中使用的字面量格式（不带时区后缀）"""

AGGREGATION_INTERVAL_SETTING = "sql.stats.aggregation.interval"
FLUSH_INTERVAL_SETTING = "sql.stats.flush.interval"


@dataclass(frozen=True)
class TableSpec:
    """导出表定义"""

    database: str
    """所属数据库"""

    name: str
    """表名"""

    time_column: Optional[str] = None
    """用于时间过滤的列，None 表示导出全表"""

    @property
    def qualified_name(self) -> str:
        return f"{self.database}.{self.name}"

    @property
    def filename(self) -> str:
        return f"{self.database}.{self.name}.csv"


EXPORT_TABLES: tuple[TableSpec, ...] = (
    TableSpec("crdb_internal", "statement_statistics", "aggregated_ts"),
    TableSpec("crdb_internal", "transaction_statistics", "aggregated_ts"),
    TableSpec("crdb_internal", "transaction_contention_events", "collection_ts"),
    TableSpec("crdb_internal", "gossip_nodes"),
)

SYSTEM_DATABASES: frozenset[str] = frozenset({"system", "crdb_internal", "postgres"})


@dataclass(frozen=True)
class ExportManifest:
    """导出清单（写入 metadata.json）"""

    version: str
    """导出器版本"""

    timestamp: str
    """导出时间（ISO格式）"""

    export_config: Dict[str, Any]
    """导出配置（连接串已去除密码）"""

    cluster_version: str
    """集群版本字符串"""

    aggregation_interval: str
    """sql.stats.aggregation.interval"""

    flush_interval: str
    """sql.stats.flush.interval"""

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "version": self.version,
            "timestamp": self.timestamp,
            "export_config": self.export_config,
            "cluster_version": self.cluster_version,
            AGGREGATION_INTERVAL_SETTING: self.aggregation_interval,
            FLUSH_INTERVAL_SETTING: self.flush_interval,
        }


@dataclass
class ExportResult:
    """导出操作结果"""

    success: bool
    """是否成功"""

    output_file: str = ""
    """输出文件路径"""

    message: str = ""
    """结果消息"""

    size: int = 0
    """压缩包大小（字节）"""

    files: List[str] = field(default_factory=list)
    """压缩包内的文件列表"""

    databases: List[str] = field(default_factory=list)
    """导出 Schema 的用户数据库"""

    tables: Dict[str, int] = field(default_factory=dict)
    """各表写入字节数 {库.表: 字节数}"""

    errors: List[str] = field(default_factory=list)
    """错误列表"""

    duration: float = 0.0
    """耗时（秒）"""


class ExportStage:
    """导出阶段常量"""

    INITIALIZATION = "initialization"
    CLUSTER_METADATA = "cluster_metadata"
    DATABASES = "databases"
    SCHEMAS = "schemas"
    ZONE_CONFIGURATIONS = "zone_configurations"
    TABLES = "tables"
    MANIFEST = "manifest"
    ARCHIVE = "archive"
    FINALIZATION = "finalization"


__all__ = [
    "METADATA_FILENAME",
    "ZONE_CONFIGURATIONS_FILENAME",
    "STAGING_DIR_PREFIX",
    "SQL_TIMESTAMP_FORMAT",
    "AGGREGATION_INTERVAL_SETTING",
    "FLUSH_INTERVAL_SETTING",
    "TableSpec",
    "EXPORT_TABLES",
    "SYSTEM_DATABASES",
    "ExportManifest",
    "ExportResult",
    "ExportStage",
]
