"""表数据导出

每张表导出为一个 CSV 文件：第一行为逗号连接的列名，
随后是 COPY ... TO STDOUT WITH CSV 的原始输出。
列名不做转义。
"""

from typing import Optional

from loguru import logger

from .cluster import ClusterClient
from .constants import ExportStage, TableSpec
from .errors import FileWriteError, QueryError
from .models import TimeRange
from .staging import StagingArea
from .timeutil import end_time, format_sql_timestamp, start_time


def build_copy_query(table: TableSpec, time_range: Optional[TimeRange]) -> str:
    """构造 COPY 语句

    表配置了时间列时按整点取整后的时间窗口过滤，否则导出全表

    Args:
        table: 表定义
        time_range: 时间窗口

    Returns:
        COPY 语句
    """
    where = ""
    if table.time_column and time_range is not None:
        where = (
            f" WHERE {table.time_column} BETWEEN "
            f"'{format_sql_timestamp(start_time(time_range.start))}' AND "
            f"'{format_sql_timestamp(end_time(time_range.end))}'"
        )
    return f"COPY (SELECT * FROM {table.qualified_name}{where}) TO STDOUT WITH CSV"


class TableExporter:
    """表导出器"""

    def __init__(
        self,
        client: ClusterClient,
        staging: StagingArea,
        time_range: TimeRange,
    ):
        """初始化表导出器

        Args:
            client: 集群客户端
            staging: 暂存区
            time_range: 时间窗口（未取整）
        """
        self.client = client
        self.staging = staging
        self.time_range = time_range

    async def export_table(self, table: TableSpec) -> int:
        """导出单张表

        Args:
            table: 表定义

        Returns:
            写入文件的字节数（含表头）

        Raises:
            QueryError: 查询失败
            FileWriteError: 写文件失败
        """
        path = self.staging.table_file(table)

        try:
            headers = await self.client.column_names(table)
            query = build_copy_query(table, self.time_range)
            logger.info(query)

            with open(path, "wb") as f:
                header = (",".join(headers) + "\n").encode("utf-8")
                f.write(header)
                written = await self.client.copy_to(query, f)
        except QueryError as e:
            raise QueryError(
                f"导出表 {table.qualified_name} 数据失败: {e}",
                ExportStage.TABLES,
            ) from e
        except OSError as e:
            raise FileWriteError(
                f"写入 {path.name} 失败: {e}", ExportStage.TABLES
            ) from e

        return len(header) + written

    async def export_tables(self, tables: tuple[TableSpec, ...]) -> dict[str, int]:
        """依次导出所有表，任一失败立即中止

        Returns:
            {库.表: 字节数}
        """
        stats: dict[str, int] = {}
        for table in tables:
            logger.info(f" 导出表 '{table.qualified_name}'")
            stats[table.qualified_name] = await self.export_table(table)
        return stats


__all__ = ["TableExporter", "build_copy_query"]
