"""集群查询

导出过程中对集群发出的全部查询。每个方法都是一次完整的往返，
执行完毕后才返回，驱动层异常统一包装为 QueryError。
"""

from datetime import timedelta
from typing import Any, BinaryIO, Iterable

import psycopg
from loguru import logger

from .constants import SYSTEM_DATABASES, ExportStage, TableSpec
from .errors import QueryError


def quote_identifier(name: str) -> str:
    """将标识符加上双引号（内部双引号加倍）"""
    return '"' + name.replace('"', '""') + '"'


class ClusterClient:
    """集群查询客户端

    封装一个已建立的 psycopg 异步连接，串行使用
    """

    def __init__(self, conn: psycopg.AsyncConnection):
        """初始化客户端

        Args:
            conn: 已建立的集群连接
        """
        self.conn = conn

    async def _fetch_value(self, query: str) -> Any:
        async with self.conn.cursor() as cur:
            await cur.execute(query)
            row = await cur.fetchone()
        if row is None:
            raise psycopg.DataError(f"查询未返回任何行: {query}")
        return row[0]

    async def _fetch_column(self, query: str) -> list[Any]:
        async with self.conn.cursor() as cur:
            await cur.execute(query)
            rows = await cur.fetchall()
        return [row[0] for row in rows]

    async def cluster_version(self) -> str:
        """获取集群版本字符串"""
        try:
            return await self._fetch_value("SELECT version()")
        except psycopg.Error as e:
            raise QueryError(
                f"获取集群版本失败: {e}", ExportStage.CLUSTER_METADATA
            ) from e

    async def cluster_setting_duration(self, name: str) -> timedelta:
        """获取时长类型的集群设置

        Args:
            name: 设置名，如 sql.stats.flush.interval

        Returns:
            设置值
        """
        try:
            value = await self._fetch_value(f"SHOW CLUSTER SETTING {name}")
        except psycopg.Error as e:
            raise QueryError(
                f"获取 {name} 失败: {e}", ExportStage.CLUSTER_METADATA
            ) from e

        if not isinstance(value, timedelta):
            raise QueryError(
                f"获取 {name} 失败: 期望时长类型，实际为 {value!r}",
                ExportStage.CLUSTER_METADATA,
            )
        return value

    async def user_databases(
        self, system_databases: Iterable[str] = SYSTEM_DATABASES
    ) -> list[str]:
        """列出非系统数据库，保持服务端返回的顺序

        Args:
            system_databases: 需要排除的系统数据库名（精确匹配，区分大小写）

        Returns:
            用户数据库列表
        """
        excluded = frozenset(system_databases)
        try:
            names = await self._fetch_column(
                "SELECT database_name FROM [SHOW DATABASES]"
            )
        except psycopg.Error as e:
            raise QueryError(
                f"获取用户数据库失败: {e}", ExportStage.DATABASES
            ) from e

        return [name for name in names if name not in excluded]

    async def create_statements(self, database: str) -> list[str]:
        """获取数据库中所有 CREATE 语句

        会切换当前会话的数据库
        """
        try:
            async with self.conn.cursor() as cur:
                await cur.execute(f"USE {quote_identifier(database)}")
            return await self._fetch_column(
                "SELECT create_statement FROM [SHOW CREATE ALL TABLES]"
            )
        except psycopg.Error as e:
            raise QueryError(
                f"获取数据库 {database} 的建表语句失败: {e}",
                ExportStage.SCHEMAS,
            ) from e

    async def zone_configurations(self) -> list[str]:
        """获取所有区域配置的原始 SQL（过滤空值）"""
        try:
            configs = await self._fetch_column(
                "WITH z AS (SHOW ALL ZONE CONFIGURATIONS) "
                "SELECT raw_config_sql FROM z WHERE raw_config_sql IS NOT NULL"
            )
        except psycopg.Error as e:
            raise QueryError(
                f"查询区域配置失败: {e}",
                ExportStage.ZONE_CONFIGURATIONS,
            ) from e

        return [config for config in configs if config is not None]

    async def column_names(self, table: TableSpec) -> list[str]:
        """通过零行查询获取表的列名"""
        try:
            async with self.conn.cursor() as cur:
                await cur.execute(f"SELECT * FROM {table.qualified_name} LIMIT 0")
                description = cur.description or []
        except psycopg.Error as e:
            raise QueryError(
                f"获取表 {table.qualified_name} 的列失败: {e}",
                ExportStage.TABLES,
            ) from e

        return [column.name for column in description]

    async def copy_to(self, query: str, sink: BinaryIO) -> int:
        """执行 COPY ... TO STDOUT，将数据流式写入 sink

        Args:
            query: COPY 语句
            sink: 以二进制模式打开的文件

        Returns:
            写入字节数
        """
        written = 0
        try:
            async with self.conn.cursor() as cur:
                async with cur.copy(query) as copy:
                    async for data in copy:
                        sink.write(data)
                        written += len(data)
        except psycopg.Error as e:
            raise QueryError(f"COPY 失败: {e}", ExportStage.TABLES) from e

        logger.debug(f"已复制 {written} 字节")
        return written


__all__ = ["ClusterClient", "quote_identifier"]
