"""负载导出器

按固定顺序执行导出流水线：

    连接 -> 收集集群元数据 -> 枚举数据库 -> 导出 Schema -> 导出区域配置
    -> 导出表数据 -> 写入清单 -> 打包 -> 清理

任一阶段失败都会中止后续阶段，暂存目录在任何情况下都会被删除。
"""

import time
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional

import psycopg
from loguru import logger

from .archiver import create_zip_file
from .cluster import ClusterClient
from .constants import (
    AGGREGATION_INTERVAL_SETTING,
    EXPORT_TABLES,
    FLUSH_INTERVAL_SETTING,
    SYSTEM_DATABASES,
    ExportResult,
    ExportStage,
    TableSpec,
)
from .dumpers import dump_schema, dump_zone_configurations
from .errors import ConnectionSetupError, ConnectionStringError, ExportError
from .manifest import build_manifest, write_manifest
from .models import ExportConfig
from .staging import StagingArea, format_size
from .table_exporter import TableExporter


ProgressCallback = Callable[[str, int, int, str], Awaitable[Any]]


class WorkloadExporter:
    """负载导出器

    持有一个集群连接，串行执行全部查询。支持 async with，退出时关闭连接。
    """

    def __init__(
        self,
        config: ExportConfig,
        conn: psycopg.AsyncConnection,
        tables: Iterable[TableSpec] = EXPORT_TABLES,
        system_databases: Iterable[str] = SYSTEM_DATABASES,
    ):
        """初始化导出器

        Args:
            config: 导出配置
            conn: 已建立的集群连接
            tables: 需要导出的表
            system_databases: 导出 Schema 时排除的系统数据库

        Raises:
            ConnectionStringError: 连接串无法解析
        """
        self.config = config
        self.clean_config = config.redacted()
        self.conn = conn
        self.client = ClusterClient(conn)
        self.tables = tuple(tables)
        self.system_databases = frozenset(system_databases)

    @classmethod
    async def connect(cls, config: ExportConfig, **kwargs: Any) -> "WorkloadExporter":
        """连接集群并创建导出器

        Args:
            config: 导出配置
            **kwargs: 传给构造函数的其他参数

        Returns:
            导出器

        Raises:
            ConnectionStringError: 连接串无法解析
            ConnectionSetupError: 连接失败
        """
        clean_config = config.redacted()
        logger.info(f"正在连接集群 '{clean_config.connection_string}'")

        try:
            conn = await psycopg.AsyncConnection.connect(
                config.connection_string, autocommit=True
            )
        except psycopg.Error as e:
            raise ConnectionSetupError(
                f"连接集群失败: {e}", ExportStage.INITIALIZATION
            ) from e

        return cls(config, conn, **kwargs)

    async def close(self) -> None:
        """关闭集群连接"""
        try:
            await self.conn.close()
        except psycopg.Error as e:
            logger.warning(f"关闭连接失败: {e}")

    async def __aenter__(self) -> "WorkloadExporter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def export(
        self, progress_callback: Optional[ProgressCallback] = None
    ) -> ExportResult:
        """执行导出

        Args:
            progress_callback: 进度回调函数 (stage, current, total, message)

        Returns:
            导出结果

        Raises:
            ExportError: 任一阶段失败
        """
        start = time.time()
        time_range = self.config.time_range

        logger.info("开始导出")
        logger.info(f"时间范围: {time_range.start} - {time_range.end}")
        await self._report(
            progress_callback, ExportStage.INITIALIZATION, "初始化导出..."
        )

        try:
            staging = StagingArea.create()
        except OSError as e:
            raise ConnectionSetupError(
                f"创建临时目录失败: {e}", ExportStage.INITIALIZATION
            ) from e

        with staging:
            await self._report(
                progress_callback,
                ExportStage.CLUSTER_METADATA,
                "收集集群元数据...",
            )
            logger.info("收集集群元数据")
            cluster_version = await self.client.cluster_version()
            aggregation_interval = await self.client.cluster_setting_duration(
                AGGREGATION_INTERVAL_SETTING
            )
            flush_interval = await self.client.cluster_setting_duration(
                FLUSH_INTERVAL_SETTING
            )
            manifest = build_manifest(
                self.clean_config,
                cluster_version,
                aggregation_interval,
                flush_interval,
            )

            await self._report(
                progress_callback, ExportStage.DATABASES, "列出数据库..."
            )
            databases = await self.client.user_databases(self.system_databases)

            await self._report(
                progress_callback, ExportStage.SCHEMAS, "导出数据库 Schema..."
            )
            logger.info("导出数据库 Schema")
            for database in databases:
                logger.info(f"  导出数据库 {database}")
                await dump_schema(self.client, staging, database)

            await self._report(
                progress_callback,
                ExportStage.ZONE_CONFIGURATIONS,
                "导出区域配置...",
            )
            logger.info("导出全部区域配置")
            await dump_zone_configurations(self.client, staging)

            await self._report(
                progress_callback, ExportStage.TABLES, "导出表数据..."
            )
            logger.info("开始导出表数据")
            table_exporter = TableExporter(self.client, staging, time_range)
            tables = await table_exporter.export_tables(self.tables)
            logger.info("表数据导出完成")

            await self._report(
                progress_callback, ExportStage.MANIFEST, "写入元数据..."
            )
            write_manifest(manifest, staging.metadata_file)

            await self._report(
                progress_callback, ExportStage.ARCHIVE, "创建压缩包..."
            )
            output_file = Path(self.config.output_file)
            logger.info(f"正在创建压缩包 '{output_file}'")
            files = create_zip_file(staging, output_file)

        size = output_file.stat().st_size
        await self._report(
            progress_callback, ExportStage.FINALIZATION, "导出完成", current=100
        )
        logger.info(
            f"导出成功: {output_file} ({format_size(size)})"
        )

        return ExportResult(
            success=True,
            output_file=str(output_file),
            message="导出成功",
            size=size,
            files=files,
            databases=databases,
            tables=tables,
            duration=time.time() - start,
        )

    async def _report(
        self,
        progress_callback: Optional[ProgressCallback],
        stage: str,
        message: str,
        current: int = 0,
    ) -> None:
        if progress_callback:
            await progress_callback(stage, current, 100, message)


async def run_export(
    config: ExportConfig,
    progress_callback: Optional[ProgressCallback] = None,
    **kwargs: Any,
) -> ExportResult:
    """连接集群、执行导出并关闭连接

    失败时不抛出异常，而是返回 success=False 的结果

    Args:
        config: 导出配置
        progress_callback: 进度回调函数
        **kwargs: 传给 WorkloadExporter 的其他参数

    Returns:
        导出结果
    """
    start = time.time()

    try:
        async with await WorkloadExporter.connect(config, **kwargs) as exporter:
            return await exporter.export(progress_callback)
    except (ExportError, ConnectionStringError) as e:
        stage = getattr(e, "stage", None)
        logger.error(f"导出失败{f'（阶段: {stage}）' if stage else ''}: {e}")
        return ExportResult(
            success=False,
            output_file=config.output_file,
            message=f"导出失败: {e}",
            errors=[str(e)],
            duration=time.time() - start,
        )


__all__ = ["WorkloadExporter", "run_export", "ProgressCallback"]
