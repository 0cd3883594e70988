"""Schema 和区域配置导出"""

from pathlib import Path

from loguru import logger

from .cluster import ClusterClient
from .constants import ExportStage
from .errors import FileWriteError
from .staging import StagingArea


def _write_lines(path: Path, lines: list[str], stage: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines))
    except OSError as e:
        raise FileWriteError(f"写入 {path.name} 失败: {e}", stage) from e


async def dump_schema(
    client: ClusterClient, staging: StagingArea, database: str
) -> Path:
    """导出数据库的全部 CREATE 语句到 <database>.schema.txt

    Args:
        client: 集群客户端
        staging: 暂存区
        database: 数据库名

    Returns:
        写入的文件路径
    """
    creates = await client.create_statements(database)
    path = staging.schema_file(database)
    _write_lines(path, creates, ExportStage.SCHEMAS)
    logger.debug(f"已写入 {database} 的 {len(creates)} 条建表语句")
    return path


async def dump_zone_configurations(
    client: ClusterClient, staging: StagingArea
) -> Path:
    """导出所有区域配置到 zone_configurations.txt

    没有区域配置时写入空文件
    """
    configs = await client.zone_configurations()
    path = staging.zone_configurations_file
    _write_lines(path, configs, ExportStage.ZONE_CONFIGURATIONS)
    logger.debug(f"已写入 {len(configs)} 条区域配置")
    return path


__all__ = ["dump_schema", "dump_zone_configurations"]
