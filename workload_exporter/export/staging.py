"""暂存区管理

统一管理导出过程中写入的所有文件路径，避免在各导出器中硬编码文件名
"""

import shutil
import tempfile
from pathlib import Path
from typing import Optional

from loguru import logger

from .constants import (
    METADATA_FILENAME,
    STAGING_DIR_PREFIX,
    ZONE_CONFIGURATIONS_FILENAME,
    TableSpec,
)


class StagingArea:
    """暂存区

    在临时目录中收集所有导出文件，打包后删除。支持 with 语句：
    退出时无论成功与否都会尝试删除目录，删除失败只记录日志。
    """

    def __init__(self, root: Path):
        """初始化暂存区

        Args:
            root: 暂存目录（必须已存在）
        """
        self.root = root

    @classmethod
    def create(cls, parent: Optional[Path] = None) -> "StagingArea":
        """创建新的临时暂存目录

        Args:
            parent: 上级目录，默认为系统临时目录

        Returns:
            暂存区
        """
        root = Path(tempfile.mkdtemp(prefix=STAGING_DIR_PREFIX, dir=parent))
        logger.info(f"已创建临时目录 '{root}'")
        return cls(root)

    def __enter__(self) -> "StagingArea":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def schema_file(self, database: str) -> Path:
        """获取数据库 Schema 文件路径"""
        return self.root / f"{database}.schema.txt"

    def table_file(self, table: TableSpec) -> Path:
        """获取表 CSV 文件路径"""
        return self.root / table.filename

    @property
    def zone_configurations_file(self) -> Path:
        return self.root / ZONE_CONFIGURATIONS_FILENAME

    @property
    def metadata_file(self) -> Path:
        return self.root / METADATA_FILENAME

    def list_files(self) -> list[Path]:
        """列出暂存区中的所有普通文件（按路径排序）"""
        return sorted(p for p in self.root.rglob("*") if p.is_file())

    def cleanup(self) -> None:
        """删除暂存目录

        删除失败只记录警告，不向上抛出
        """
        try:
            shutil.rmtree(self.root)
            logger.debug(f"已删除临时目录 '{self.root}'")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"删除临时目录 '{self.root}' 失败: {e}")


def format_size(size: float) -> str:
    """格式化文件大小

    Args:
        size: 字节大小

    Returns:
        格式化后的字符串，如 "1.23 MB"
    """
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} PB"


__all__ = ["StagingArea", "format_size"]
