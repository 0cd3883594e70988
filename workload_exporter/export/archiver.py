"""压缩打包

将暂存区中的所有普通文件写入 zip，条目名为相对暂存目录的路径。
文件内容分块写入，不整体读入内存。写入中途失败会留下不完整的压缩包。
"""

import zipfile
from pathlib import Path

from loguru import logger

from .constants import ExportStage
from .errors import ArchiveError
from .staging import StagingArea


def create_zip_file(staging: StagingArea, output_file: Path) -> list[str]:
    """打包暂存区

    Args:
        staging: 暂存区
        output_file: 输出 zip 路径

    Returns:
        写入的条目名列表

    Raises:
        ArchiveError: 打包失败
    """
    entries: list[str] = []

    try:
        with zipfile.ZipFile(output_file, "w", zipfile.ZIP_DEFLATED) as zf:
            for path in staging.list_files():
                arcname = path.relative_to(staging.root).as_posix()
                zf.write(path, arcname)
                entries.append(arcname)
                logger.debug(f"已添加 {arcname} 到压缩包")
    except (OSError, zipfile.BadZipFile) as e:
        raise ArchiveError(
            f"创建压缩包 '{output_file}' 失败: {e}", ExportStage.ARCHIVE
        ) from e

    return entries


__all__ = ["create_zip_file"]
