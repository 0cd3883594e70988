"""导出错误类型"""

from typing import Optional


class ExportError(Exception):
    """导出失败

    stage 标识失败发生的阶段（见 ExportStage）
    """

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class ConnectionSetupError(ExportError):
    """无法连接集群或无法创建暂存目录"""


class QueryError(ExportError):
    """查询失败"""


class FileWriteError(ExportError):
    """写入暂存文件失败"""


class ArchiveError(ExportError):
    """写入压缩包失败，输出文件可能已损坏"""


class ConnectionStringError(ValueError):
    """连接串无法解析"""


__all__ = [
    "ExportError",
    "ConnectionSetupError",
    "QueryError",
    "FileWriteError",
    "ArchiveError",
    "ConnectionStringError",
]
