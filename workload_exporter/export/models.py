"""导出配置模型"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict

from .redact import clean_connection_string


@dataclass(frozen=True)
class TimeRange:
    """导出时间窗口"""

    start: datetime
    """起始时间"""

    end: datetime
    """结束时间"""

    def to_dict(self) -> Dict[str, str]:
        return {"Start": self.start.isoformat(), "End": self.end.isoformat()}


@dataclass(frozen=True)
class ExportConfig:
    """导出配置

    导出开始后不可修改
    """

    connection_string: str = field(repr=False)
    """集群连接串（含密码，仅用于建立连接）"""

    output_file: str
    """输出 zip 文件路径"""

    time_range: TimeRange
    """时间窗口"""

    def redacted(self) -> "ExportConfig":
        """返回去除密码后的配置副本"""
        return replace(
            self, connection_string=clean_connection_string(self.connection_string)
        )

    def to_dict(self) -> Dict[str, Any]:
        """转换为清单中使用的字典"""
        return {
            "ConnectionString": self.connection_string,
            "OutputFile": self.output_file,
            "TimeRange": self.time_range.to_dict(),
        }


__all__ = ["TimeRange", "ExportConfig"]
