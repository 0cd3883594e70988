"""workload-exporter

导出集群负载诊断数据（语句/事务统计、争用事件、节点拓扑、Schema、区域配置）到单个 zip 包
"""

from .version import EXPORTER_VERSION

__all__ = ["EXPORTER_VERSION"]
