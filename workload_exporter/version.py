"""版本信息"""

import os


EXPORTER_VERSION = "1.0.0"


def get_version_info() -> dict[str, str]:
    """获取版本信息

    提交号和构建日期由打包流程通过环境变量注入

    Returns:
        {version, commit, build_date}
    """
    return {
        "version": EXPORTER_VERSION,
        "commit": os.environ.get("WORKLOAD_EXPORTER_COMMIT", "unknown"),
        "build_date": os.environ.get("WORKLOAD_EXPORTER_BUILD_DATE", "unknown"),
    }


def get_full_version() -> str:
    """获取完整版本字符串"""
    info = get_version_info()
    return (
        f"workload-exporter version {info['version']}\n"
        f"Commit: {info['commit']}\n"
        f"Built:  {info['build_date']}"
    )
