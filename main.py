"""workload-exporter 入口文件

从集群导出负载诊断数据并打包为 zip 文件
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from loguru import logger

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>[{level}]</level> {message}"


def setup_logging(level: str = "INFO") -> None:
    """配置日志输出"""
    logger.remove()
    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=level,
        colorize=True,
    )


async def show_version() -> int:
    """显示版本信息"""
    from workload_exporter.version import get_full_version

    print(get_full_version())
    return 0


async def show_help() -> int:
    """显示帮助信息"""
    help_text = """
workload-exporter - 导出集群负载诊断数据

用法:
    python main.py export [选项]
    python main.py [命令]

可用命令:
    export            导出集群负载
    version, -v       显示版本信息
    help, -h          显示帮助信息

导出选项:
    -c, --connection-url URL   集群连接串（也可通过 WORKLOAD_EXPORTER_CONNECTION_URL 指定）
    -o, --output-file FILE     输出文件（默认 workload-export.zip）
    -s, --start TIME           起始时间，RFC 3339（默认 6 小时前）
    -e, --end TIME             结束时间，RFC 3339（默认 1 小时后）
    --config FILE              JSON 配置文件
    --log-level LEVEL          日志级别（默认 INFO）

示例:
    python main.py export -c "postgresql://root@localhost:26257/defaultdb?sslmode=disable"
    python main.py export -c "$URL" -s 2025-04-18T08:00:00Z -e 2025-04-18T14:00:00Z
"""
    print(help_text)
    return 0


async def export(args: argparse.Namespace) -> int:
    """执行导出"""
    from workload_exporter.config import ConfigValidationError, load_export_config
    from workload_exporter.export import run_export

    try:
        config = load_export_config(
            overrides={
                "connection_url": args.connection_url,
                "output_file": args.output_file,
                "start": args.start,
                "end": args.end,
            },
            config_file=args.config,
        )
    except ConfigValidationError as e:
        logger.error(f"配置无效: {e}")
        return 1

    result = await run_export(config)
    return 0 if result.success else 1


def build_parser() -> argparse.ArgumentParser:
    """构造命令行解析器"""
    parser = argparse.ArgumentParser(
        description="workload-exporter 命令行工具",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-h", "--help", action="store_true", dest="show_help", help="显示帮助信息"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", dest="show_version", help="显示版本信息"
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["export", "version", "help"],
        help="要执行的命令",
    )
    parser.add_argument("-c", "--connection-url", dest="connection_url")
    parser.add_argument("-o", "--output-file", dest="output_file")
    parser.add_argument("-s", "--start", dest="start")
    parser.add_argument("-e", "--end", dest="end")
    parser.add_argument("--config", dest="config")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
    )
    return parser


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """主函数：解析命令行并执行对应命令"""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    # 优先处理短选项
    if args.show_help:
        return await show_help()
    if args.show_version:
        return await show_version()

    if args.command == "export":
        return await export(args)
    elif args.command == "version":
        return await show_version()
    else:
        return await show_help()


def cli() -> None:
    """控制台脚本入口"""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("收到退出信号，导出已中止")
        sys.exit(130)


if __name__ == "__main__":
    cli()
