"""时间处理

时间窗口按整点取整：起点取到所在小时的开头，终点取到所在小时的最后一秒。
"""

from datetime import datetime, timedelta

from .constants import SQL_TIMESTAMP_FORMAT


def start_time(t: datetime) -> datetime:
    """取整到所在小时的开头"""
    return t.replace(minute=0, second=0, microsecond=0)


def end_time(t: datetime) -> datetime:
    """取整到所在小时的最后一秒"""
    return t.replace(minute=59, second=59, microsecond=0)


def format_sql_timestamp(t: datetime) -> str:
    """格式化为 SQL 字面量时间，不带时区后缀"""
    return t.strftime(SQL_TIMESTAMP_FORMAT)


def format_duration(d: timedelta) -> str:
    """将时长格式化为紧凑文本表示

    例如 1h0m0s、10m0s、1.5s、250ms、0s

    Args:
        d: 时长

    Returns:
        文本表示
    """
    total_us = (d.days * 86400 + d.seconds) * 1_000_000 + d.microseconds
    if total_us == 0:
        return "0s"

    sign = "-" if total_us < 0 else ""
    us = abs(total_us)

    if us < 1_000:
        return f"{sign}{us}µs"
    if us < 1_000_000:
        ms = f"{us // 1_000}.{us % 1_000:03d}".rstrip("0").rstrip(".")
        return f"{sign}{ms}ms"

    hours, rem = divmod(us, 3_600_000_000)
    minutes, rem = divmod(rem, 60_000_000)
    seconds, fraction = divmod(rem, 1_000_000)

    text = str(seconds)
    if fraction:
        text += f".{fraction:06d}".rstrip("0")
    text += "s"

    if hours:
        return f"{sign}{hours}h{minutes}m{text}"
    if minutes:
        return f"{sign}{minutes}m{text}"
    return f"{sign}{text}"


__all__ = ["start_time", "end_time", "format_sql_timestamp", "format_duration"]
