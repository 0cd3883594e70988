"""时间处理单元测试"""

from datetime import datetime, timedelta, timezone

import pytest

from workload_exporter.export.timeutil import (
    end_time,
    format_duration,
    format_sql_timestamp,
    start_time,
)


class TestStartTime:
    """测试起始时间取整"""

    def test_round_down_to_hour(self):
        """测试向下取整到整点"""
        t = datetime(2025, 4, 18, 13, 45, 30, 123456, tzinfo=timezone.utc)
        assert start_time(t) == datetime(2025, 4, 18, 13, 0, 0, tzinfo=timezone.utc)

    def test_already_at_hour_boundary(self):
        """测试已在整点"""
        t = datetime(2025, 4, 18, 13, 0, 0, tzinfo=timezone.utc)
        assert start_time(t) == t

    def test_idempotent(self):
        """测试重复取整不变"""
        t = datetime(2025, 12, 31, 23, 59, 59, 999999)
        assert start_time(start_time(t)) == start_time(t)

    def test_keeps_timezone(self):
        """测试保留时区"""
        tz = timezone(timedelta(hours=2))
        t = datetime(2025, 4, 18, 13, 45, 30, tzinfo=tz)
        assert start_time(t).tzinfo is tz


class TestEndTime:
    """测试结束时间取整"""

    def test_round_to_end_of_hour(self):
        """测试取整到小时最后一秒"""
        t = datetime(2025, 4, 18, 13, 45, 30, tzinfo=timezone.utc)
        assert end_time(t) == datetime(2025, 4, 18, 13, 59, 59, tzinfo=timezone.utc)

    def test_from_hour_boundary(self):
        """测试从整点取整"""
        t = datetime(2025, 4, 18, 13, 0, 0, tzinfo=timezone.utc)
        assert end_time(t) == datetime(2025, 4, 18, 13, 59, 59, tzinfo=timezone.utc)

    def test_drops_sub_second(self):
        """测试去除秒以下精度"""
        t = datetime(2025, 4, 18, 13, 59, 59, 500000)
        assert end_time(t).microsecond == 0

    def test_idempotent(self):
        """测试重复取整不变"""
        t = datetime(2025, 4, 18, 7, 12, 1)
        assert end_time(end_time(t)) == end_time(t)


def test_format_sql_timestamp():
    """测试 SQL 时间字面量不带时区"""
    t = datetime(2025, 4, 18, 9, 5, 7, tzinfo=timezone.utc)
    assert format_sql_timestamp(t) == "2025-04-18 09:05:07"


@pytest.mark.parametrize(
    "duration, expected",
    [
        (timedelta(0), "0s"),
        (timedelta(hours=1), "1h0m0s"),
        (timedelta(minutes=10), "10m0s"),
        (timedelta(seconds=90), "1m30s"),
        (timedelta(seconds=1, milliseconds=500), "1.5s"),
        (timedelta(milliseconds=250), "250ms"),
        (timedelta(microseconds=1500), "1.5ms"),
        (timedelta(microseconds=7), "7µs"),
        (timedelta(hours=25, seconds=1), "25h0m1s"),
        (timedelta(minutes=-5), "-5m0s"),
    ],
)
def test_format_duration(duration, expected):
    """测试时长文本表示"""
    assert format_duration(duration) == expected
