"""근무 시간 유틸리티 테스트 — 파싱, 길이, 겹침 검사.

Shift time utility tests: parsing, overnight duration and overlap checks.
"""

from datetime import date, time, timedelta

import pytest

from app.utils.shift_time import (
    ShiftWindow,
    conflicts,
    format_time,
    overlaps,
    parse_date,
    parse_time,
    shift_duration,
    shift_interval,
)

DAY = date(2025, 10, 12)


def window(start: str, end: str, on: date = DAY) -> ShiftWindow:
    return ShiftWindow(on, parse_time(start), parse_time(end))


class TestParsing:
    """입력 형식 파싱 테스트."""

    def test_parse_time(self):
        assert parse_time("09:30") == time(9, 30)

    @pytest.mark.parametrize("value", ["9h", "25:00", "10:61", "", "10:00:00"])
    def test_parse_time_rejects_bad_format(self, value):
        with pytest.raises(ValueError):
            parse_time(value)

    def test_parse_date(self):
        assert parse_date("2025-10-12") == DAY

    @pytest.mark.parametrize("value", ["2025-02-30", "12/10/2025", "tomorrow"])
    def test_parse_date_rejects_bad_value(self, value):
        with pytest.raises(ValueError):
            parse_date(value)

    def test_format_time(self):
        assert format_time(time(7, 5)) == "07:05"
        assert format_time(None) is None


class TestDuration:
    """자정 넘김 보정 길이 테스트."""

    def test_day_shift(self):
        assert shift_duration(time(9), time(17)) == timedelta(hours=8)

    def test_overnight_shift(self):
        assert shift_duration(time(22), time(6)) == timedelta(hours=8)

    def test_overnight_interval_ends_next_day(self):
        start, end = shift_interval(window("22:00", "02:00"))
        assert start.date() == DAY
        assert end.date() == DAY + timedelta(days=1)


class TestOverlap:
    """겹침 검사 테스트 — 반열린 구간."""

    def test_partial_overlap(self):
        assert overlaps(window("10:00", "14:00"), window("12:00", "16:00"))

    def test_containment(self):
        assert overlaps(window("08:00", "18:00"), window("10:00", "12:00"))

    def test_touching_boundaries_do_not_conflict(self):
        assert not overlaps(window("10:00", "14:00"), window("14:00", "16:00"))
        assert not overlaps(window("14:00", "16:00"), window("10:00", "14:00"))

    def test_disjoint(self):
        assert not overlaps(window("06:00", "08:00"), window("09:00", "12:00"))

    def test_overnight_against_late_evening(self):
        assert overlaps(window("22:00", "06:00"), window("23:00", "23:30"))

    def test_overnight_does_not_reach_same_day_morning(self):
        # 같은 날짜의 이른 아침 근무는 밤 근무 이전 — Morning of the same date precedes the night shift
        assert not overlaps(window("22:00", "06:00"), window("02:00", "05:00"))

    @pytest.mark.parametrize(
        "a, b",
        [
            (("10:00", "14:00"), ("12:00", "16:00")),
            (("22:00", "06:00"), ("21:00", "23:00")),
            (("09:00", "10:00"), ("10:00", "11:00")),
            (("06:00", "08:00"), ("18:00", "20:00")),
        ],
    )
    def test_symmetric(self, a, b):
        assert conflicts(window(*a), [window(*b)]) == conflicts(window(*b), [window(*a)])

    def test_conflicts_any(self):
        existing = [window("06:00", "08:00"), window("12:00", "14:00")]
        assert conflicts(window("13:00", "15:00"), existing)
        assert not conflicts(window("08:00", "12:00"), existing)

    def test_conflicts_empty(self):
        assert not conflicts(window("10:00", "12:00"), [])
