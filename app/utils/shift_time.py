"""근무 시간 계산 유틸리티 — 파싱, 길이 계산, 겹침 검사.

Shift time utilities: parsing, duration and overlap checks.

Every shift is placed on a shared timeline anchored at its own calendar
date. When ``end < start`` the shift ends on the following day, so
22:00-06:00 is an 8 hour shift, not a negative one.

Overlap policy: intervals are half-open ``[start, end)``. Two shifts
conflict when ``a.start < b.end and b.start < a.end``; shifts that only
touch (10:00-14:00 and 14:00-16:00) do not conflict.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

# 입력 형식 — Accepted wire formats
TIME_FORMAT: str = "%H:%M"
DATE_FORMAT: str = "%Y-%m-%d"


@dataclass(frozen=True)
class ShiftWindow:
    """겹침 검사에 필요한 최소 근무 정보.

    The part of a shift the overlap checker needs.

    Attributes:
        date: 근무 날짜 (Shift date)
        start_time: 시작 시각 (Start time)
        end_time: 종료 시각 (End time; earlier than start = next day)
    """

    date: date
    start_time: time
    end_time: time


def parse_time(value: str) -> time:
    """"HH:MM" 문자열을 time 객체로 변환합니다.

    Parse an ``HH:MM`` string.

    Raises:
        ValueError: 형식이 맞지 않을 때 (When the value is not HH:MM)
    """
    return datetime.strptime(value, TIME_FORMAT).time()


def parse_date(value: str) -> date:
    """"YYYY-MM-DD" 문자열을 date 객체로 변환합니다.

    Parse a ``YYYY-MM-DD`` string.

    Raises:
        ValueError: 형식이 맞지 않을 때 (When the value is not a calendar date)
    """
    return datetime.strptime(value, DATE_FORMAT).date()


def format_time(t: time | None) -> str | None:
    """time 객체를 "HH:MM" 문자열로 변환합니다."""
    if t is None:
        return None
    return t.strftime(TIME_FORMAT)


def shift_interval(shift: ShiftWindow) -> tuple[datetime, datetime]:
    """근무를 [시작, 종료) 절대 시각 쌍으로 정규화합니다.

    Normalize a shift to a ``[start, end)`` pair of instants.
    An end time earlier than the start time rolls over to the next day.
    """
    start: datetime = datetime.combine(shift.date, shift.start_time)
    end: datetime = datetime.combine(shift.date, shift.end_time)
    if end < start:
        end += timedelta(days=1)
    return start, end


def shift_duration(start_time: time, end_time: time) -> timedelta:
    """자정 넘김을 보정한 근무 길이를 계산합니다.

    Duration of a shift, adding 24h when it runs past midnight.
    """
    anchor: date = date(2000, 1, 1)
    start, end = shift_interval(ShiftWindow(anchor, start_time, end_time))
    return end - start


def overlaps(a: ShiftWindow, b: ShiftWindow) -> bool:
    """두 근무의 시간이 겹치는지 확인합니다 (반열린 구간).

    Whether two shifts overlap on the shared timeline. Symmetric.
    """
    a_start, a_end = shift_interval(a)
    b_start, b_end = shift_interval(b)
    return a_start < b_end and b_start < a_end


def conflicts(candidate: ShiftWindow, existing: Iterable[ShiftWindow]) -> bool:
    """후보 근무가 기존 근무 중 하나라도 겹치는지 확인합니다.

    Whether ``candidate`` overlaps any shift in ``existing``.

    The caller restricts ``existing`` to the same employee and date and
    leaves out the shift being updated.
    """
    return any(overlaps(candidate, other) for other in existing)
