"""시계 유틸리티 모듈 — 현재 날짜/시각 주입.

Clock utility module.
Validation compares shift dates against "today". The current date is read
from a clock object handed in by the caller instead of a global ``now()``,
so tests can pin it with ``FixedClock``.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.config import settings


class SystemClock:
    """설정된 시간대 기준의 실제 시계.

    Real clock in the configured timezone.

    Attributes:
        tz: 시간대 (Timezone used for "today")
    """

    def __init__(self, tz_name: str = settings.TIMEZONE) -> None:
        self.tz: ZoneInfo = ZoneInfo(tz_name)

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """고정된 시각을 반환하는 시계 (테스트용).

    Clock frozen at a given instant.
    """

    def __init__(self, at: datetime) -> None:
        self._at: datetime = at

    def now(self) -> datetime:
        return self._at

    def today(self) -> date:
        return self._at.date()


# 타입 별칭 — Either clock implementation
Clock = SystemClock | FixedClock
