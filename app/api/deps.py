"""FastAPI 의존성 주입 모듈 — 시계 및 검증 컨텍스트.

FastAPI dependency injection module — Clock and validation context.
Routes never read the wall clock directly. They depend on ``get_clock``,
which tests override with a ``FixedClock`` through
``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends

from app.config import settings
from app.services.shift_validator import ValidationContext
from app.utils.clock import Clock, SystemClock


def get_clock() -> Clock:
    """현재 시계를 반환합니다.

    Return the clock used to decide "today".

    Returns:
        Clock: 설정된 시간대의 시스템 시계 (System clock in the configured timezone)
    """
    return SystemClock(settings.TIMEZONE)


def get_validation_context(
    clock: Annotated[Clock, Depends(get_clock)],
) -> ValidationContext:
    """근무 검증 컨텍스트를 구성합니다.

    Build the shift validation context from the clock and settings.
    """
    return ValidationContext(
        today=clock.today(),
        max_duration_hours=settings.MAX_SHIFT_DURATION_HOURS,
    )
