"""스케줄(근무) 관련 SQLAlchemy ORM 모델 정의.

Schedule (shift) SQLAlchemy ORM model definition.
One row is one employee's shift on one calendar date. Times are wall-clock
values without timezone; an end_time earlier than start_time means the
shift runs past midnight.

Tables:
    - schedules: 근무 스케줄 (Shifts)
"""

import datetime as dt

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Time
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Schedule(Base):
    """스케줄 모델 — 직원 한 명의 하루 근무.

    Schedule model — A single shift of one employee on one date.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        date: 근무 날짜 (Calendar day of the shift)
        start_time: 시작 시각 (Start time, HH:MM)
        end_time: 종료 시각 (End time, HH:MM; earlier than start = next day)
        employee_id: 직원 FK (Employee working the shift)
        assigned_role: 배정 역할 FK, 선택 (Role worked during this shift)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Invariant:
        같은 직원, 같은 날짜의 근무는 시간이 겹치지 않음 — 서비스 계층에서 검증
        (No two shifts of one employee on one date overlap; enforced by the service layer)
    """

    __tablename__ = "schedules"

    # 스케줄 고유 식별자 — Schedule identifier (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 근무 날짜 — Shift date (date only, no time)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    # 시작 시각 — Start time
    start_time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    # 종료 시각 — End time
    end_time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    # 직원 FK — Employee (CASCADE)
    employee_id: Mapped[int] = mapped_column(Integer, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False)
    # 배정 역할 FK — Assigned role for this shift (SET NULL)
    assigned_role: Mapped[int | None] = mapped_column(Integer, ForeignKey("roles.id", ondelete="SET NULL"), nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc), onupdate=lambda: dt.datetime.now(dt.timezone.utc))

    __table_args__ = (
        Index("ix_schedules_employee_date", "employee_id", "date"),
        Index("ix_schedules_date_start", "date", "start_time"),
        Index("ix_schedules_assigned_role", "assigned_role"),
    )
