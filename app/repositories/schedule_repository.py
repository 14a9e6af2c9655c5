"""스케줄 레포지토리 — 스케줄 관련 DB 쿼리 담당.

Schedule Repository — Handles all schedule-related database queries.
Extends BaseRepository with listing filters and the "other shifts of this
employee on this date" query the conflict check runs against.
"""

from collections.abc import Iterable
from datetime import date
from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.schedule import Schedule
from app.models.staff import Staff
from app.repositories.base import BaseRepository


class ScheduleRepository(BaseRepository[Schedule]):
    """스케줄 레포지토리.

    Schedule repository with filtering and same-day lookups.

    Extends:
        BaseRepository[Schedule]
    """

    def __init__(self) -> None:
        """레포지토리를 초기화합니다.

        Initialize the schedule repository with Schedule model.
        """
        super().__init__(Schedule)

    async def get_by_filters(
        self,
        db: AsyncSession,
        on_date: date | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        employee_id: int | None = None,
        role_id: int | None = None,
        active_only: bool = False,
    ) -> Sequence[Schedule]:
        """필터 조건에 맞는 스케줄을 날짜, 시작 시각 순으로 조회합니다.

        Retrieve schedules matching the given filters, ordered by date and
        start time. The date range applies only when both ends are given.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            on_date: 특정 날짜 필터, 선택 (Optional single date)
            start_date: 범위 시작일, 선택 (Optional range start, inclusive)
            end_date: 범위 종료일, 선택 (Optional range end, inclusive)
            employee_id: 직원 필터, 선택 (Optional employee filter)
            role_id: 배정 역할 필터, 선택 (Optional assigned role filter)
            active_only: 재직 중인 직원만 (Only employees without an end date)

        Returns:
            Sequence[Schedule]: 스케줄 목록 (Matching schedules)
        """
        query: Select = select(Schedule)

        if start_date is not None and end_date is not None:
            query = query.where(Schedule.date >= start_date, Schedule.date <= end_date)
        if on_date is not None:
            query = query.where(Schedule.date == on_date)
        if employee_id is not None:
            query = query.where(Schedule.employee_id == employee_id)
        if role_id is not None:
            query = query.where(Schedule.assigned_role == role_id)
        if active_only:
            query = query.join(Staff, Staff.id == Schedule.employee_id).where(Staff.end_date.is_(None))

        query = query.order_by(Schedule.date, Schedule.start_time, Schedule.id)
        result = await db.execute(query)
        return result.scalars().all()

    async def get_for_employee_on_date(
        self,
        db: AsyncSession,
        employee_id: int,
        on_date: date,
        exclude_ids: Iterable[int] = (),
    ) -> Sequence[Schedule]:
        """같은 직원, 같은 날짜의 다른 스케줄을 조회합니다.

        Retrieve the employee's committed shifts on ``on_date``.
        This is the comparison set of the overlap check.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            employee_id: 직원 ID (Employee id)
            on_date: 근무 날짜 (Shift date)
            exclude_ids: 제외할 스케줄 ID — 수정 중인 스케줄
                         (Schedule ids to leave out, e.g. the ones being updated)

        Returns:
            Sequence[Schedule]: 스케줄 목록 (Shifts on that date)
        """
        query: Select = select(Schedule).where(
            Schedule.employee_id == employee_id,
            Schedule.date == on_date,
        )
        excluded: set[int] = set(exclude_ids)
        if excluded:
            query = query.where(Schedule.id.not_in(excluded))

        result = await db.execute(query.order_by(Schedule.start_time))
        return result.scalars().all()

    async def get_for_employee(
        self,
        db: AsyncSession,
        employee_id: int,
    ) -> Sequence[Schedule]:
        """직원의 모든 스케줄을 날짜 순으로 조회합니다."""
        result = await db.execute(
            select(Schedule)
            .where(Schedule.employee_id == employee_id)
            .order_by(Schedule.date, Schedule.start_time)
        )
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
schedule_repository: ScheduleRepository = ScheduleRepository()
