"""직원 레포지토리 — 직원 조회, 필터링, 중복 검사 쿼리.

Staff Repository — Queries for staff listing, filtering and duplicate checks.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.schedule import Schedule
from app.models.staff import Staff
from app.repositories.base import BaseRepository


class StaffRepository(BaseRepository[Staff]):
    """직원 레포지토리.

    Staff repository with active/former filtering and email uniqueness checks.

    Extends:
        BaseRepository[Staff]
    """

    def __init__(self) -> None:
        super().__init__(Staff)

    async def get_by_filters(
        self,
        db: AsyncSession,
        active: bool | None = None,
        role_id: int | None = None,
    ) -> list[Staff]:
        """필터 조건에 맞는 직원을 조회합니다.

        Retrieve staff members matching the given filters.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            active: True=재직 중, False=퇴사, None=전체
                    (True = no end date, False = has end date, None = all)
            role_id: 기본 역할 필터, 선택 (Optional home role filter)

        Returns:
            list[Staff]: 직원 목록 (Staff members ordered by name)
        """
        query: Select = select(Staff)

        if active is True:
            query = query.where(Staff.end_date.is_(None))
        elif active is False:
            query = query.where(Staff.end_date.is_not(None))
        if role_id is not None:
            query = query.where(Staff.role_id == role_id)

        result = await db.execute(query.order_by(Staff.name, Staff.id))
        return list(result.scalars().all())

    async def check_duplicate_email(
        self,
        db: AsyncSession,
        email: str,
        exclude_id: int | None = None,
    ) -> bool:
        """같은 이메일의 직원이 이미 있는지 확인합니다."""
        query: Select = (
            select(func.count())
            .select_from(Staff)
            .where(func.lower(Staff.email) == email.lower())
        )
        if exclude_id is not None:
            query = query.where(Staff.id != exclude_id)

        count: int = (await db.execute(query)).scalar() or 0
        return count > 0

    async def count_schedules(self, db: AsyncSession, staff_id: int) -> int:
        """직원에게 배정된 스케줄 수를 셉니다."""
        result = await db.execute(
            select(func.count()).select_from(Schedule).where(Schedule.employee_id == staff_id)
        )
        return result.scalar() or 0


# 싱글턴 인스턴스 — Singleton instance
staff_repository: StaffRepository = StaffRepository()
