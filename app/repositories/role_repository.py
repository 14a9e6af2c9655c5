"""역할 레포지토리 — 역할 CRUD 및 중복 검사 쿼리.

Role Repository — CRUD and duplicate-check queries for roles.
Extends BaseRepository with Role-specific database operations.
"""

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.role import Role
from app.models.schedule import Schedule
from app.models.staff import Staff
from app.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    """역할 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the roles table.
    """

    def __init__(self) -> None:
        """RoleRepository를 초기화합니다.

        Initialize the RoleRepository with the Role model.
        """
        super().__init__(Role)

    async def get_all_ordered(self, db: AsyncSession) -> list[Role]:
        """모든 역할을 ID 순으로 조회합니다.

        Retrieve every role ordered by id.
        """
        result = await db.execute(select(Role).order_by(Role.id))
        return list(result.scalars().all())

    async def check_duplicate_name(
        self,
        db: AsyncSession,
        role_name: str,
        exclude_id: int | None = None,
    ) -> bool:
        """같은 이름의 역할이 이미 있는지 확인합니다."""
        query: Select = (
            select(func.count())
            .select_from(Role)
            .where(Role.role_name == role_name)
        )
        if exclude_id is not None:
            query = query.where(Role.id != exclude_id)

        count: int = (await db.execute(query)).scalar() or 0
        return count > 0

    async def count_staff(self, db: AsyncSession, role_id: int) -> int:
        """이 역할을 기본 역할로 가진 직원 수를 셉니다.

        Count staff members whose home role is ``role_id``.
        """
        result = await db.execute(
            select(func.count()).select_from(Staff).where(Staff.role_id == role_id)
        )
        return result.scalar() or 0

    async def detach_from_schedules(self, db: AsyncSession, role_id: int) -> None:
        """스케줄의 배정 역할을 해제합니다 (ON DELETE SET NULL과 동일).

        Clear ``assigned_role`` on schedules that point at ``role_id``.
        Same effect as the SET NULL foreign key, also on engines that do not
        enforce foreign keys.
        """
        await db.execute(
            update(Schedule)
            .where(Schedule.assigned_role == role_id)
            .values(assigned_role=None)
        )


# 싱글턴 인스턴스 — Singleton instance
role_repository: RoleRepository = RoleRepository()
