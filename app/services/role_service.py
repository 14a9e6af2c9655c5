"""역할 서비스 — 역할 CRUD 비즈니스 로직.

Role Service — Business logic for role CRUD operations.
Handles creation, retrieval, update, and deletion of roles with role name
uniqueness and the "no delete while staff hold it" rule.
"""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.role import Role
from app.repositories.role_repository import role_repository
from app.schemas.role import RoleCreate, RoleResponse, RoleUpdate
from app.utils.exceptions import NotFoundError, UnprocessableError, ValidationFailedError

# 중복 이름 메시지 — Duplicate name message
DUPLICATE_NAME_MESSAGE: str = "The role name has already been taken."


class RoleService:
    """역할 관련 비즈니스 로직을 처리하는 서비스.

    Service handling role business logic.
    """

    def to_response(self, role: Role) -> RoleResponse:
        """역할 모델을 응답 스키마로 변환합니다.

        Convert a Role model instance to a RoleResponse schema.
        """
        return RoleResponse(
            id=role.id,
            role_name=role.role_name,
            role_description=role.role_description,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )

    async def list_roles(self, db: AsyncSession) -> list[RoleResponse]:
        """모든 역할을 조회합니다.

        List every role ordered by id.
        """
        roles: list[Role] = await role_repository.get_all_ordered(db)
        return [self.to_response(r) for r in roles]

    async def create_role(self, db: AsyncSession, data: RoleCreate) -> RoleResponse:
        """새 역할을 생성합니다.

        Create a new role.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 역할 생성 데이터 (Role creation data)

        Returns:
            RoleResponse: 생성된 역할 응답 (Created role response)

        Raises:
            ValidationFailedError: 같은 이름의 역할이 이미 존재할 때
                                   (When a role with the same name already exists)
        """
        if await role_repository.check_duplicate_name(db, data.role_name):
            raise ValidationFailedError({"role_name": [DUPLICATE_NAME_MESSAGE]})

        role: Role = await role_repository.create(
            db,
            {
                "role_name": data.role_name,
                "role_description": data.role_description,
            },
        )
        return self.to_response(role)

    async def update_role(
        self,
        db: AsyncSession,
        role_id: int,
        data: RoleUpdate,
    ) -> RoleResponse:
        """역할 정보를 수정합니다.

        Update an existing role. Only fields present in the body change.

        Raises:
            NotFoundError: 역할을 찾을 수 없을 때 (Role not found)
            ValidationFailedError: 같은 이름의 역할이 이미 존재할 때
                                   (Name taken by another role)
        """
        existing: Role | None = await role_repository.get_by_id(db, role_id)
        if existing is None:
            raise NotFoundError("Role not found")

        if data.role_name is not None and await role_repository.check_duplicate_name(
            db, data.role_name, exclude_id=role_id
        ):
            raise ValidationFailedError({"role_name": [DUPLICATE_NAME_MESSAGE]})

        update_data: dict = data.model_dump(exclude_unset=True)
        # role_name은 NOT NULL — 명시적 null은 무시 (Explicit null name is ignored)
        if update_data.get("role_name", "") is None:
            update_data.pop("role_name")

        role: Role | None = await role_repository.update(db, role_id, update_data)
        if role is None:
            raise NotFoundError("Role not found")
        return self.to_response(role)

    async def delete_role(self, db: AsyncSession, role_id: int) -> None:
        """역할을 삭제합니다.

        Delete a role. Schedules that were assigned this role become
        unassigned.

        Raises:
            NotFoundError: 역할을 찾을 수 없을 때 (Role not found)
            UnprocessableError: 이 역할을 가진 직원이 있을 때
                                (Role is the home role of a staff member)
        """
        existing: Role | None = await role_repository.get_by_id(db, role_id)
        if existing is None:
            raise NotFoundError("Role not found")

        staff_count: int = await role_repository.count_staff(db, role_id)
        if staff_count > 0:
            logger.info("Role {} delete blocked: assigned to {} staff member(s)", role_id, staff_count)
            raise UnprocessableError("Cannot delete role. It is assigned to staff members.")

        await role_repository.detach_from_schedules(db, role_id)
        await role_repository.delete(db, role_id)


# 싱글턴 인스턴스 — Singleton instance
role_service: RoleService = RoleService()
