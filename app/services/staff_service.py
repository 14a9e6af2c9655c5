"""직원 서비스 — 직원 CRUD 및 퇴사 처리 비즈니스 로직.

Staff Service — Business logic for staff CRUD and termination.
Enforces email uniqueness, an existing home role and an end date after the
start date. A staff member with schedules cannot be deleted.
"""

from datetime import date
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.role import Role
from app.models.staff import Staff
from app.repositories.role_repository import role_repository
from app.repositories.schedule_repository import schedule_repository
from app.repositories.staff_repository import staff_repository
from app.schemas.staff import StaffCreate, StaffDetailResponse, StaffResponse, StaffUpdate
from app.services.role_service import role_service
from app.services.schedule_service import schedule_service
from app.utils.exceptions import NotFoundError, UnprocessableError, ValidationFailedError


class StaffService:
    """직원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling staff business logic.
    """

    def _to_response(self, staff: Staff, role: Role | None) -> StaffResponse:
        """직원 모델을 응답 스키마로 변환합니다.

        Convert a Staff model instance and its home role to a StaffResponse.
        """
        return StaffResponse(
            id=staff.id,
            name=staff.name,
            phone_number=staff.phone_number,
            email=staff.email,
            role_id=staff.role_id,
            start_date=staff.start_date,
            end_date=staff.end_date,
            is_active=staff.end_date is None,
            role=role_service.to_response(role) if role else None,
            created_at=staff.created_at,
            updated_at=staff.updated_at,
        )

    async def _check_fields(
        self,
        db: AsyncSession,
        email: str,
        role_id: int,
        start_date: date,
        end_date: date | None,
        exclude_id: int | None = None,
    ) -> None:
        """이메일 중복, 역할 존재, 날짜 순서를 한 번에 검사합니다.

        Check email uniqueness, the home role and date order together.

        Raises:
            ValidationFailedError: 위반이 하나라도 있을 때 (Any violation)
        """
        errors: dict[str, list[str]] = {}
        if await staff_repository.check_duplicate_email(db, email, exclude_id=exclude_id):
            errors["email"] = ["The email has already been taken."]
        if await role_repository.get_by_id(db, role_id) is None:
            errors["role_id"] = ["The selected role id is invalid."]
        if end_date is not None and end_date <= start_date:
            errors["end_date"] = ["The end date must be a date after start date."]
        if errors:
            raise ValidationFailedError(errors)

    async def list_staff(
        self,
        db: AsyncSession,
        active: bool | None = None,
        role_id: int | None = None,
    ) -> list[StaffResponse]:
        """직원 목록을 조회합니다.

        List staff members with their home role.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            active: True=재직 중, False=퇴사, None=전체 (Active filter)
            role_id: 기본 역할 필터, 선택 (Optional home role filter)

        Returns:
            list[StaffResponse]: 이름 순 직원 목록 (Staff ordered by name)
        """
        members: list[Staff] = await staff_repository.get_by_filters(db, active=active, role_id=role_id)
        roles: dict[int, Role] = await role_repository.get_by_ids(db, {m.role_id for m in members})
        return [self._to_response(m, roles.get(m.role_id)) for m in members]

    async def get_staff(self, db: AsyncSession, staff_id: int) -> StaffDetailResponse:
        """직원 상세 정보를 역할, 스케줄과 함께 조회합니다.

        Retrieve one staff member with their role and schedules.

        Raises:
            NotFoundError: 직원을 찾을 수 없을 때 (Staff member not found)
        """
        staff: Staff | None = await staff_repository.get_by_id(db, staff_id)
        if staff is None:
            raise NotFoundError("Staff member not found")

        role: Role | None = await role_repository.get_by_id(db, staff.role_id)
        schedules = await schedule_repository.get_for_employee(db, staff_id)
        return StaffDetailResponse(
            **self._to_response(staff, role).model_dump(),
            schedules=[schedule_service.to_response(s) for s in schedules],
        )

    async def create_staff(self, db: AsyncSession, data: StaffCreate) -> StaffResponse:
        """새 직원을 생성합니다.

        Create a new staff member.

        Raises:
            ValidationFailedError: 이메일 중복, 잘못된 역할, 잘못된 퇴사일
                                   (Duplicate email, unknown role or bad end date)
        """
        await self._check_fields(db, data.email, data.role_id, data.start_date, data.end_date)

        staff: Staff = await staff_repository.create(db, data.model_dump())
        role: Role | None = await role_repository.get_by_id(db, staff.role_id)
        return self._to_response(staff, role)

    async def update_staff(
        self,
        db: AsyncSession,
        staff_id: int,
        data: StaffUpdate,
    ) -> StaffResponse:
        """직원 정보를 수정합니다.

        Update a staff member. Only fields present in the body change; the
        checks run against the merged values.

        Raises:
            NotFoundError: 직원을 찾을 수 없을 때 (Staff member not found)
            ValidationFailedError: 검증 실패 (Validation failure)
        """
        existing: Staff | None = await staff_repository.get_by_id(db, staff_id)
        if existing is None:
            raise NotFoundError("Staff member not found")

        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        # NOT NULL 컬럼에 대한 명시적 null은 무시 — Explicit nulls on required columns are ignored
        for required in ("name", "email", "role_id", "start_date"):
            if update_data.get(required, "") is None:
                update_data.pop(required)

        await self._check_fields(
            db,
            update_data.get("email", existing.email),
            update_data.get("role_id", existing.role_id),
            update_data.get("start_date", existing.start_date),
            update_data.get("end_date", existing.end_date),
            exclude_id=staff_id,
        )

        staff: Staff | None = await staff_repository.update(db, staff_id, update_data)
        if staff is None:
            raise NotFoundError("Staff member not found")
        role: Role | None = await role_repository.get_by_id(db, staff.role_id)
        return self._to_response(staff, role)

    async def delete_staff(self, db: AsyncSession, staff_id: int) -> None:
        """직원을 삭제합니다.

        Delete a staff member.

        Raises:
            NotFoundError: 직원을 찾을 수 없을 때 (Staff member not found)
            UnprocessableError: 스케줄이 남아 있을 때 (Staff member still has schedules)
        """
        existing: Staff | None = await staff_repository.get_by_id(db, staff_id)
        if existing is None:
            raise NotFoundError("Staff member not found")

        schedule_count: int = await staff_repository.count_schedules(db, staff_id)
        if schedule_count > 0:
            logger.info("Staff {} delete blocked: {} schedule(s) remain", staff_id, schedule_count)
            raise UnprocessableError("Cannot delete staff member. They have existing schedules.")

        await staff_repository.delete(db, staff_id)

    async def terminate_staff(
        self,
        db: AsyncSession,
        staff_id: int,
        today: date,
    ) -> StaffResponse:
        """직원을 퇴사 처리합니다 — 퇴사일을 오늘로 설정.

        Terminate a staff member by setting their end date to today.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            staff_id: 직원 ID (Staff member id)
            today: 주입된 시계의 오늘 날짜 (Today from the injected clock)

        Raises:
            NotFoundError: 직원을 찾을 수 없을 때 (Staff member not found)
            ValidationFailedError: 오늘이 입사일 이후가 아닐 때
                                   (Today is not after the start date)
        """
        existing: Staff | None = await staff_repository.get_by_id(db, staff_id)
        if existing is None:
            raise NotFoundError("Staff member not found")
        if today <= existing.start_date:
            raise ValidationFailedError({"end_date": ["The end date must be a date after start date."]})

        staff: Staff | None = await staff_repository.update(db, staff_id, {"end_date": today})
        role: Role | None = await role_repository.get_by_id(db, staff.role_id)
        return self._to_response(staff, role)


# 싱글턴 인스턴스 — Singleton instance
staff_service: StaffService = StaffService()
