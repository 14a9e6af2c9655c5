"""스케줄 서비스 — 근무 조회, 단일/일괄 생성·수정·삭제.

Schedule Service — Shift listing and single or batch writes.

Single-shift endpoints run through the same batch machinery as a batch of
one, then report errors in the single-shift shape: field violations as
``ValidationFailedError``, overlaps as ``SchedulingConflictError`` and a
missing schedule as ``NotFoundError``.
"""

from collections.abc import Sequence
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.schedule import Schedule
from app.repositories.role_repository import role_repository
from app.repositories.schedule_repository import schedule_repository
from app.repositories.staff_repository import staff_repository
from app.schemas.schedule import (
    ScheduleListEntry,
    ScheduleResponse,
    ShiftDeleteItem,
    ShiftInput,
    ShiftUpdateItem,
)
from app.services.schedule_batch_service import (
    BatchItemError,
    BatchKind,
    BatchOutcome,
    DeleteShift,
    UpdateShift,
    operations_from_items,
    schedule_batch_service,
)
from app.services.shift_validator import ValidationContext
from app.utils.exceptions import NotFoundError, SchedulingConflictError, ValidationFailedError
from app.utils.shift_time import DATE_FORMAT, format_time, shift_duration

# 역할 미배정 그룹 이름 — Group name for shifts without an assigned role
UNASSIGNED_GROUP: str = "Unassigned"


def _raise_single(error: BatchItemError) -> None:
    """단일 근무 오류를 해당 HTTP 예외로 변환합니다."""
    if error.kind == "not_found":
        raise NotFoundError(error.message)
    if error.kind == "conflict":
        raise SchedulingConflictError(error.message)
    raise ValidationFailedError(error.fields)


class ScheduleService:
    """스케줄 관련 비즈니스 로직을 처리하는 서비스.

    Service handling schedule business logic.
    """

    def to_response(self, schedule: Schedule) -> ScheduleResponse:
        """스케줄 모델을 응답 스키마로 변환합니다.

        Convert a Schedule model instance to a ScheduleResponse schema.
        """
        return ScheduleResponse(
            id=schedule.id,
            date=schedule.date.strftime(DATE_FORMAT),
            start_time=format_time(schedule.start_time),
            end_time=format_time(schedule.end_time),
            employee_id=schedule.employee_id,
            assigned_role=schedule.assigned_role,
            created_at=schedule.created_at,
            updated_at=schedule.updated_at,
        )

    async def list_schedules(
        self,
        db: AsyncSession,
        on_date: date | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        employee_id: int | None = None,
        role_id: int | None = None,
        active_only: bool = False,
    ) -> dict[str, list[ScheduleListEntry]]:
        """필터 조건에 맞는 근무를 배정 역할 이름별로 묶어 조회합니다.

        List shifts matching the filters, grouped by assigned role name.
        Shifts without a role land in the "Unassigned" group. Within a group
        entries keep date then start time order.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            on_date: 특정 날짜, 선택 (Optional single date)
            start_date: 범위 시작일, 선택 (Range start, used with end_date)
            end_date: 범위 종료일, 선택 (Range end, used with start_date)
            employee_id: 직원 필터, 선택 (Optional employee filter)
            role_id: 배정 역할 필터, 선택 (Optional assigned role filter)
            active_only: 재직 중인 직원만 (Only active employees)

        Returns:
            dict[str, list[ScheduleListEntry]]: {역할 이름: 근무 목록}
                                                (Role name to shifts)
        """
        schedules: Sequence[Schedule] = await schedule_repository.get_by_filters(
            db,
            on_date=on_date,
            start_date=start_date,
            end_date=end_date,
            employee_id=employee_id,
            role_id=role_id,
            active_only=active_only,
        )

        staff = await staff_repository.get_by_ids(db, {s.employee_id for s in schedules})
        roles = await role_repository.get_by_ids(
            db, {s.assigned_role for s in schedules if s.assigned_role is not None}
        )

        grouped: dict[str, list[ScheduleListEntry]] = {}
        for schedule in schedules:
            role = roles.get(schedule.assigned_role) if schedule.assigned_role is not None else None
            member = staff.get(schedule.employee_id)
            hours: float = shift_duration(schedule.start_time, schedule.end_time).total_seconds() / 3600
            entry: ScheduleListEntry = ScheduleListEntry(
                **self.to_response(schedule).model_dump(),
                employee_name=member.name if member else None,
                role_name=role.role_name if role else None,
                shift=f"{format_time(schedule.start_time)} - {format_time(schedule.end_time)}",
                duration=round(hours, 2),
            )
            group: str = role.role_name if role else UNASSIGNED_GROUP
            grouped.setdefault(group, []).append(entry)
        return grouped

    async def create_schedules(
        self,
        db: AsyncSession,
        items: list[ShiftInput],
        context: ValidationContext,
    ) -> list[ScheduleResponse]:
        """근무 배치를 생성합니다 — 전부 생성되거나 아무것도 생성되지 않음.

        Create a batch of shifts, all or nothing.

        Raises:
            BatchRejectedError: 하나 이상의 항목이 실패 (At least one item failed)
        """
        created = await schedule_batch_service.apply(
            db, BatchKind.CREATE, operations_from_items(BatchKind.CREATE, items), context
        )
        return [self.to_response(s) for s in created]

    async def create_schedule(
        self,
        db: AsyncSession,
        item: ShiftInput,
        context: ValidationContext,
    ) -> ScheduleResponse:
        """단일 근무를 생성합니다.

        Create one shift.

        Raises:
            ValidationFailedError: 필드 검증 실패 (Field violations)
            SchedulingConflictError: 같은 직원의 다른 근무와 겹침
                                     (Overlaps another shift of the employee)
        """
        operations = operations_from_items(BatchKind.CREATE, [item])
        outcome: BatchOutcome = await schedule_batch_service.validate(db, BatchKind.CREATE, operations, context)
        if not outcome.accepted:
            _raise_single(outcome.errors[0])
        created = await schedule_batch_service.commit(db, BatchKind.CREATE, outcome.staged)
        return self.to_response(created[0])

    async def update_schedules(
        self,
        db: AsyncSession,
        items: list[ShiftUpdateItem],
        context: ValidationContext,
    ) -> list[ScheduleResponse]:
        """근무 배치를 수정합니다 — 보내지 않은 필드는 저장된 값 유지.

        Update a batch of shifts, all or nothing. Fields an item does not
        send keep their stored values.
        """
        updated = await schedule_batch_service.apply(
            db, BatchKind.UPDATE, operations_from_items(BatchKind.UPDATE, items), context
        )
        return [self.to_response(s) for s in updated]

    async def update_schedule(
        self,
        db: AsyncSession,
        schedule_id: int,
        data: ShiftInput,
        context: ValidationContext,
    ) -> ScheduleResponse:
        """단일 근무를 수정합니다.

        Update one shift. The shift itself is left out of its own conflict
        check.

        Raises:
            NotFoundError: 스케줄을 찾을 수 없을 때 (Schedule not found)
            ValidationFailedError: 필드 검증 실패 (Field violations)
            SchedulingConflictError: 다른 근무와 겹침 (Overlap)
        """
        values = {name: getattr(data, name) for name in data.model_fields_set}
        operations = [UpdateShift(0, schedule_id, values)]
        outcome: BatchOutcome = await schedule_batch_service.validate(db, BatchKind.UPDATE, operations, context)
        if not outcome.accepted:
            _raise_single(outcome.errors[0])
        updated = await schedule_batch_service.commit(db, BatchKind.UPDATE, outcome.staged)
        return self.to_response(updated[0])

    async def delete_schedules(
        self,
        db: AsyncSession,
        items: list[ShiftDeleteItem],
    ) -> list[int]:
        """근무 배치를 삭제합니다 — 모든 ID가 존재해야 함.

        Delete a batch of shifts, all or nothing.

        Returns:
            list[int]: 삭제된 스케줄 ID (Deleted schedule ids)
        """
        return await schedule_batch_service.apply(
            db,
            BatchKind.DELETE,
            operations_from_items(BatchKind.DELETE, items),
            ValidationContext(today=date.min),
        )

    async def delete_schedule(self, db: AsyncSession, schedule_id: int) -> None:
        """단일 근무를 삭제합니다."""
        operations = [DeleteShift(0, schedule_id)]
        outcome: BatchOutcome = await schedule_batch_service.validate(
            db, BatchKind.DELETE, operations, ValidationContext(today=date.min)
        )
        if not outcome.accepted:
            _raise_single(outcome.errors[0])
        await schedule_batch_service.commit(db, BatchKind.DELETE, outcome.staged)


# 싱글턴 인스턴스 — Singleton instance
schedule_service: ScheduleService = ScheduleService()
