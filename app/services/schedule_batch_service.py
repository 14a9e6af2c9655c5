"""스케줄 일괄 처리 서비스 — 전부 성공 또는 전부 실패.

Schedule Batch Service — All-or-nothing shift transactions.

A batch is a list of pending operations of one kind (create, update or
delete). Processing runs in two phases:

    Received → Validating → AllValid   → Committing → Committed
                          → AnyInvalid → Aborting   → Rejected

Validating only reads. Valid items are staged in memory and invalid items
are recorded with their index in the request. If anything was recorded the
staged writes are dropped and the whole batch is rejected. Otherwise every
staged write runs inside one scoped transaction; a persistence failure rolls
all of them back.

Conflict checks see the committed shifts of the same employee and date,
minus the shifts this batch updates, plus the earlier valid items of the
batch. Two items of one batch that overlap each other are therefore caught,
and the later one is reported.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import transaction
from app.models.schedule import Schedule
from app.repositories.role_repository import role_repository
from app.repositories.schedule_repository import schedule_repository
from app.repositories.staff_repository import staff_repository
from app.services.shift_validator import (
    KnownReferences,
    NormalizedShift,
    ValidationContext,
    ValidationMode,
    ValidationResult,
    shift_validator,
)
from app.utils.exceptions import BatchRejectedError, InternalError
from app.utils.shift_time import ShiftWindow

# 근무 필드 — Shift columns a pending operation may carry
SHIFT_FIELDS: tuple[str, ...] = ("date", "start_time", "end_time", "employee_id", "assigned_role")


class BatchKind(str, Enum):
    """배치 종류 — 한 요청에는 한 종류의 작업만 포함."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# === 대기 작업 (Pending operations) ===

@dataclass(frozen=True)
class CreateShift:
    """새 근무 생성 작업.

    Attributes:
        index: 요청 내 위치 (Position in the request)
        values: 입력 값 (Raw shift values)
    """

    index: int
    values: dict[str, Any]


@dataclass(frozen=True)
class UpdateShift:
    """기존 근무 수정 작업 — values에 없는 필드는 저장된 값 유지.

    Attributes:
        index: 요청 내 위치 (Position in the request)
        schedule_id: 대상 스케줄 ID (Target schedule)
        values: 변경할 값만 포함 (Only the fields being changed)
    """

    index: int
    schedule_id: int
    values: dict[str, Any]


@dataclass(frozen=True)
class DeleteShift:
    """근무 삭제 작업."""

    index: int
    schedule_id: int


PendingOperation = CreateShift | UpdateShift | DeleteShift


@dataclass(frozen=True)
class StagedWrite:
    """검증을 통과해 커밋 대기 중인 쓰기.

    Attributes:
        operation: 원래 작업 (The operation)
        shift: 기록할 근무 값, 삭제 시 None (Values to write; None for deletes)
    """

    operation: PendingOperation
    shift: NormalizedShift | None = None


@dataclass
class BatchItemError:
    """항목별 오류.

    Attributes:
        index: 요청 내 위치 (Position in the request)
        kind: "validation" | "conflict" | "not_found" | "duplicate"
        message: 오류 메시지 (Error message)
        fields: 필드별 메시지, 필드 검증 실패 시 (Field violations)
    """

    index: int
    kind: str
    message: str
    fields: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"index": self.index, "type": self.kind, "message": self.message}
        if self.fields:
            data["fields"] = self.fields
        return data


@dataclass
class BatchOutcome:
    """검증 단계 결과."""

    staged: list[StagedWrite] = field(default_factory=list)
    errors: list[BatchItemError] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return not self.errors


def _error_from_result(index: int, result: ValidationResult) -> BatchItemError:
    if result.violations:
        return BatchItemError(index, "validation", "Validation failed", dict(result.violations))
    return BatchItemError(index, "conflict", result.conflict or "Scheduling conflict")


def _stored_values(schedule: Schedule) -> dict[str, Any]:
    return {name: getattr(schedule, name) for name in SHIFT_FIELDS}


class ScheduleBatchService:
    """스케줄 일괄 처리 서비스.

    Validates and applies shift batches. ``validate`` and ``commit`` are
    exposed separately so single-shift endpoints can report errors in their
    own shape; ``apply`` runs the full batch state machine.
    """

    async def validate(
        self,
        db: AsyncSession,
        kind: BatchKind,
        operations: Sequence[PendingOperation],
        context: ValidationContext,
    ) -> BatchOutcome:
        """배치의 모든 항목을 입력 순서대로 검증합니다 (읽기 전용).

        Validate every item in input order. Reads only; nothing is written.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            kind: 배치 종류 (Batch kind)
            operations: 대기 작업 목록 (Pending operations)
            context: 오늘 날짜와 최대 근무 길이 (Today and the duration limit)

        Returns:
            BatchOutcome: 스테이징된 쓰기와 항목별 오류 (Staged writes and per-item errors)
        """
        if kind is BatchKind.DELETE:
            return await self._validate_deletes(db, operations)
        return await self._validate_writes(db, kind, operations, context)

    async def commit(
        self,
        db: AsyncSession,
        kind: BatchKind,
        staged: Sequence[StagedWrite],
    ) -> list[Schedule] | list[int]:
        """스테이징된 쓰기를 하나의 트랜잭션으로 반영합니다.

        Apply staged writes inside one scoped transaction.

        Returns:
            list[Schedule] | list[int]: 생성/수정된 스케줄, 또는 삭제된 ID
                                        (Written schedules, or deleted ids)

        Raises:
            InternalError: 저장소 오류 — 모든 쓰기가 롤백됨
                           (Persistence failure; every write rolled back)
        """
        try:
            async with transaction(db):
                if kind is BatchKind.DELETE:
                    deleted: list[int] = []
                    for write in staged:
                        await schedule_repository.delete(db, write.operation.schedule_id)
                        deleted.append(write.operation.schedule_id)
                    written: list[Schedule] | list[int] = deleted
                else:
                    written = [await self._write(db, write) for write in staged]
        except SQLAlchemyError:
            logger.exception("Schedule batch {} failed while committing; rolled back", kind.value)
            raise InternalError(f"Failed to {kind.value} schedules")

        logger.info("Schedule batch {} committed: {} item(s)", kind.value, len(staged))
        return written

    async def apply(
        self,
        db: AsyncSession,
        kind: BatchKind,
        operations: Sequence[PendingOperation],
        context: ValidationContext,
    ) -> list[Schedule] | list[int]:
        """배치를 검증하고 전부 반영하거나 전부 거부합니다.

        Validate the batch, then commit all of it or reject all of it.

        Raises:
            BatchRejectedError: 하나 이상의 항목이 실패 — 아무것도 저장되지 않음
                                (At least one item failed; nothing persisted)
            InternalError: 저장소 오류 (Persistence failure)
        """
        outcome: BatchOutcome = await self.validate(db, kind, operations, context)
        if not outcome.accepted:
            logger.info(
                "Schedule batch {} rejected: {} of {} item(s) failed",
                kind.value, len(outcome.errors), len(operations),
            )
            raise BatchRejectedError(
                f"Failed to {kind.value} schedules: {len(outcome.errors)} item(s) rejected",
                [error.to_dict() for error in outcome.errors],
            )
        return await self.commit(db, kind, outcome.staged)

    # --- 검증 단계 (Validating) ---

    async def _validate_writes(
        self,
        db: AsyncSession,
        kind: BatchKind,
        operations: Sequence[PendingOperation],
        context: ValidationContext,
    ) -> BatchOutcome:
        outcome: BatchOutcome = BatchOutcome()
        mode: ValidationMode = ValidationMode.UPDATE if kind is BatchKind.UPDATE else ValidationMode.CREATE

        # 수정 대상 스케줄 일괄 조회 — Load every update target up front
        target_ids: list[int] = [op.schedule_id for op in operations if isinstance(op, UpdateShift)]
        targets: dict[int, Schedule] = await schedule_repository.get_by_ids(db, target_ids)

        # 항목별 병합 값 — Effective values per item (stored values + changes)
        merged: list[tuple[PendingOperation, dict[str, Any] | None]] = []
        seen_ids: set[int] = set()
        for op in operations:
            if isinstance(op, UpdateShift):
                if op.schedule_id in seen_ids:
                    outcome.errors.append(BatchItemError(op.index, "duplicate", "Schedule appears more than once in this batch"))
                    merged.append((op, None))
                    continue
                seen_ids.add(op.schedule_id)
                stored: Schedule | None = targets.get(op.schedule_id)
                if stored is None:
                    outcome.errors.append(BatchItemError(op.index, "not_found", "Schedule not found"))
                    merged.append((op, None))
                    continue
                merged.append((op, {**_stored_values(stored), **op.values}))
            else:
                merged.append((op, dict(op.values)))

        refs: KnownReferences = await self._load_references(db, [values for _, values in merged if values])

        # 배치 내 앞선 유효 항목 — Earlier valid items, keyed by (employee, date)
        staged_windows: dict[tuple[int, Any], list[ShiftWindow]] = {}
        excluded: set[int] = set(targets)

        for op, values in merged:
            if values is None:
                continue
            result: ValidationResult = shift_validator.check_fields(values, context, refs, mode)
            if result.shift is not None:
                key = (result.shift.employee_id, result.shift.date)
                committed = await schedule_repository.get_for_employee_on_date(
                    db, result.shift.employee_id, result.shift.date, exclude_ids=excluded
                )
                comparison: list[ShiftWindow] = [
                    ShiftWindow(row.date, row.start_time, row.end_time) for row in committed
                ]
                comparison.extend(staged_windows.get(key, []))
                shift_validator.check_conflict(result, comparison)

            if not result.ok:
                outcome.errors.append(_error_from_result(op.index, result))
                continue

            staged_windows.setdefault((result.shift.employee_id, result.shift.date), []).append(result.shift.window)
            outcome.staged.append(StagedWrite(op, result.shift))

        outcome.errors.sort(key=lambda error: error.index)
        return outcome

    async def _validate_deletes(
        self,
        db: AsyncSession,
        operations: Sequence[PendingOperation],
    ) -> BatchOutcome:
        outcome: BatchOutcome = BatchOutcome()
        ids: list[int] = [op.schedule_id for op in operations if isinstance(op, DeleteShift)]
        found: dict[int, Schedule] = await schedule_repository.get_by_ids(db, ids)

        seen_ids: set[int] = set()
        for op in operations:
            if op.schedule_id in seen_ids:
                outcome.errors.append(BatchItemError(op.index, "duplicate", "Schedule appears more than once in this batch"))
                continue
            seen_ids.add(op.schedule_id)
            if op.schedule_id not in found:
                outcome.errors.append(BatchItemError(op.index, "not_found", "Schedule not found"))
                continue
            outcome.staged.append(StagedWrite(op))
        return outcome

    @staticmethod
    async def _load_references(
        db: AsyncSession,
        items: Sequence[dict[str, Any]],
    ) -> KnownReferences:
        """배치에서 참조하는 직원/역할 중 존재하는 ID를 조회합니다."""
        employee_ids: set[int] = {v["employee_id"] for v in items if isinstance(v.get("employee_id"), int)}
        role_ids: set[int] = {v["assigned_role"] for v in items if isinstance(v.get("assigned_role"), int)}
        staff = await staff_repository.get_by_ids(db, employee_ids)
        roles = await role_repository.get_by_ids(db, role_ids)
        return KnownReferences(employee_ids=frozenset(staff), role_ids=frozenset(roles))

    # --- 커밋 단계 (Committing) ---

    @staticmethod
    async def _write(db: AsyncSession, write: StagedWrite) -> Schedule:
        op: PendingOperation = write.operation
        row: dict[str, Any] = write.shift.to_row()
        if isinstance(op, UpdateShift):
            updated: Schedule | None = await schedule_repository.update(db, op.schedule_id, row)
            if updated is None:
                # 검증 이후 다른 요청이 삭제한 경우 — Deleted by another request after validation
                raise SQLAlchemyError(f"Schedule {op.schedule_id} disappeared before commit")
            return updated
        return await schedule_repository.create(db, row)


def operations_from_items(kind: BatchKind, items: Sequence[Any]) -> list[PendingOperation]:
    """요청 스키마 항목을 대기 작업 목록으로 변환합니다.

    Turn request items into pending operations. Update items keep only the
    fields the client actually sent, so omitted fields retain stored values.
    """
    operations: list[PendingOperation] = []
    for index, item in enumerate(items):
        if kind is BatchKind.DELETE:
            operations.append(DeleteShift(index, item.id))
        elif kind is BatchKind.UPDATE:
            values = {name: getattr(item, name) for name in SHIFT_FIELDS if name in item.model_fields_set}
            operations.append(UpdateShift(index, item.id, values))
        else:
            values = {name: getattr(item, name) for name in SHIFT_FIELDS}
            operations.append(CreateShift(index, values))
    return operations


# 싱글턴 인스턴스 — Singleton instance
schedule_batch_service: ScheduleBatchService = ScheduleBatchService()
