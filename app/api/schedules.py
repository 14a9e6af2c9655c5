"""스케줄 라우터 — 근무 조회 및 단일/일괄 쓰기 엔드포인트.

Schedule Router — Shift listing plus single and batch write endpoints.

Batch writes are all or nothing: a rejected batch answers 422 with one
error per failed item, each carrying its index in the request.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_validation_context
from app.database import get_db
from app.schemas.common import ApiResponse
from app.schemas.schedule import (
    ScheduleBatchDelete,
    ScheduleBatchUpdate,
    ScheduleCreateRequest,
    ShiftInput,
)
from app.services.schedule_service import schedule_service
from app.services.shift_validator import ValidationContext

router: APIRouter = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_schedules(
    db: Annotated[AsyncSession, Depends(get_db)],
    on_date: Annotated[date | None, Query(alias="date")] = None,
    start_date: Annotated[date | None, Query()] = None,
    end_date: Annotated[date | None, Query()] = None,
    employee_id: Annotated[int | None, Query()] = None,
    role_id: Annotated[int | None, Query()] = None,
    active_only: Annotated[bool, Query()] = False,
) -> ApiResponse:
    """근무 목록을 배정 역할 이름별로 묶어 조회합니다.

    List shifts grouped by assigned role name.
    start_date/end_date 범위는 둘 다 있을 때만 적용됩니다.
    (The date range applies only when both ends are given.)

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        on_date: 특정 날짜, 쿼리 이름 ``date`` (Single date, query name ``date``)
        start_date: 범위 시작일 (Range start)
        end_date: 범위 종료일 (Range end)
        employee_id: 직원 필터 (Employee filter)
        role_id: 배정 역할 필터 (Assigned role filter)
        active_only: 재직 중인 직원만 (Only active employees)
    """
    grouped = await schedule_service.list_schedules(
        db,
        on_date=on_date,
        start_date=start_date,
        end_date=end_date,
        employee_id=employee_id,
        role_id=role_id,
        active_only=active_only,
    )
    return ApiResponse(data=grouped)


@router.post("", response_model=ApiResponse, status_code=201)
async def create_schedules(
    data: ScheduleCreateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Annotated[ValidationContext, Depends(get_validation_context)],
) -> ApiResponse:
    """근무를 생성합니다 — 단일 객체 또는 ``{"shifts": [...]}`` 배치.

    Create one shift, or a batch under ``shifts``.
    """
    if data.shifts is None:
        created = await schedule_service.create_schedule(db, data.batch_items()[0], context)
        return ApiResponse(message="Schedule created successfully", data=created)

    created_list = await schedule_service.create_schedules(db, data.batch_items(), context)
    return ApiResponse(message="Schedules created successfully", data=created_list)


@router.put("", response_model=ApiResponse)
async def update_schedules(
    data: ScheduleBatchUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Annotated[ValidationContext, Depends(get_validation_context)],
) -> ApiResponse:
    """근무 배치를 수정합니다.

    Update a batch of shifts.
    """
    updated = await schedule_service.update_schedules(db, data.shifts, context)
    return ApiResponse(message="Schedules updated successfully", data=updated)


@router.delete("", response_model=ApiResponse)
async def delete_schedules(
    data: ScheduleBatchDelete,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """근무 배치를 삭제합니다.

    Delete a batch of shifts.
    """
    deleted: list[int] = await schedule_service.delete_schedules(db, data.shifts)
    return ApiResponse(message="Schedules deleted successfully", data={"deleted_ids": deleted})


@router.put("/{schedule_id}", response_model=ApiResponse)
async def update_schedule(
    schedule_id: int,
    data: ShiftInput,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Annotated[ValidationContext, Depends(get_validation_context)],
) -> ApiResponse:
    """단일 근무를 수정합니다.

    Update one shift; omitted fields keep their stored values.
    """
    updated = await schedule_service.update_schedule(db, schedule_id, data, context)
    return ApiResponse(message="Schedule updated successfully", data=updated)


@router.delete("/{schedule_id}", response_model=ApiResponse)
async def delete_schedule(
    schedule_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """단일 근무를 삭제합니다.

    Delete one shift.
    """
    await schedule_service.delete_schedule(db, schedule_id)
    return ApiResponse(message="Schedule deleted successfully")
