"""직원 라우터 — 직원 CRUD 및 퇴사 처리 엔드포인트.

Staff Router — CRUD and termination endpoints for staff members.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock
from app.database import get_db
from app.schemas.common import ApiResponse
from app.schemas.staff import StaffCreate, StaffDetailResponse, StaffResponse, StaffUpdate
from app.services.staff_service import staff_service
from app.utils.clock import Clock

router: APIRouter = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_staff(
    db: Annotated[AsyncSession, Depends(get_db)],
    active: Annotated[bool | None, Query()] = None,
    role_id: Annotated[int | None, Query()] = None,
) -> ApiResponse:
    """직원 목록을 조회합니다.

    List staff members with their home role.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        active: true=재직 중, false=퇴사, 생략=전체 (Active filter)
        role_id: 기본 역할 필터, 선택 (Optional home role filter)
    """
    members: list[StaffResponse] = await staff_service.list_staff(db, active=active, role_id=role_id)
    return ApiResponse(data=members)


@router.post("", response_model=ApiResponse, status_code=201)
async def create_staff(
    data: StaffCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """새 직원을 생성합니다.

    Create a new staff member.
    """
    result: StaffResponse = await staff_service.create_staff(db, data)
    await db.commit()
    return ApiResponse(message="Staff member created successfully", data=result)


@router.get("/{staff_id}", response_model=ApiResponse)
async def get_staff(
    staff_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """직원 상세를 역할, 스케줄과 함께 조회합니다.

    Get one staff member with their role and schedules.
    """
    result: StaffDetailResponse = await staff_service.get_staff(db, staff_id)
    return ApiResponse(data=result)


@router.put("/{staff_id}", response_model=ApiResponse)
async def update_staff(
    staff_id: int,
    data: StaffUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """직원 정보를 수정합니다.

    Update a staff member.
    """
    result: StaffResponse = await staff_service.update_staff(db, staff_id, data)
    await db.commit()
    return ApiResponse(message="Staff member updated successfully", data=result)


@router.delete("/{staff_id}", response_model=ApiResponse)
async def delete_staff(
    staff_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """직원을 삭제합니다.

    Delete a staff member without schedules.
    """
    await staff_service.delete_staff(db, staff_id)
    await db.commit()
    return ApiResponse(message="Staff member deleted successfully")


@router.put("/{staff_id}/terminate", response_model=ApiResponse)
async def terminate_staff(
    staff_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> ApiResponse:
    """직원을 퇴사 처리합니다 — 퇴사일을 오늘로 설정.

    Terminate a staff member; the end date becomes today.
    """
    result: StaffResponse = await staff_service.terminate_staff(db, staff_id, clock.today())
    await db.commit()
    return ApiResponse(message="Staff member terminated successfully", data=result)
