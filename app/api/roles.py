"""역할 라우터 — 역할 CRUD 엔드포인트.

Role Router — CRUD endpoints for role management.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import ApiResponse
from app.schemas.role import RoleCreate, RoleResponse, RoleUpdate
from app.services.role_service import role_service

router: APIRouter = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_roles(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """역할 목록을 조회합니다.

    List all roles.
    """
    roles: list[RoleResponse] = await role_service.list_roles(db)
    return ApiResponse(data=roles)


@router.post("", response_model=ApiResponse, status_code=201)
async def create_role(
    data: RoleCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """새 역할을 생성합니다.

    Create a new role.
    """
    result: RoleResponse = await role_service.create_role(db, data)
    await db.commit()
    return ApiResponse(message="Role created successfully", data=result)


@router.put("/{role_id}", response_model=ApiResponse)
async def update_role(
    role_id: int,
    data: RoleUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """역할 정보를 수정합니다.

    Update an existing role.
    """
    result: RoleResponse = await role_service.update_role(db, role_id, data)
    await db.commit()
    return ApiResponse(message="Role updated successfully", data=result)


@router.delete("/{role_id}", response_model=ApiResponse)
async def delete_role(
    role_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse:
    """역할을 삭제합니다.

    Delete a role by its id.
    """
    await role_service.delete_role(db, role_id)
    await db.commit()
    return ApiResponse(message="Role deleted successfully")
