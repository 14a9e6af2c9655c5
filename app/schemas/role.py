"""역할 관련 Pydantic 요청/응답 스키마 정의.

Role Pydantic request/response schema definitions.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class RoleCreate(BaseModel):
    """역할 생성 요청 스키마.

    Role creation request schema.

    Attributes:
        role_name: 역할 이름 (Role name, unique)
        role_description: 역할 설명, 선택 (Optional description)
    """

    role_name: str = Field(min_length=1, max_length=100)
    role_description: str | None = None


class RoleUpdate(BaseModel):
    """역할 수정 요청 스키마 (부분 업데이트)."""

    role_name: str | None = Field(default=None, min_length=1, max_length=100)
    role_description: str | None = None


class RoleResponse(BaseModel):
    """역할 응답 스키마."""

    id: int
    role_name: str
    role_description: str | None = None
    created_at: datetime
    updated_at: datetime
