"""직원 관련 Pydantic 요청/응답 스키마 정의.

Staff Pydantic request/response schema definitions.
Field limits mirror the column sizes of the ``staff`` table.
"""

from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field

from app.schemas.role import RoleResponse
from app.schemas.schedule import ScheduleResponse


class StaffCreate(BaseModel):
    """직원 생성 요청 스키마.

    Staff creation request schema.

    Attributes:
        name: 이름 (Full name)
        phone_number: 전화번호, 선택 (Optional phone number)
        email: 이메일, 고유 (Email address, unique)
        role_id: 기본 역할 ID (Home role identifier)
        start_date: 입사일 (Employment start date)
        end_date: 퇴사일, 선택 — start_date 이후여야 함 (Must be after start_date)
    """

    name: str = Field(min_length=1, max_length=200)
    phone_number: str | None = Field(default=None, max_length=20)
    email: EmailStr = Field(max_length=150)
    role_id: int
    start_date: date
    end_date: date | None = None


class StaffUpdate(BaseModel):
    """직원 수정 요청 스키마 (부분 업데이트).

    Staff update request schema. Only fields present in the body are changed.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    phone_number: str | None = Field(default=None, max_length=20)
    email: EmailStr | None = Field(default=None, max_length=150)
    role_id: int | None = None
    start_date: date | None = None
    end_date: date | None = None


class StaffResponse(BaseModel):
    """직원 응답 스키마 — 기본 역할 포함."""

    id: int
    name: str
    phone_number: str | None = None
    email: str
    role_id: int
    start_date: date
    end_date: date | None = None
    is_active: bool
    role: RoleResponse | None = None
    created_at: datetime
    updated_at: datetime


class StaffDetailResponse(StaffResponse):
    """직원 상세 응답 — 배정된 스케줄 목록 포함."""

    schedules: list[ScheduleResponse] = []
