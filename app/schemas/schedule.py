"""스케줄(근무) 관련 Pydantic 요청 스키마 정의.

Schedule (shift) Pydantic request schema definitions.

Shift fields arrive as raw strings on purpose: the shift validator checks
required fields and formats itself so that every violation of an item is
reported at once, keyed by field name.
"""

from datetime import datetime

from pydantic import BaseModel, Field, StrictInt


class ShiftInput(BaseModel):
    """근무 입력 스키마 — 생성 및 수정 공통.

    Shift input shared by create and update.

    Attributes:
        date: 근무 날짜 "YYYY-MM-DD" (Shift date)
        start_time: 시작 시각 "HH:MM" (Start time)
        end_time: 종료 시각 "HH:MM" (End time; earlier than start = next day)
        employee_id: 직원 ID (Employee identifier)
        assigned_role: 배정 역할 ID (Assigned role identifier)
    """

    date: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    employee_id: StrictInt | None = None
    assigned_role: StrictInt | None = None


class ScheduleCreateRequest(ShiftInput):
    """스케줄 생성 요청 — 단일 근무 또는 ``shifts`` 배열.

    Create request. Either a single shift object, or ``{"shifts": [...]}``
    for a batch. When ``shifts`` is present the top-level shift fields are
    ignored.
    """

    shifts: list[ShiftInput] | None = Field(default=None, min_length=1)

    def batch_items(self) -> list[ShiftInput]:
        """배치 항목 목록을 반환합니다 (단일 근무는 길이 1 배치).

        Return the batch items; a single shift becomes a batch of one.
        """
        if self.shifts is not None:
            return self.shifts
        return [ShiftInput.model_validate(self.model_dump(exclude={"shifts"}, exclude_unset=True))]


class ShiftUpdateItem(ShiftInput):
    """일괄 수정 항목 — 대상 스케줄 ID 포함."""

    id: StrictInt


class ScheduleBatchUpdate(BaseModel):
    """스케줄 일괄 수정 요청."""

    shifts: list[ShiftUpdateItem] = Field(min_length=1)


class ShiftDeleteItem(BaseModel):
    """일괄 삭제 항목."""

    id: StrictInt


class ScheduleBatchDelete(BaseModel):
    """스케줄 일괄 삭제 요청."""

    shifts: list[ShiftDeleteItem] = Field(min_length=1)


class ScheduleResponse(BaseModel):
    """스케줄 응답 스키마 — 날짜/시각은 입력과 같은 문자열 형식.

    Schedule response. Dates and times use the same string formats as input.
    """

    id: int
    date: str
    start_time: str
    end_time: str
    employee_id: int
    assigned_role: int | None = None
    created_at: datetime
    updated_at: datetime


class ScheduleListEntry(ScheduleResponse):
    """목록 조회 항목 — 직원 이름, 역할 이름, 표시용 근무 시간 포함.

    Attributes:
        employee_name: 직원 이름 (Employee name)
        role_name: 배정 역할 이름, 없으면 None (Assigned role name)
        shift: "HH:MM - HH:MM" 표시 문자열 (Display range)
        duration: 근무 시간(시간 단위), 자정 넘김 보정 (Hours, overnight adjusted)
    """

    employee_name: str | None = None
    role_name: str | None = None
    shift: str
    duration: float
