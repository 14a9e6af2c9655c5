"""근무 검증기 — 필드 규칙과 시간 충돌 검사.

Shift Validator — Field rules and the overlap check for one shift.

The validator never touches the database. Callers hand it everything it
needs: the raw values, today's date and the duration limit, the sets of
employee and role ids that exist, and the employee's other shifts on the
same date. Every field violation is collected before returning so the
client can fix the whole item at once.
"""

from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from enum import Enum
from typing import Any

from app.utils.shift_time import ShiftWindow, conflicts, parse_date, parse_time, shift_duration

# 충돌 메시지 — Conflict message shared by single and batch endpoints
CONFLICT_MESSAGE: str = "Scheduling conflict: Employee already has a shift during this time"


class ValidationMode(str, Enum):
    """검증 모드 — 생성 시에만 배정 역할이 필수."""

    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True)
class ValidationContext:
    """검증 컨텍스트.

    Attributes:
        today: 오늘 날짜 — 주입된 시계에서 가져옴 (Today, from the injected clock)
        max_duration_hours: 최대 근무 길이 (Maximum shift length in hours)
    """

    today: date
    max_duration_hours: int = 12


@dataclass(frozen=True)
class KnownReferences:
    """존재하는 직원/역할 ID 집합 — 호출자가 레포지토리에서 미리 조회.

    Employee and role ids known to exist, loaded by the caller.
    """

    employee_ids: Collection[int] = frozenset()
    role_ids: Collection[int] = frozenset()


@dataclass(frozen=True)
class NormalizedShift:
    """검증을 통과한 근무 값."""

    date: date
    start_time: time
    end_time: time
    employee_id: int
    assigned_role: int | None

    @property
    def window(self) -> ShiftWindow:
        return ShiftWindow(self.date, self.start_time, self.end_time)

    def to_row(self) -> dict[str, Any]:
        """스케줄 테이블 컬럼 딕셔너리로 변환합니다."""
        return {
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "employee_id": self.employee_id,
            "assigned_role": self.assigned_role,
        }


@dataclass
class ValidationResult:
    """검증 결과 — 성공 시 shift, 실패 시 violations 또는 conflict.

    Attributes:
        shift: 정규화된 근무, 필드 검증 통과 시 (Normalized shift when fields are valid)
        violations: {필드: [메시지]} (Field violations)
        conflict: 시간 충돌 메시지, 선택 (Scheduling conflict message)
    """

    shift: NormalizedShift | None = None
    violations: dict[str, list[str]] = field(default_factory=dict)
    conflict: str | None = None

    @property
    def ok(self) -> bool:
        return self.shift is not None and not self.violations and self.conflict is None

    def add(self, field_name: str, message: str) -> None:
        self.violations.setdefault(field_name, []).append(message)


class ShiftValidator:
    """근무 검증기.

    Validates one shift. Use ``check_fields`` and ``check_conflict``
    separately when the comparison set depends on the parsed values, or
    ``validate`` when it is already known.
    """

    def check_fields(
        self,
        values: Mapping[str, Any],
        context: ValidationContext,
        refs: KnownReferences,
        mode: ValidationMode = ValidationMode.CREATE,
    ) -> ValidationResult:
        """필드 규칙을 모두 검사합니다 (단락 평가 없음).

        Check every field rule and collect all violations.

        Args:
            values: date, start_time, end_time, employee_id, assigned_role 값.
                    문자열 또는 이미 변환된 date/time 허용
                    (Raw strings, or date/time objects for stored values)
            context: 오늘 날짜와 최대 근무 길이 (Today and the duration limit)
            refs: 존재하는 직원/역할 ID (Known employee and role ids)
            mode: 생성/수정 모드 (Create requires an assigned role)

        Returns:
            ValidationResult: 필드가 모두 유효하면 shift가 채워진 결과
                              (Result carrying the normalized shift when valid)
        """
        result: ValidationResult = ValidationResult()

        shift_date: date | None = self._check_date(values.get("date"), context, result)
        start: time | None = self._check_time(values.get("start_time"), "start_time", "start time", result)
        end: time | None = self._check_time(values.get("end_time"), "end_time", "end time", result)

        employee_id: int | None = values.get("employee_id")
        if employee_id is None:
            result.add("employee_id", "The employee id field is required.")
        elif employee_id not in refs.employee_ids:
            result.add("employee_id", "The selected employee id is invalid.")

        role_id: int | None = values.get("assigned_role")
        if role_id is None:
            if mode is ValidationMode.CREATE:
                result.add("assigned_role", "The assigned role field is required.")
        elif role_id not in refs.role_ids:
            result.add("assigned_role", "The selected assigned role is invalid.")

        if start is not None and end is not None:
            if start == end:
                result.add("end_time", "The end time must be different from the start time.")
            else:
                limit: timedelta = timedelta(hours=context.max_duration_hours)
                if shift_duration(start, end) > limit:
                    result.add(
                        "end_time",
                        f"The shift duration may not be greater than {context.max_duration_hours} hours.",
                    )

        if not result.violations:
            result.shift = NormalizedShift(
                date=shift_date,
                start_time=start,
                end_time=end,
                employee_id=employee_id,
                assigned_role=role_id,
            )
        return result

    def check_conflict(
        self,
        result: ValidationResult,
        existing: Iterable[ShiftWindow],
    ) -> ValidationResult:
        """필드가 유효한 결과에 대해 시간 충돌을 검사합니다.

        Run the overlap check for a field-valid result. ``existing`` must
        already be limited to the same employee and date, without the shift
        being updated. Field-invalid results are returned unchanged.
        """
        if result.shift is None:
            return result
        if conflicts(result.shift.window, existing):
            result.conflict = CONFLICT_MESSAGE
        return result

    def validate(
        self,
        values: Mapping[str, Any],
        context: ValidationContext,
        refs: KnownReferences,
        existing: Iterable[ShiftWindow] = (),
        mode: ValidationMode = ValidationMode.CREATE,
    ) -> ValidationResult:
        """필드 규칙과 시간 충돌을 한 번에 검사합니다."""
        result: ValidationResult = self.check_fields(values, context, refs, mode)
        return self.check_conflict(result, existing)

    @staticmethod
    def _check_date(
        raw: Any,
        context: ValidationContext,
        result: ValidationResult,
    ) -> date | None:
        if raw is None or raw == "":
            result.add("date", "The date field is required.")
            return None
        if isinstance(raw, date):
            value: date = raw
        else:
            try:
                value = parse_date(str(raw))
            except ValueError:
                result.add("date", "The date is not a valid date.")
                return None
        if value < context.today:
            result.add("date", "The date must be a date after or equal to today.")
            return None
        return value

    @staticmethod
    def _check_time(
        raw: Any,
        field_name: str,
        label: str,
        result: ValidationResult,
    ) -> time | None:
        if raw is None or raw == "":
            result.add(field_name, f"The {label} field is required.")
            return None
        if isinstance(raw, time):
            return raw.replace(second=0, microsecond=0)
        try:
            return parse_time(str(raw))
        except ValueError:
            result.add(field_name, f"The {label} does not match the format HH:MM.")
            return None


# 싱글턴 인스턴스 — Singleton instance
shift_validator: ShiftValidator = ShiftValidator()
