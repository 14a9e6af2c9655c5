"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error kinds of the
scheduling API. ``app.main`` renders every one of them as the JSON envelope
``{"success": false, "message": ..., "errors": ...}``.

Usage:
    from app.utils.exceptions import NotFoundError, ValidationFailedError
    raise NotFoundError("Staff member not found")
    raise ValidationFailedError({"email": ["The email has already been taken."]})
"""

from typing import Any

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested resource (role, staff member, schedule) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UnprocessableError(HTTPException):
    """422 Unprocessable Entity 예외 — 요청은 유효하나 처리할 수 없을 때 사용.

    422 Unprocessable Entity exception.
    Base class for every recoverable client error. ``errors`` carries the
    structured detail the client needs to correct and resubmit.

    Args:
        detail: 오류 메시지 (Error message)
        errors: 상세 오류, 선택 (Optional structured error payload)
    """

    def __init__(self, detail: str = "Unprocessable request", errors: Any = None) -> None:
        super().__init__(status_code=422, detail=detail)
        self.errors: Any = errors


class ValidationFailedError(UnprocessableError):
    """필드 검증 실패 — 필드별 메시지 목록을 포함.

    Field validation failure.

    Args:
        errors: {필드: [메시지]} 형식 (Mapping of field name to messages)
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__("Validation failed", errors)


class SchedulingConflictError(UnprocessableError):
    """근무 시간 충돌 — 같은 직원의 다른 근무와 겹칠 때 사용.

    Scheduling conflict: the shift overlaps another shift of the same employee.
    """

    def __init__(
        self,
        detail: str = "Scheduling conflict: Employee already has a shift during this time",
    ) -> None:
        super().__init__(detail)


class BatchRejectedError(UnprocessableError):
    """일괄 처리 거부 — 항목별 오류 목록과 함께 전체 배치를 거부.

    The whole batch was rejected. ``errors`` lists every failed item with
    its original index in the request.

    Args:
        detail: 오류 메시지 (Error message)
        errors: [{"index", "message", "fields"?}] 목록 (Per-item errors)
    """

    def __init__(self, detail: str, errors: list[dict[str, Any]]) -> None:
        super().__init__(detail, errors)


class InternalError(HTTPException):
    """500 Internal Server Error — 예기치 못한 저장소 오류.

    500 Internal Server Error.
    Raised after a persistence failure has been rolled back. The message is
    generic so no partial state leaks to the client.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
