"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schema definitions.
Every endpoint answers with the same envelope so the single-page client
can branch on ``success`` alone.
"""

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """성공 응답 봉투 스키마.

    Success envelope.

    Attributes:
        success: 항상 True (Always true for this schema)
        message: 사람이 읽는 메시지, 선택 (Optional human-readable message)
        data: 응답 데이터 (Payload)
    """

    success: bool = True
    message: str | None = None  # 생성/수정/삭제 시 확인 메시지 (Confirmation message)
    data: Any = None  # 응답 페이로드 (Response payload)


class ErrorResponse(BaseModel):
    """실패 응답 봉투 스키마.

    Failure envelope, produced by the exception handlers in ``app.main``.

    Attributes:
        success: 항상 False (Always false)
        message: 오류 요약 (Error summary)
        errors: 필드별 또는 항목별 상세 오류, 선택
                (Per-field or per-item detail, optional)
    """

    success: bool = False
    message: str
    errors: Any = None
