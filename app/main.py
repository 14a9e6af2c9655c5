"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 처리기, 라우터 등록.

FastAPI application entry point — Middleware, exception handlers and router
registration. Every error leaves the API as the envelope
``{"success": false, "message": ..., "errors": ...}``.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import api_router
from app.config import settings
from app.middleware.request_logging import RequestLoggingMiddleware
from app.schemas.common import ErrorResponse
from app.utils.exceptions import UnprocessableError
from app.utils.logger import setup_logging

setup_logging()

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# 요청 로깅 미들웨어 — Request/response logging (loguru + Axiom)
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(RequestLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _envelope(status_code: int, message: str, errors: object = None) -> JSONResponse:
    body: ErrorResponse = ErrorResponse(message=message, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTP 예외를 실패 봉투로 변환합니다.

    Render HTTPException (and the subclasses in ``app.utils.exceptions``)
    as the failure envelope.
    """
    errors = exc.errors if isinstance(exc, UnprocessableError) else None
    if exc.status_code >= 500:
        logger.error("HTTP {} on {} {}: {}", exc.status_code, request.method, request.url.path, exc.detail)
    return _envelope(exc.status_code, str(exc.detail), errors)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 본문/쿼리 검증 오류를 {필드: [메시지]} 형식으로 변환합니다.

    Render pydantic request validation errors as ``{field: [messages]}``.
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # loc 첫 요소는 "body"/"query"/"path" — First element is the location kind
        loc = [str(part) for part in error.get("loc", ())[1:]]
        field_name: str = ".".join(loc) or "body"
        errors.setdefault(field_name, []).append(error.get("msg", "Invalid value"))
    return _envelope(422, "Validation failed", errors)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """처리되지 않은 예외 — 일반 메시지로 500 응답."""
    logger.opt(exception=exc).error("Unhandled exception on {} {}", request.method, request.url.path)
    return _envelope(500, "Internal server error")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(api_router, prefix="/api")
