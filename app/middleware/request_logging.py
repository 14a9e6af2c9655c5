"""요청 로깅 미들웨어 — loguru 및 Axiom.

Request logging middleware.
Every request is logged through loguru on the ``api`` channel (method, url,
client ip, status, duration). When Axiom is configured the same event, plus
the masked request body and the error message of failed responses, is also
sent to Axiom.
"""

import json
import re
import time
from datetime import datetime, timezone
from typing import Any

from axiom_py import Client as AxiomClient
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential|phone)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 요청 로그 채널 — Bound logger for the request log file sink
api_logger = logger.bind(channel="api")


def _mask(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask(item, depth + 1) for item in data[:50]]
    return data


def _error_message(body: bytes) -> str:
    """오류 응답 봉투에서 메시지를 추출합니다."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:500]
    if isinstance(payload, dict):
        return str(payload.get("message", payload))[:500]
    return str(payload)[:500]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 기록하는 미들웨어.

    Middleware that logs every API request and response.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        url = str(request.url)
        client_ip = request.client.host if request.client else None

        api_logger.info(
            "Request {} {}",
            method, url,
            ip=client_ip,
            time=datetime.now(timezone.utc).isoformat(),
        )

        # Request body — Axiom 전송용 (Only read when Axiom is configured)
        request_body: Any = None
        if self._client and method in ("POST", "PUT", "PATCH", "DELETE"):
            body_bytes = await request.body()
            if body_bytes:
                try:
                    request_body = _mask(json.loads(body_bytes))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    request_body = "(non-json body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error message from error responses
            if status_code >= 400 and self._client:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = _error_message(resp_body)

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            api_logger.info(
                "Response {} {} {} ({}ms)",
                method, url, status_code, duration_ms,
                status=status_code,
                duration_ms=duration_ms,
                time=datetime.now(timezone.utc).isoformat(),
            )
            if self._client:
                self._send_to_axiom(request, status_code, duration_ms, client_ip, request_body, error_detail)

        return response

    def _send_to_axiom(
        self,
        request: Request,
        status_code: int,
        duration_ms: float,
        client_ip: str | None,
        request_body: Any,
        error_detail: str | None,
    ) -> None:
        """Axiom 로그 이벤트를 전송합니다 — 실패해도 요청 처리에는 영향 없음."""
        log_event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": duration_ms,
            "ip": client_ip,
        }
        if request.query_params:
            log_event["query_params"] = _mask(dict(request.query_params))
        if request.path_params:
            log_event["path_params"] = dict(request.path_params)
        if request_body is not None:
            log_event["request_body"] = request_body
        if error_detail:
            log_event["error"] = error_detail

        try:
            self._client.ingest_events(self._dataset, [log_event])
        except Exception as exc:
            logger.warning("Axiom ingest failed: {}", exc)
