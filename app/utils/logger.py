"""로깅 설정 모듈 — loguru 싱크 구성.

Logging configuration module using loguru.
A console sink is always installed. When ``LOG_FILE`` is set, request logs
are also written there as JSON lines, rotated daily and kept for 30 days.
"""

import sys

from loguru import logger

from app.config import settings

# 콘솔 출력 형식 — Console line format
_CONSOLE_FORMAT: str = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_configured: bool = False


def setup_logging() -> None:
    """loguru 싱크를 설정합니다 (여러 번 호출해도 한 번만 적용).

    Install the loguru sinks. Calling it again is a no-op.
    """
    global _configured
    if _configured:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        format=_CONSOLE_FORMAT,
        level=settings.LOG_LEVEL,
        colorize=True,
        backtrace=settings.DEBUG,
        diagnose=settings.DEBUG,
    )

    # 요청 로그 파일 — Request log channel, JSON lines
    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            level=settings.LOG_LEVEL,
            filter=lambda record: record["extra"].get("channel") == "api",
            rotation="00:00",
            retention="30 days",
            serialize=True,
            enqueue=True,
        )

    _configured = True
    logger.bind(log_level=settings.LOG_LEVEL, log_file=settings.LOG_FILE or None).info(
        "{} logging configured", settings.APP_NAME
    )
