"""
구조화 로깅 설정

structlog 기반. stdlib logging을 출력 백엔드로 사용합니다.
"""

import logging
import os

import structlog
from structlog.processors import JSONRenderer


def get_log_level() -> str:
    """환경 변수 기반 로그 레벨"""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(
    level: str | None = None,
    json_format: bool = False,
):
    """
    구조화 로깅 설정.

    Args:
        level: 로그 레벨 (None이면 환경변수 사용)
        json_format: JSON 포맷 (분석용)
    """
    if level is None:
        level = get_log_level()

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level),
    )
    logging.getLogger("rtags").setLevel(getattr(logging, level))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """구조화 로거 가져오기"""
    return structlog.get_logger(name)
