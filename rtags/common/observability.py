"""
Observability entry point.

First call to get_logger() bootstraps logging from the active log profile.
"""

from typing import Any

from rtags.common.log_profiles import init_logging
from rtags.common.logging_config import get_logger as get_structured_logger

# 전역 로거 캐시
_LOGGER_CACHE: dict[str, Any] = {}
_INITIALIZED = False


def get_logger(name: str):
    """
    로거 가져오기 (프로필 기반 자동 설정).

    Args:
        name: 로거 이름 (보통 __name__)

    Returns:
        structlog 로거
    """
    global _INITIALIZED

    if not _INITIALIZED:
        init_logging()
        _INITIALIZED = True

    if name in _LOGGER_CACHE:
        return _LOGGER_CACHE[name]

    logger = get_structured_logger(name)
    _LOGGER_CACHE[name] = logger
    return logger


def reset_logging():
    """로깅 시스템 리셋 (테스트용)"""
    global _INITIALIZED
    _INITIALIZED = False
    _LOGGER_CACHE.clear()
