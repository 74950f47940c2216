"""
rtags Exception Hierarchy

표준화된 예외 계층으로 일관된 에러 처리를 제공합니다.

사용 가이드:
    1. 입력 에러 → 즉시 발생 (store 접근 전)
    2. store 에러 → StoreError로 래핑 후 콜백 또는 호출자에게 전달
    3. StaleReadError → 재시도 가능 (retryable)

예시:
    try:
        await pipe.execute()
    except RedisError as e:
        raise StoreError("Batch execution failed") from e
"""

from typing import Any


class RtagsError(Exception):
    """Base exception for all rtags errors."""

    retryable: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize rtags error.

        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================
# Validation Errors
# ============================================================


class ValidationError(RtagsError):
    """Input validation failures."""

    pass


class InvalidInputError(ValidationError):
    """Invalid namespace, tag list or object id."""

    pass


class InvalidConfigurationError(ValidationError):
    """Invalid configuration."""

    pass


# ============================================================
# Infrastructure Errors
# ============================================================


class InfrastructureError(RtagsError):
    """Infrastructure failures (store, network)."""

    pass


class StoreError(InfrastructureError):
    """Set store operation failures."""

    pass


class StaleReadError(StoreError):
    """A guarded batch lost a race: the watched set changed before commit."""

    retryable = True


__all__ = [
    "RtagsError",
    "ValidationError",
    "InvalidInputError",
    "InvalidConfigurationError",
    "InfrastructureError",
    "StoreError",
    "StaleReadError",
]
