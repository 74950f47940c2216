"""Shared building blocks: errors, logging, store port."""

from rtags.common.exceptions import (
    InfrastructureError,
    InvalidConfigurationError,
    InvalidInputError,
    RtagsError,
    StaleReadError,
    StoreError,
    ValidationError,
)
from rtags.common.observability import get_logger
from rtags.common.ports import SetOp, StoreCommand, TagStorePort

__all__ = [
    "RtagsError",
    "ValidationError",
    "InvalidInputError",
    "InvalidConfigurationError",
    "InfrastructureError",
    "StoreError",
    "StaleReadError",
    "get_logger",
    "SetOp",
    "StoreCommand",
    "TagStorePort",
]
