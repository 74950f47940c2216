"""
설정 그룹 정의.

Settings를 논리적 그룹으로 분리하여 관리합니다.
"""

from pydantic import BaseModel, Field


class StoreConfig(BaseModel):
    """Redis set store 설정."""

    host: str = Field(default="localhost", description="Redis 호스트")
    port: int = Field(default=6379, ge=1, le=65535, description="Redis 포트")
    db: int = Field(default=0, ge=0, le=15, description="Redis DB 번호")
    password: str | None = Field(default=None, description="Redis 비밀번호")
    socket_timeout: float | None = Field(default=None, gt=0, description="소켓 타임아웃 (초)")


class IndexConfig(BaseModel):
    """Tag index 동작 설정."""

    guarded_remove: bool = Field(
        default=True,
        description="remove_object를 WATCH 기반으로 보호 (False면 비보호 read-then-write)",
    )
    remove_max_retries: int = Field(
        default=3,
        ge=0,
        le=100,
        description="StaleReadError 전 remove_object 재시도 횟수",
    )
