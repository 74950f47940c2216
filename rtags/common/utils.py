"""
Common Utility Functions

LazyClientInitializer - 지연 클라이언트 초기화 패턴.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class LazyClientInitializer(Generic[T]):
    """
    지연 클라이언트 초기화 패턴.

    Usage:
        class RedisTagStore:
            def __init__(self, host: str, port: int):
                self._client_init = LazyClientInitializer[Redis]()
                self.host = host
                self.port = port

            async def _get_client(self) -> Redis:
                return await self._client_init.get_or_create(
                    lambda: Redis(host=self.host, port=self.port)
                )
    """

    def __init__(self) -> None:
        self._client: T | None = None
        self._lock = asyncio.Lock()

    async def get_or_create(
        self,
        factory: Callable[[], T] | Callable[[], Awaitable[T]],
    ) -> T:
        """
        클라이언트 인스턴스를 가져오거나 생성.

        Args:
            factory: 클라이언트 생성 함수 (sync 또는 async)

        Returns:
            클라이언트 인스턴스
        """
        if self._client is not None:
            return self._client

        async with self._lock:
            # Double-check locking
            if self._client is not None:
                return self._client

            result = factory()
            if asyncio.iscoroutine(result):
                self._client = await result  # type: ignore[assignment]
            else:
                self._client = result  # type: ignore[assignment]

            return self._client  # type: ignore[return-value]

    def get_if_exists(self) -> T | None:
        """이미 생성된 클라이언트 반환 (없으면 None)"""
        return self._client

    def reset(self) -> None:
        """클라이언트 참조 해제"""
        self._client = None
