"""
Redis Set Store Adapter

Implements TagStorePort on top of redis-py (async).

Features:
- Lazy client initialization
- MULTI/EXEC batches (one result per command)
- WATCH-guarded read-then-write batches
- Connection health checks

Requirements:
    pip install redis
"""

from collections.abc import Sequence
from typing import Any

from redis.asyncio import Redis
from redis.asyncio.client import Pipeline
from redis.exceptions import RedisError, WatchError

from rtags.common.exceptions import StaleReadError, StoreError
from rtags.common.observability import get_logger
from rtags.common.ports import BatchPlan, SetOp, StoreCommand
from rtags.common.utils import LazyClientInitializer
from rtags.infra.config.groups import StoreConfig

logger = get_logger(__name__)

# redis-py pipeline method per set operation
_PIPELINE_METHODS: dict[SetOp, str] = {
    SetOp.SADD: "sadd",
    SetOp.SREM: "srem",
    SetOp.SMEMBERS: "smembers",
    SetOp.SINTER: "sinter",
    SetOp.DEL: "delete",
}


class RedisTagStore:
    """
    Redis adapter for the tag index.

    Uses redis-py (async) with decode_responses=True, so members come back
    as str.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        password: str | None = None,
        db: int = 0,
        socket_timeout: float | None = None,
    ) -> None:
        """
        Initialize Redis store.

        Args:
            host: Redis host (default: localhost)
            port: Redis port (default: 6379)
            password: Optional Redis password
            db: Redis database number (default: 0)
            socket_timeout: Optional socket timeout in seconds
        """
        self.host = host
        self.port = port
        self.password = password
        self.db = db
        self.socket_timeout = socket_timeout
        self._client_init: LazyClientInitializer[Redis] = LazyClientInitializer()

    @classmethod
    def from_config(cls, config: StoreConfig) -> "RedisTagStore":
        return cls(
            host=config.host,
            port=config.port,
            password=config.password,
            db=config.db,
            socket_timeout=config.socket_timeout,
        )

    async def _get_client(self) -> Redis:
        """
        Get or create Redis client (lazy initialization).

        Returns:
            Redis client instance
        """
        return await self._client_init.get_or_create(
            lambda: Redis(
                host=self.host,
                port=self.port,
                password=self.password,
                db=self.db,
                socket_timeout=self.socket_timeout,
                decode_responses=True,
            )
        )

    @staticmethod
    def _queue(pipe: Pipeline, commands: Sequence[StoreCommand]) -> None:
        for command in commands:
            getattr(pipe, _PIPELINE_METHODS[command.op])(*command.args)

    async def execute_batch(self, commands: Sequence[StoreCommand]) -> list[Any]:
        """
        Execute commands as one MULTI/EXEC transaction.

        Args:
            commands: Ordered batch

        Returns:
            One result per command, in submission order

        Raises:
            StoreError: If the transaction fails
        """
        if not commands:
            return []

        try:
            client = await self._get_client()
            async with client.pipeline(transaction=True) as pipe:
                self._queue(pipe, commands)
                return await pipe.execute()

        except RedisError as e:
            logger.error("redis_batch_failed", commands=len(commands), error=str(e))
            raise StoreError(f"Batch of {len(commands)} commands failed: {e}") from e

    async def execute_guarded(self, watch_key: str, plan: BatchPlan) -> list[Any]:
        """
        Optimistic read-then-write on one set.

        WATCHes watch_key, reads its members, asks plan for the batch and
        commits it with MULTI/EXEC. Redis aborts EXEC if watch_key was
        modified after WATCH.

        Args:
            watch_key: Set whose members drive the batch
            plan: Builds the batch from the members read

        Returns:
            One result per planned command

        Raises:
            StaleReadError: If watch_key changed before commit
            StoreError: If any other Redis operation fails
        """
        try:
            client = await self._get_client()
            async with client.pipeline(transaction=True) as pipe:
                await pipe.watch(watch_key)
                members = await pipe.smembers(watch_key)
                commands = plan(set(members))
                pipe.multi()
                self._queue(pipe, commands)
                return await pipe.execute()

        except WatchError as e:
            logger.warning("redis_guarded_batch_stale", key=watch_key)
            raise StaleReadError(
                f"Set {watch_key} changed before commit",
                details={"key": watch_key},
            ) from e
        except RedisError as e:
            logger.error("redis_guarded_batch_failed", key=watch_key, error=str(e))
            raise StoreError(f"Guarded batch on {watch_key} failed: {e}") from e

    async def read_members(self, key: str) -> set[str]:
        """
        Get all members of a set.

        Raises:
            StoreError: If Redis operation fails
        """
        try:
            client = await self._get_client()
            return set(await client.smembers(key))

        except RedisError as e:
            logger.error("redis_smembers_failed", key=key, error=str(e))
            raise StoreError(f"Failed to read members of {key}: {e}") from e

    async def ping(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            True if Redis is reachable, False otherwise
        """
        try:
            client = await self._get_client()
            await client.ping()
            return True

        except RedisError as e:
            logger.error("redis_ping_failed", error=str(e))
            return False

    async def close(self) -> None:
        """
        Close Redis connection.

        Should be called during application shutdown.
        """
        if client := self._client_init.get_if_exists():
            await client.aclose()
            self._client_init.reset()
            logger.info("redis_connection_closed", host=self.host, port=self.port)
