"""
Store port (interface) required by the tag index.

The index layer depends only on this protocol; the Redis adapter in
rtags.infra.store implements it.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


class SetOp(str, Enum):
    """Set operations addressable within one atomic batch."""

    SADD = "sadd"
    SREM = "srem"
    SMEMBERS = "smembers"
    SINTER = "sinter"
    DEL = "del"


@dataclass(frozen=True)
class StoreCommand:
    """One command of an atomic batch: operation plus positional args."""

    op: SetOp
    args: tuple[str, ...]

    @classmethod
    def of(cls, op: SetOp, *args: str) -> "StoreCommand":
        return cls(op=op, args=tuple(args))


# Receives the watched set's members, returns the batch to commit.
BatchPlan = Callable[[set[str]], Sequence[StoreCommand]]


class TagStorePort(Protocol):
    """
    Set store port.

    Every batch runs as one atomic unit and yields one result per command,
    in submission order.
    """

    async def execute_batch(self, commands: Sequence[StoreCommand]) -> list[Any]:
        """Execute commands as one atomic batch"""
        ...

    async def execute_guarded(self, watch_key: str, plan: BatchPlan) -> list[Any]:
        """
        Read watch_key's members, build a batch with plan, commit atomically.

        Raises StaleReadError if watch_key changed between read and commit.
        """
        ...

    async def read_members(self, key: str) -> set[str]:
        """Members of one set (empty if the key does not exist)"""
        ...

    async def ping(self) -> bool:
        """Health check"""
        ...

    async def close(self) -> None:
        """Release the connection"""
        ...
