"""
Lazy query descriptors.

Construction only validates and records parameters; nothing touches the
store until execute(). Every execute() re-issues the same single-command
batch, there is no cached result.
"""

import inspect
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from rtags.common.exceptions import InfrastructureError
from rtags.common.observability import get_logger
from rtags.common.ports import SetOp, StoreCommand
from rtags.index.ids import ObjectId, TagList, canonical_object_id, parse_tags

if TYPE_CHECKING:
    from rtags.index.tag_index import TagIndex

logger = get_logger(__name__)

# callback(error, result); may be a plain function or a coroutine function
Completion = Callable[[Exception | None, Any], Any]


async def notify(callback: Completion, error: Exception | None, result: Any) -> None:
    """Invoke a completion callback, awaiting it if it is async."""
    outcome = callback(error, result)
    if inspect.isawaitable(outcome):
        await outcome


class QueryState(str, Enum):
    """Query 생명주기"""

    BUILT = "built"
    EXECUTED = "executed"


class Query:
    """Base class: one store batch whose first result is a member set."""

    def __init__(self, index: "TagIndex"):
        self._index = index
        self.state = QueryState.BUILT

    def commands(self) -> list[StoreCommand]:
        """The batch this query submits."""
        raise NotImplementedError

    async def execute(self, callback: Completion | None = None) -> list[str]:
        """
        Run the query.

        Args:
            callback: Optional callback(error, members). When given, store
                errors go to it instead of being raised.

        Returns:
            Sorted members ([] when a store error was passed to callback)

        Raises:
            InfrastructureError: Store failure and no callback supplied
        """
        commands = self.commands()
        try:
            results = await self._index.store.execute_batch(commands)
        except InfrastructureError as e:
            self.state = QueryState.EXECUTED
            if callback is None:
                raise
            await notify(callback, e, [])
            return []

        self.state = QueryState.EXECUTED
        members = sorted(results[0] or ())
        logger.debug(
            "query_executed",
            query=type(self).__name__,
            namespace=self._index.key,
            count=len(members),
        )
        if callback is not None:
            await notify(callback, None, members)
        return members

    async def end(self, callback: Completion | None = None) -> list[str]:
        """Alias of execute()."""
        return await self.execute(callback)


class ObjectQuery(Query):
    """Tags carried by one object."""

    def __init__(self, index: "TagIndex", object_id: ObjectId):
        super().__init__(index)
        self.object_id = canonical_object_id(object_id)

    def commands(self) -> list[StoreCommand]:
        return [StoreCommand.of(SetOp.SMEMBERS, self._index.keys.object_key(self.object_id))]


class ObjectPairQuery(Query):
    """Tags common to two objects."""

    def __init__(self, index: "TagIndex", first_id: ObjectId, second_id: ObjectId):
        super().__init__(index)
        self.first_id = canonical_object_id(first_id)
        self.second_id = canonical_object_id(second_id)

    def commands(self) -> list[StoreCommand]:
        keys = self._index.keys
        return [
            StoreCommand.of(
                SetOp.SINTER,
                keys.object_key(self.first_id),
                keys.object_key(self.second_id),
            )
        ]


class TagQuery(Query):
    """Object ids carrying every listed tag."""

    def __init__(self, index: "TagIndex", tags: TagList):
        super().__init__(index)
        self.tags = parse_tags(tags)

    def commands(self) -> list[StoreCommand]:
        keys = [self._index.keys.tag_key(tag) for tag in self.tags]
        if len(keys) == 1:
            return [StoreCommand.of(SetOp.SMEMBERS, keys[0])]
        return [StoreCommand.of(SetOp.SINTER, *keys)]
