"""
Tag Index

Namespace-scoped bidirectional tag index:

    <namespace>:tag:<tag>      set of object ids
    <namespace>:object:<id>    set of tags

Every mutation writes both directions in one atomic batch, so an id is in a
tag set iff the tag is in that id's object set.

Usage:
    index = TagIndex("docs", RedisTagStore())
    await index.add("red,blue", 1)
    await index.add("blue,green", 2)

    await index.query_by_tags("red,blue").execute()   # ["1"]
    await index.query_by_object(1, 2).execute()       # ["blue"]
"""

from collections.abc import Sequence
from typing import Any

from rtags.common.exceptions import InfrastructureError, StaleReadError
from rtags.common.observability import get_logger
from rtags.common.ports import BatchPlan, SetOp, StoreCommand, TagStorePort
from rtags.index.ids import ObjectId, TagList, canonical_object_id, parse_tags
from rtags.index.keys import KeySchema
from rtags.index.queries import (
    Completion,
    ObjectPairQuery,
    ObjectQuery,
    TagQuery,
    notify,
)
from rtags.infra.config.groups import IndexConfig

logger = get_logger(__name__)


class TagIndex:
    """
    Bidirectional tag index over a set store.

    The store is injected and borrowed; the index never closes it.
    Store-touching methods take an optional callback(error, result). With a
    callback, store errors are delivered to it; without one they are raised.
    Input errors are always raised before the store is touched.
    """

    def __init__(self, key: str, store: TagStorePort, config: IndexConfig | None = None):
        """
        Args:
            key: Namespace prefix (non-empty)
            store: Set store implementing TagStorePort
            config: Index behaviour (guarded removal, retries)

        Raises:
            InvalidInputError: If key is empty
        """
        self.keys = KeySchema(key)
        self.store = store
        self.config = config or IndexConfig()

    @property
    def key(self) -> str:
        return self.keys.namespace

    def __repr__(self) -> str:
        return f"TagIndex(key={self.key!r})"

    # ========================================================================
    # Mutations
    # ========================================================================

    async def add(self, tags: TagList, object_id: ObjectId, callback: Completion | None = None) -> "TagIndex":
        """
        Tag an object.

        Args:
            tags: "a,b" or ["a", "b"]
            object_id: int or str
            callback: Optional callback(error, per-command results)

        Returns:
            self
        """
        labels = parse_tags(tags)
        oid = canonical_object_id(object_id)
        await self._submit(self._pair_commands(SetOp.SADD, labels, oid), callback, "tags_added", tags=len(labels))
        return self

    async def remove_tags(
        self, tags: TagList, object_id: ObjectId, callback: Completion | None = None
    ) -> "TagIndex":
        """Untag an object. Tags the object does not carry are ignored."""
        labels = parse_tags(tags)
        oid = canonical_object_id(object_id)
        await self._submit(self._pair_commands(SetOp.SREM, labels, oid), callback, "tags_removed", tags=len(labels))
        return self

    async def remove_object(self, object_id: ObjectId, callback: Completion | None = None) -> "TagIndex":
        """
        Remove an object and every membership it has.

        Phase 1 reads the object's tags, phase 2 deletes the object set and
        removes the id from each of those tag sets.

        With config.guarded_remove the read is WATCHed and the commit is
        retried up to config.remove_max_retries times when the object set
        changes in between; after that StaleReadError is raised (or passed
        to callback). Without it a concurrent add between the phases can
        leave the id behind in a tag set.
        """
        oid = canonical_object_id(object_id)
        object_key = self.keys.object_key(oid)

        def plan(tags: set[str]) -> list[StoreCommand]:
            commands = [StoreCommand.of(SetOp.DEL, object_key)]
            commands.extend(StoreCommand.of(SetOp.SREM, self.keys.tag_key(tag), oid) for tag in sorted(tags))
            return commands

        try:
            if self.config.guarded_remove:
                results = await self._execute_guarded(object_key, plan)
            else:
                tags = await self.store.read_members(object_key)
                results = await self.store.execute_batch(plan(tags))
        except InfrastructureError as e:
            if callback is None:
                raise
            await notify(callback, e, None)
            return self

        logger.debug("object_removed", namespace=self.key, object_id=oid, tags=len(results) - 1)
        if callback is not None:
            await notify(callback, None, results)
        return self

    # ========================================================================
    # Query builders
    # ========================================================================

    def query_by_object(self, object_id: ObjectId, other_id: ObjectId | None = None) -> ObjectQuery | ObjectPairQuery:
        """
        Tags of one object, or the tags two objects share.

        Returns an unexecuted query; call execute() on it.
        """
        if other_id is None:
            return ObjectQuery(self, object_id)
        return ObjectPairQuery(self, object_id, other_id)

    def query_by_tags(self, tags: TagList) -> TagQuery:
        """Object ids carrying every listed tag (unexecuted)."""
        return TagQuery(self, tags)

    # rtags 0.1 names
    query_id = query_by_object
    query_tag = query_by_tags
    del_tag = remove_tags
    remove = remove_object

    # ========================================================================
    # Internals
    # ========================================================================

    def _pair_commands(self, op: SetOp, labels: Sequence[str], oid: str) -> list[StoreCommand]:
        object_key = self.keys.object_key(oid)
        commands = []
        for tag in labels:
            commands.append(StoreCommand.of(op, self.keys.tag_key(tag), oid))
            commands.append(StoreCommand.of(op, object_key, tag))
        return commands

    async def _submit(
        self,
        commands: list[StoreCommand],
        callback: Completion | None,
        event: str,
        **fields: Any,
    ) -> None:
        try:
            results = await self.store.execute_batch(commands)
        except InfrastructureError as e:
            if callback is None:
                raise
            await notify(callback, e, None)
            return

        logger.debug(event, namespace=self.key, commands=len(commands), **fields)
        if callback is not None:
            await notify(callback, None, results)

    async def _execute_guarded(self, object_key: str, plan: BatchPlan) -> list[Any]:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self.store.execute_guarded(object_key, plan)
            except StaleReadError:
                if attempt > self.config.remove_max_retries:
                    raise
                logger.warning("remove_object_retry", key=object_key, attempt=attempt)
