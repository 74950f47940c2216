"""Tag index: mutations, key scheme and query descriptors."""

from rtags.index.ids import TAG_SEPARATOR, ObjectId, TagList, canonical_object_id, parse_tags
from rtags.index.keys import KeySchema
from rtags.index.queries import ObjectPairQuery, ObjectQuery, Query, QueryState, TagQuery
from rtags.index.tag_index import TagIndex

__all__ = [
    "TagIndex",
    "KeySchema",
    "Query",
    "QueryState",
    "ObjectQuery",
    "ObjectPairQuery",
    "TagQuery",
    "ObjectId",
    "TagList",
    "TAG_SEPARATOR",
    "canonical_object_id",
    "parse_tags",
]
