"""
Object id canonicalization and tag list parsing.

Object ids are NumericId (int) or StringId (str). Both serialize to one
canonical string, so 1 and "1" address the same object set.
"""

from collections.abc import Iterable

from rtags.common.exceptions import InvalidInputError

TAG_SEPARATOR = ","

ObjectId = int | str
TagList = str | Iterable[str]


def canonical_object_id(object_id: ObjectId) -> str:
    """
    Canonical string form of an object id.

    Raises:
        InvalidInputError: bool/float/None/other types, or an empty string
    """
    # bool is an int subclass; True must not become "True" or "1"
    if isinstance(object_id, bool):
        raise InvalidInputError("Object id must be int or str, got bool", details={"object_id": object_id})
    if isinstance(object_id, int):
        return str(object_id)
    if isinstance(object_id, str):
        if not object_id:
            raise InvalidInputError("Object id must not be empty")
        return object_id
    raise InvalidInputError(
        f"Object id must be int or str, got {type(object_id).__name__}",
        details={"object_id": repr(object_id)},
    )


def parse_tags(tags: TagList) -> list[str]:
    """
    Normalize a tag list to ordered, unique labels.

    A string is split on TAG_SEPARATOR with no escaping and no whitespace
    trimming. Empty segments are dropped.

    Args:
        tags: "a,b,c" or ["a", "b", "c"]

    Returns:
        Labels in first-seen order

    Raises:
        InvalidInputError: Nothing left after splitting, or a label in an
            iterable is not a str or contains the separator
    """
    if isinstance(tags, str):
        labels = tags.split(TAG_SEPARATOR)
    else:
        try:
            labels = list(tags)
        except TypeError as e:
            raise InvalidInputError(f"Tag list must be str or iterable, got {type(tags).__name__}") from e
        for label in labels:
            if not isinstance(label, str):
                raise InvalidInputError(
                    f"Tag label must be str, got {type(label).__name__}",
                    details={"label": repr(label)},
                )
            if TAG_SEPARATOR in label:
                raise InvalidInputError(
                    f"Tag label must not contain {TAG_SEPARATOR!r}",
                    details={"label": label},
                )

    result = list(dict.fromkeys(label for label in labels if label))
    if not result:
        raise InvalidInputError("Tag list is empty", details={"tags": repr(tags)})
    return result
