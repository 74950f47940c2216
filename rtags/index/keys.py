"""Key-naming scheme shared with existing rtags data."""

from dataclasses import dataclass

from rtags.common.exceptions import InvalidInputError


@dataclass(frozen=True)
class KeySchema:
    """
    Keys of one namespace.

    "<namespace>:tag:<tag>"       -> object ids carrying the tag
    "<namespace>:object:<id>"     -> tags carried by the object
    """

    namespace: str

    def __post_init__(self) -> None:
        if not isinstance(self.namespace, str) or not self.namespace:
            raise InvalidInputError("A non-empty namespace key is required")

    def tag_key(self, tag: str) -> str:
        return f"{self.namespace}:tag:{tag}"

    def object_key(self, object_id: str) -> str:
        return f"{self.namespace}:object:{object_id}"
