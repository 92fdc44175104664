"""Messages to be signed, optionally separated by an application tag."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_TAG_PAD = 64


@dataclass(frozen=True)
class Message:
    """Message bytes with an optional application tag of 1 to 64 bytes."""

    data: bytes
    app_tag: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        if self.app_tag is not None:
            tag = self.app_tag.encode()
            if len(tag) > _TAG_PAD:
                raise ValueError("tag must be 64 bytes or less")
            if not tag:
                raise ValueError("tag must not be empty")

    @classmethod
    def raw(cls, data: bytes) -> Message:
        """A message hashed as-is, such as a pre-hashed one."""
        return cls(data)

    @classmethod
    def plain(cls, app_tag: str, data: bytes) -> Message:
        """A variable-length message tagged with the application's name."""
        return cls(data, app_tag)

    def hash_into(self, hasher: Any) -> Any:
        """Feed the message into ``hasher``, the tag zero-padded to 64 bytes first."""
        if self.app_tag is not None:
            hasher.update(self.app_tag.encode().ljust(_TAG_PAD, b"\x00"))
        hasher.update(self.data)
        return hasher