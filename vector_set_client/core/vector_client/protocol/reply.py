"""
Reply sum type for values returned by the vector set service.

A reply is exactly one of: null, integer, bulk byte string, or an ordered
sequence of replies. Raw values read from a redis-py connection are
converted once by ``reply_from_raw`` and decoded per operation afterwards.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class NullReply:
    """Absent value (nil bulk string or nil array)."""

    def text(self) -> None:
        return None


@dataclass(frozen=True)
class IntegerReply:
    """Integer reply."""

    value: int

    def text(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BulkReply:
    """Bulk or simple string reply, kept as bytes."""

    value: bytes

    def text(self, errors: str = "strict") -> str:
        return self.value.decode("utf-8", errors=errors)


@dataclass(frozen=True)
class ArrayReply:
    """Ordered sequence of replies."""

    items: Tuple["Reply", ...]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


Reply = Union[NullReply, IntegerReply, BulkReply, ArrayReply]

NULL = NullReply()


class UnsupportedReplyError(TypeError):
    """Raw value has no Reply counterpart."""


def reply_from_raw(raw: Any) -> Reply:
    """Convert a raw redis-py value into a Reply.

    Args:
        raw: Value returned by ``Connection.read_response``

    Returns:
        Reply instance

    Raises:
        UnsupportedReplyError: If the value is not null/int/bytes/str/sequence
    """
    if raw is None:
        return NULL
    if isinstance(raw, bool):
        return IntegerReply(int(raw))
    if isinstance(raw, int):
        return IntegerReply(raw)
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return BulkReply(bytes(raw))
    if isinstance(raw, str):
        return BulkReply(raw.encode("utf-8"))
    if isinstance(raw, (list, tuple)):
        return ArrayReply(tuple(reply_from_raw(item) for item in raw))
    raise UnsupportedReplyError(f"Unsupported reply type: {type(raw).__name__}")
