"""
Reply decoder for vector set operations.

Each ``decode_*`` function accepts one Reply shape family and returns the
typed value an operation promises, raising DecodeError for any other shape.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from ..exceptions import DecodeError
from .protocol import ArrayReply, BulkReply, IntegerReply, NullReply, Reply
from .result import RawEmbedding, SimilarityRecord, record_width, records_from_rows

# Bulk payloads may be binary (VEMB RAW); surrogateescape keeps them lossless.
TEXT_ERRORS = "surrogateescape"


def _text(reply: Union[BulkReply, IntegerReply]) -> str:
    if isinstance(reply, BulkReply):
        return reply.text(errors=TEXT_ERRORS)
    return reply.text()


def _unexpected(reply: Reply, expected: str, command: str, key: Optional[str]) -> DecodeError:
    return DecodeError(
        f"{command}: expected {expected}, got {type(reply).__name__}",
        command=command,
        key=key,
        reply=reply,
    )


def decode_integer(reply: Reply, command: str, key: Optional[str] = None) -> int:
    """Decode an integer reply; null decodes to 0."""
    if isinstance(reply, NullReply):
        return 0
    if isinstance(reply, IntegerReply):
        return reply.value
    if isinstance(reply, BulkReply):
        try:
            return int(reply.text())
        except (UnicodeDecodeError, ValueError):
            raise _unexpected(reply, "integer", command, key) from None
    raise _unexpected(reply, "integer", command, key)


def decode_boolean(reply: Reply, command: str, key: Optional[str] = None) -> bool:
    """True only when the reply's text form is exactly "1"."""
    if isinstance(reply, (IntegerReply, BulkReply)):
        return _text(reply) == "1"
    return False


def flatten(reply: Reply) -> List[str]:
    """Flatten a reply into scalar strings, dropping nulls."""
    if isinstance(reply, NullReply):
        return []
    if isinstance(reply, ArrayReply):
        out: List[str] = []
        for item in reply.items:
            out.extend(flatten(item))
        return out
    return [_text(reply)]


def decode_string_list(reply: Reply, command: str, key: Optional[str] = None) -> List[str]:
    """Decode a sequence reply into an ordered list of strings; null is []."""
    if isinstance(reply, (NullReply, ArrayReply)):
        return flatten(reply)
    raise _unexpected(reply, "sequence", command, key)


def decode_single_or_list(reply: Reply, command: str, key: Optional[str] = None) -> List[str]:
    """Decode a scalar or sequence reply into a list of strings."""
    return flatten(reply)


def decode_optional_string(
    reply: Reply, command: str, key: Optional[str] = None
) -> Optional[str]:
    """Decode a bulk reply to text; null decodes to None (not "")."""
    if isinstance(reply, NullReply):
        return None
    if isinstance(reply, (BulkReply, IntegerReply)):
        return _text(reply)
    raise _unexpected(reply, "string or null", command, key)


def _cell(reply: Reply, command: str, key: Optional[str]) -> Optional[str]:
    if isinstance(reply, NullReply):
        return None
    if isinstance(reply, (BulkReply, IntegerReply)):
        return _text(reply)
    raise _unexpected(reply, "scalar record field", command, key)


def decode_similarity_records(
    reply: Reply,
    with_scores: bool,
    with_attribs: bool,
    command: str = "VSIM",
    key: Optional[str] = None,
) -> List[SimilarityRecord]:
    """Group a VSIM sequence reply into records.

    The record width follows the requested flags, not the reply content.
    Null attribute cells are kept as None so records stay aligned.
    """
    if isinstance(reply, NullReply):
        return []
    if not isinstance(reply, ArrayReply):
        raise _unexpected(reply, "sequence", command, key)
    width = record_width(with_scores, with_attribs)
    if len(reply) % width:
        raise DecodeError(
            f"{command}: {len(reply)} items do not form records of width {width}",
            command=command,
            key=key,
            reply=reply,
        )
    cells = [_cell(item, command, key) for item in reply.items]
    rows = [tuple(cells[i : i + width]) for i in range(0, len(cells), width)]
    for row in rows:
        if row[0] is None:
            raise DecodeError(
                f"{command}: record without element id", command=command, key=key, reply=reply
            )
    return records_from_rows(rows, with_scores, with_attribs)


def group_records(
    items: List[str], with_scores: bool, with_attribs: bool
) -> List[SimilarityRecord]:
    """Group an already flattened VSIM result list into records."""
    width = record_width(with_scores, with_attribs)
    if len(items) % width:
        raise DecodeError(
            f"VSIM: {len(items)} items do not form records of width {width}",
            command="VSIM",
            reply=items,
        )
    rows = [tuple(items[i : i + width]) for i in range(0, len(items), width)]
    return records_from_rows(rows, with_scores, with_attribs)


def decode_raw_embedding(
    reply: Reply, command: str = "VEMB", key: Optional[str] = None
) -> Optional[RawEmbedding]:
    """Decode ``VEMB ... RAW``: [type, blob, norm, (range)]; null is None."""
    if isinstance(reply, NullReply):
        return None
    if not isinstance(reply, ArrayReply) or len(reply) not in (3, 4):
        raise _unexpected(reply, "3 or 4 item sequence", command, key)
    quant, blob, norm = reply.items[0], reply.items[1], reply.items[2]
    if not isinstance(blob, BulkReply) or not isinstance(quant, BulkReply):
        raise _unexpected(reply, "bulk type and payload", command, key)
    try:
        norm_value = float(_cell(norm, command, key) or "nan")
        quant_range = None
        if len(reply) == 4:
            quant_range = float(_cell(reply.items[3], command, key) or "nan")
    except ValueError:
        raise _unexpected(reply, "numeric norm/range", command, key) from None
    return RawEmbedding(
        quantization=quant.text(errors=TEXT_ERRORS),
        data=blob.value,
        norm=norm_value,
        quant_range=quant_range,
    )


def _info_value(reply: Reply) -> Any:
    if isinstance(reply, NullReply):
        return None
    if isinstance(reply, IntegerReply):
        return reply.value
    if isinstance(reply, BulkReply):
        return reply.text(errors=TEXT_ERRORS)
    return [_info_value(item) for item in reply.items]


def decode_info_map(
    reply: Reply, command: str = "VINFO", key: Optional[str] = None
) -> Dict[str, Any]:
    """Pair a VINFO reply into a dict; null decodes to {}."""
    if isinstance(reply, NullReply):
        return {}
    if not isinstance(reply, ArrayReply) or len(reply) % 2:
        raise _unexpected(reply, "even-length sequence", command, key)
    result: Dict[str, Any] = {}
    items = reply.items
    for i in range(0, len(items), 2):
        name = items[i]
        if not isinstance(name, (BulkReply, IntegerReply)):
            raise _unexpected(name, "field name", command, key)
        result[_text(name)] = _info_value(items[i + 1])
    return result
