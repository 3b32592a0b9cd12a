"""
Command encoder for vector set operations.

One ``encode_*`` function per operation. Each validates its arguments,
raising ValidationError before any network I/O, and emits positional tokens
in protocol order followed by optional modifiers. A modifier is emitted only
when its argument is present and meaningful: numeric modifiers when > 0,
boolean flags when True. An explicit False and an omitted flag produce the
same frame.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from ..exceptions import ValidationError
from .protocol import (
    ByElementId,
    ByRawBytes,
    ByValueList,
    CommandFrame,
    FrameBuilder,
    QuantizationType,
    VectorSource,
)

VADD = "VADD"
VSIM = "VSIM"
VDIM = "VDIM"
VCARD = "VCARD"
VREM = "VREM"
VISMEMBER = "VISMEMBER"
VEMB = "VEMB"
VSETATTR = "VSETATTR"
VGETATTR = "VGETATTR"
VRANGE = "VRANGE"
VRANDMEMBER = "VRANDMEMBER"
VINFO = "VINFO"
PING = "PING"


@dataclass(frozen=True)
class AddOptions:
    """Optional VADD modifiers."""

    reduce_dim: Optional[int] = None
    quantization: Optional[Union[QuantizationType, str]] = None
    cas: bool = False
    ef: Optional[int] = None
    attributes: Optional[str] = None
    m: Optional[int] = None


@dataclass(frozen=True)
class SimilarityOptions:
    """Optional VSIM modifiers."""

    with_scores: bool = False
    with_attribs: bool = False
    count: Optional[int] = None
    epsilon: Optional[float] = None
    ef: Optional[int] = None
    filter: Optional[str] = None
    filter_ef: Optional[int] = None
    truth: bool = False


def _fail(
    command: str, key: Optional[str], field: str, constraint: str, message: str
) -> ValidationError:
    return ValidationError(
        f"{command} {field}: {message}",
        field=field,
        constraint=constraint,
        command=command,
        key=key,
    )


def _require_text(value: Optional[str], field: str, command: str, key: Optional[str]) -> str:
    if value is None:
        raise _fail(command, key, field, "required", "must not be None")
    if not isinstance(value, str):
        raise _fail(
            command, key, field, "type", f"must be str, got {type(value).__name__}"
        )
    if not value:
        raise _fail(command, key, field, "non_empty", "must not be empty")
    return value


def _require_int(value: object, field: str, command: str, key: Optional[str]) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _fail(
            command, key, field, "type", f"must be int, got {type(value).__name__}"
        )
    return value


def _positive(value: Optional[int]) -> bool:
    return value is not None and value > 0


def _start(command: str, key: str) -> FrameBuilder:
    return FrameBuilder(command, _require_text(key, "key", command, key))


def encode_add(
    key: str,
    dim: int,
    vector: Sequence[float],
    element: str,
    options: Optional[AddOptions] = None,
) -> CommandFrame:
    """Encode VADD.

    Frame: key [REDUCE dim] VALUES dim v1..vN element [NOQUANT|Q8|BIN] [CAS]
    [EF n] [SETATTR attrs] [M n].

    Raises:
        ValidationError: Empty key/element, dim <= 0, vector length != dim,
            non-finite component or unknown quantization type
    """
    options = options or AddOptions()
    builder = _start(VADD, key)
    element = _require_text(element, "element", VADD, key)
    dim = _require_int(dim, "dim", VADD, key)
    if dim <= 0:
        raise _fail(VADD, key, "dim", "positive", f"must be > 0, got {dim}")
    if vector is None:
        raise _fail(VADD, key, "vector", "required", "must not be None")
    if len(vector) != dim:
        raise _fail(
            VADD,
            key,
            "vector",
            "length_matches_dim",
            f"length {len(vector)} does not match dim {dim}",
        )
    components = []
    for i, v in enumerate(vector):
        f = float(v)
        if not math.isfinite(f):
            raise _fail(VADD, key, "vector", "finite", f"component {i} is {f}")
        components.append(f)

    quant: Optional[QuantizationType] = None
    if options.quantization is not None:
        try:
            quant = QuantizationType(options.quantization)
        except ValueError:
            raise _fail(
                VADD,
                key,
                "quantization",
                "enum",
                f"must be one of NOQUANT/Q8/BIN, got {options.quantization!r}",
            ) from None

    if _positive(options.reduce_dim):
        builder.option("REDUCE", options.reduce_dim)
    builder.option("VALUES", dim)
    builder.add(*components)
    builder.add(element)
    if quant is not None:
        builder.add(quant.value)
    builder.flag("CAS", bool(options.cas))
    if _positive(options.ef):
        builder.option("EF", options.ef)
    if options.attributes:
        builder.option("SETATTR", options.attributes)
    if _positive(options.m):
        builder.option("M", options.m)
    return builder.build()


def _value_list_tokens(values: str, key: str) -> list:
    if not isinstance(values, str):
        raise _fail(VSIM, key, "values", "type", "must be str")
    parts = values.split()
    if not parts:
        raise _fail(VSIM, key, "values", "non_empty", "must contain the dimension")
    try:
        dim = int(parts[0])
    except ValueError:
        raise _fail(
            VSIM, key, "values", "integer_dim", f"dimension must be an integer, got {parts[0]!r}"
        ) from None
    if dim <= 0:
        raise _fail(VSIM, key, "values", "positive", f"dimension must be > 0, got {dim}")
    if len(parts) - 1 != dim:
        raise _fail(
            VSIM,
            key,
            "values",
            "length_matches_dim",
            f"declared dimension {dim} but {len(parts) - 1} values follow",
        )
    for part in parts[1:]:
        try:
            f = float(part)
        except ValueError:
            raise _fail(VSIM, key, "values", "numeric", f"not a number: {part!r}") from None
        if not math.isfinite(f):
            raise _fail(VSIM, key, "values", "finite", f"non-finite value: {part!r}")
    return parts


def encode_similarity(
    key: str,
    source: VectorSource,
    options: Optional[SimilarityOptions] = None,
) -> CommandFrame:
    """Encode VSIM.

    Frame: key ELE|VALUES|FP32 <vector> [WITHSCORES] [WITHATTRIBS] [COUNT n]
    [EPSILON d] [EF n] [FILTER expr] [FILTER-EF n] [TRUTH].

    Raises:
        ValidationError: Empty key, malformed vector source or epsilon
            outside [0, 1]
    """
    options = options or SimilarityOptions()
    builder = _start(VSIM, key)

    if isinstance(source, ByElementId):
        builder.add(source.kind.value)
        builder.add(_require_text(source.element, "element", VSIM, key))
    elif isinstance(source, ByValueList):
        builder.add(source.kind.value)
        builder.add(*_value_list_tokens(source.values, key))
    elif isinstance(source, ByRawBytes):
        data = source.data
        if not isinstance(data, (bytes, bytearray)) or not data:
            raise _fail(VSIM, key, "data", "non_empty", "FP32 payload must be non-empty bytes")
        if len(data) % 4:
            raise _fail(
                VSIM, key, "data", "fp32_aligned", f"length {len(data)} is not a multiple of 4"
            )
        builder.add(source.kind.value)
        builder.add(bytes(data))
    elif source is None:
        raise _fail(VSIM, key, "source", "required", "must not be None")
    else:
        raise _fail(
            VSIM, key, "source", "type", f"unsupported vector source {type(source).__name__}"
        )

    builder.flag("WITHSCORES", bool(options.with_scores))
    builder.flag("WITHATTRIBS", bool(options.with_attribs))
    if _positive(options.count):
        builder.option("COUNT", options.count)
    if options.epsilon is not None:
        epsilon = float(options.epsilon)
        if not 0.0 <= epsilon <= 1.0:
            raise _fail(VSIM, key, "epsilon", "range", f"must be in [0, 1], got {epsilon}")
        builder.option("EPSILON", epsilon)
    if _positive(options.ef):
        builder.option("EF", options.ef)
    if options.filter:
        builder.option("FILTER", options.filter)
    if _positive(options.filter_ef):
        builder.option("FILTER-EF", options.filter_ef)
    builder.flag("TRUTH", bool(options.truth))
    return builder.build()


def encode_dimension(key: str) -> CommandFrame:
    """Encode VDIM key."""
    return _start(VDIM, key).build()


def encode_cardinality(key: str) -> CommandFrame:
    """Encode VCARD key."""
    return _start(VCARD, key).build()


def encode_remove(key: str, element: str) -> CommandFrame:
    """Encode VREM key element."""
    builder = _start(VREM, key)
    return builder.add(_require_text(element, "element", VREM, key)).build()


def encode_is_member(key: str, element: str) -> CommandFrame:
    """Encode VISMEMBER key element."""
    builder = _start(VISMEMBER, key)
    return builder.add(_require_text(element, "element", VISMEMBER, key)).build()


def encode_get_embedding(key: str, element: str, raw: bool = False) -> CommandFrame:
    """Encode VEMB key element [RAW]."""
    builder = _start(VEMB, key)
    builder.add(_require_text(element, "element", VEMB, key))
    return builder.flag("RAW", bool(raw)).build()


def encode_set_attributes(
    key: str, element: str, attributes: Optional[str]
) -> CommandFrame:
    """Encode VSETATTR key element attributes.

    A missing attributes value is sent as an empty string, which clears them.
    """
    builder = _start(VSETATTR, key)
    builder.add(_require_text(element, "element", VSETATTR, key))
    if attributes is not None and not isinstance(attributes, str):
        raise _fail(VSETATTR, key, "attributes", "type", "must be str")
    return builder.add(attributes or "").build()


def encode_get_attributes(key: str, element: str) -> CommandFrame:
    """Encode VGETATTR key element."""
    builder = _start(VGETATTR, key)
    return builder.add(_require_text(element, "element", VGETATTR, key)).build()


def encode_range(key: str, start: str, end: str, count: int) -> CommandFrame:
    """Encode VRANGE key start end count."""
    builder = _start(VRANGE, key)
    builder.add(_require_text(start, "start", VRANGE, key))
    builder.add(_require_text(end, "end", VRANGE, key))
    return builder.add(_require_int(count, "count", VRANGE, key)).build()


def encode_random_members(key: str, count: int = 0) -> CommandFrame:
    """Encode VRANDMEMBER key [count]; count 0 omits the count token."""
    builder = _start(VRANDMEMBER, key)
    count = _require_int(count, "count", VRANDMEMBER, key)
    if count != 0:
        builder.add(count)
    return builder.build()


def encode_info(key: str) -> CommandFrame:
    """Encode VINFO key."""
    return _start(VINFO, key).build()


def encode_ping() -> CommandFrame:
    """Encode PING (health check)."""
    return CommandFrame(command=PING, args=())
