"""
Query vector sources for similarity search and insert-time enums.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union


class QuantizationType(str, Enum):
    """Storage quantization applied to an element at insertion."""

    NOQUANT = "NOQUANT"
    Q8 = "Q8"
    BIN = "BIN"


class VectorSourceKind(str, Enum):
    """Wire token naming how the query vector is supplied."""

    ELEMENT = "ELE"
    VALUES = "VALUES"
    FP32 = "FP32"


def format_vector_values(vector: Sequence[float]) -> str:
    """Render ``<dim> <v1> ... <vN>`` text for a vector."""
    parts = [str(len(vector))]
    parts.extend(repr(float(v)) for v in vector)
    return " ".join(parts)


@dataclass(frozen=True)
class ByElementId:
    """Use the stored embedding of an existing element as the query."""

    element: str

    kind = VectorSourceKind.ELEMENT


@dataclass(frozen=True)
class ByValueList:
    """Query vector given as ``"<dim> <v1> <v2> ... <vN>"`` text."""

    values: str

    kind = VectorSourceKind.VALUES

    @classmethod
    def from_vector(cls, vector: Sequence[float]) -> "ByValueList":
        return cls(format_vector_values(vector))


@dataclass(frozen=True)
class ByRawBytes:
    """Query vector given as a little-endian FP32 blob."""

    data: bytes

    kind = VectorSourceKind.FP32

    @classmethod
    def from_vector(cls, vector: Sequence[float]) -> "ByRawBytes":
        return cls(struct.pack(f"<{len(vector)}f", *vector))


VectorSource = Union[ByElementId, ByValueList, ByRawBytes]
