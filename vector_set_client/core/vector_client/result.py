"""
Typed results returned by the vector set client.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import json
import struct
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class SimilarityRecord:
    """One similarity search hit.

    Attributes:
        element_id: Element identifier
        score: Similarity score as returned (text), None unless WITHSCORES
        attributes: Attribute text, None unless WITHATTRIBS or when unset

    Examples:
        >>> r = SimilarityRecord("e1", "0.99", "{}")
        >>> r.score_value
        0.99
    """

    element_id: str
    score: Optional[str] = None
    attributes: Optional[str] = None

    @property
    def score_value(self) -> Optional[float]:
        """Score parsed as float, or None when not requested."""
        return float(self.score) if self.score is not None else None

    def attributes_json(self) -> Optional[Any]:
        """Attributes parsed as JSON, or None when absent."""
        if not self.attributes:
            return None
        return json.loads(self.attributes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary for serialization."""
        result: Dict[str, Any] = {"element_id": self.element_id}
        if self.score is not None:
            result["score"] = self.score
        if self.attributes is not None:
            result["attributes"] = self.attributes
        return result


@dataclass(frozen=True)
class RawEmbedding:
    """Stored embedding as returned by ``VEMB ... RAW``.

    Attributes:
        quantization: Storage type reported by the service (e.g. "f32", "int8", "bin")
        data: Raw stored vector bytes
        norm: L2 norm of the original vector
        quant_range: Quantization range, present for 8-bit storage only
    """

    quantization: str
    data: bytes
    norm: float
    quant_range: Optional[float] = None

    def as_floats(self) -> Tuple[float, ...]:
        """Unpack the payload as little-endian FP32 values (unquantized storage only)."""
        count = len(self.data) // 4
        return struct.unpack(f"<{count}f", self.data[: count * 4])


@dataclass(frozen=True)
class PoolStats:
    """Snapshot of connection pool bookkeeping."""

    idle: int
    in_use: int
    max_total: int
    closed: bool

    @property
    def total(self) -> int:
        return self.idle + self.in_use


def record_width(with_scores: bool, with_attribs: bool) -> int:
    """Number of reply items per similarity record."""
    return 1 + int(bool(with_scores)) + int(bool(with_attribs))


def records_from_rows(
    rows: List[Tuple[Optional[str], ...]], with_scores: bool, with_attribs: bool
) -> List[SimilarityRecord]:
    """Build records from fixed-width rows ordered element, score, attributes."""
    records = []
    for row in rows:
        score = row[1] if with_scores else None
        attrs = row[-1] if with_attribs else None
        records.append(SimilarityRecord(element_id=row[0], score=score, attributes=attrs))
    return records
