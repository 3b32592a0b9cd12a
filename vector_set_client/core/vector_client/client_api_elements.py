"""
Element API for the vector set client: insert, remove, membership, embeddings.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

from . import command_encoder as enc
from . import reply_decoder as dec
from .protocol import QuantizationType
from .result import RawEmbedding


class _ClientAPIElementsMixin:
    """Mixin with element-level operations."""

    def add(
        self,
        key: str,
        dim: int,
        vector: Sequence[float],
        element: str,
        reduce_dim: Optional[int] = None,
        quantization: Optional[Union[QuantizationType, str]] = None,
        cas: bool = False,
        ef: Optional[int] = None,
        attributes: Optional[str] = None,
        m: Optional[int] = None,
    ) -> int:
        """Add an element with its embedding to a vector index.

        Args:
            key: Vector index key
            dim: Embedding dimension; must equal len(vector)
            vector: Embedding values
            element: Element identifier
            reduce_dim: Random-projection target dimension (sent when > 0)
            quantization: NOQUANT, Q8 or BIN
            cas: Run the candidate search in a background thread (CAS)
            ef: Build exploration factor (sent when > 0)
            attributes: JSON attribute text (sent when non-empty)
            m: Max HNSW links per node (sent when > 0)

        Returns:
            1 if the element was added, 0 if it was updated or not applied

        Raises:
            ValidationError: If arguments are invalid (no I/O happens)
            DispatchError: If the call cannot be delivered
        """
        options = enc.AddOptions(
            reduce_dim=reduce_dim,
            quantization=quantization,
            cas=cas,
            ef=ef,
            attributes=attributes,
            m=m,
        )
        frame = enc.encode_add(key, dim, vector, element, options)
        return dec.decode_integer(self._execute(frame), enc.VADD, key)

    def remove(self, key: str, element: str) -> int:
        """Remove an element; returns 1 if removed, 0 if it did not exist."""
        frame = enc.encode_remove(key, element)
        return dec.decode_integer(self._execute(frame), enc.VREM, key)

    def is_member(self, key: str, element: str) -> bool:
        """Check whether an element exists in a vector index."""
        frame = enc.encode_is_member(key, element)
        return dec.decode_boolean(self._execute(frame), enc.VISMEMBER, key)

    def get_embedding(self, key: str, element: str, raw: bool = False) -> List[str]:
        """Return the stored embedding of an element as text values.

        Args:
            key: Vector index key
            element: Element identifier
            raw: Request the raw storage form (RAW flag)

        Returns:
            Embedding values as strings; empty list when the element is missing
        """
        frame = enc.encode_get_embedding(key, element, raw=raw)
        return dec.decode_string_list(self._execute(frame), enc.VEMB, key)

    def get_vector(self, key: str, element: str) -> Optional[List[float]]:
        """Return the stored embedding as floats, or None when missing."""
        values = self.get_embedding(key, element)
        if not values:
            return None
        return [float(v) for v in values]

    def get_raw_embedding(self, key: str, element: str) -> Optional[RawEmbedding]:
        """Return the raw stored embedding (type, payload, norm, range)."""
        frame = enc.encode_get_embedding(key, element, raw=True)
        return dec.decode_raw_embedding(self._execute(frame), enc.VEMB, key)
