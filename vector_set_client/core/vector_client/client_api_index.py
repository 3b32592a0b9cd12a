"""
Index-level API for the vector set client: dimension, cardinality,
enumeration and info.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from typing import Any, Dict, List

from . import command_encoder as enc
from . import reply_decoder as dec


class _ClientAPIIndexMixin:
    """Mixin with whole-index operations."""

    def dimension(self, key: str) -> int:
        """Return the index dimension, 0 if the index does not exist."""
        frame = enc.encode_dimension(key)
        return dec.decode_integer(self._execute(frame), enc.VDIM, key)

    def cardinality(self, key: str) -> int:
        """Return the number of elements, 0 if the index does not exist."""
        frame = enc.encode_cardinality(key)
        return dec.decode_integer(self._execute(frame), enc.VCARD, key)

    def range(self, key: str, start: str, end: str, count: int) -> List[str]:
        """Return elements in lexicographic range.

        Args:
            key: Vector index key
            start: Range start, e.g. "-", "[a" or "(a"
            end: Range end, e.g. "+", "[z" or "(z"
            count: Maximum number of elements (negative for all)

        Returns:
            Element ids in order
        """
        frame = enc.encode_range(key, start, end, count)
        return dec.decode_string_list(self._execute(frame), enc.VRANGE, key)

    def random_members(self, key: str, count: int = 0) -> List[str]:
        """Return random elements.

        Args:
            key: Vector index key
            count: Number of elements; 0 asks for a single element without a
                count argument, negative values allow repetitions

        Returns:
            Element ids (one-element list for the single form)
        """
        frame = enc.encode_random_members(key, count)
        return dec.decode_single_or_list(self._execute(frame), enc.VRANDMEMBER, key)

    def info(self, key: str) -> List[str]:
        """Return VINFO output flattened into strings."""
        frame = enc.encode_info(key)
        return dec.decode_string_list(self._execute(frame), enc.VINFO, key)

    def info_map(self, key: str) -> Dict[str, Any]:
        """Return VINFO output as a field -> value dict."""
        frame = enc.encode_info(key)
        return dec.decode_info_map(self._execute(frame), enc.VINFO, key)
