"""
Similarity search API for the vector set client.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from . import command_encoder as enc
from . import reply_decoder as dec
from .protocol import ByElementId, ByValueList, VectorSource
from .result import SimilarityRecord


class _ClientAPISearchMixin:
    """Mixin with VSIM based similarity search."""

    def similar(
        self,
        key: str,
        source: VectorSource,
        filter: Optional[str] = None,
        with_scores: bool = False,
        with_attribs: bool = False,
        count: Optional[int] = None,
        epsilon: Optional[float] = None,
        ef: Optional[int] = None,
        filter_ef: Optional[int] = None,
        truth: bool = False,
    ) -> List[str]:
        """Run a similarity search and return the flattened result list.

        With WITHSCORES and/or WITHATTRIBS the list interleaves
        element id, score and attributes per hit, in that order; the caller
        knows the record width from the flags it passed (see group_records).

        Args:
            key: Vector index key
            source: ByElementId, ByValueList or ByRawBytes query vector
            filter: Attribute filter expression
            with_scores: Include similarity scores
            with_attribs: Include attribute text
            count: Maximum number of hits (sent when > 0)
            epsilon: Maximum distance in [0, 1]
            ef: Search exploration factor (sent when > 0)
            filter_ef: Filtered search effort (sent when > 0)
            truth: Linear scan for ground-truth results

        Returns:
            Result strings in reply order

        Raises:
            ValidationError: If key or vector source is invalid or epsilon
                is outside [0, 1]
        """
        options = enc.SimilarityOptions(
            with_scores=with_scores,
            with_attribs=with_attribs,
            count=count,
            epsilon=epsilon,
            ef=ef,
            filter=filter,
            filter_ef=filter_ef,
            truth=truth,
        )
        frame = enc.encode_similarity(key, source, options)
        return dec.decode_string_list(self._execute(frame), enc.VSIM, key)

    def similar_by_element(self, key: str, element: str, count: int = 10) -> List[str]:
        """Return up to ``count`` elements most similar to an existing element."""
        return self.similar(key, ByElementId(element), count=count)

    def similar_by_vector(
        self,
        key: str,
        vector: Sequence[float],
        count: Optional[int] = None,
        epsilon: Optional[float] = None,
        filter: Optional[str] = None,
    ) -> List[str]:
        """Return element ids most similar to a query vector."""
        return self.similar(
            key,
            ByValueList.from_vector(vector),
            filter=filter,
            count=count,
            epsilon=epsilon,
        )

    def similar_records(
        self,
        key: str,
        source: VectorSource,
        with_scores: bool = True,
        with_attribs: bool = True,
        filter: Optional[str] = None,
        count: Optional[int] = None,
        epsilon: Optional[float] = None,
        ef: Optional[int] = None,
        filter_ef: Optional[int] = None,
        truth: bool = False,
    ) -> List[SimilarityRecord]:
        """Run a similarity search and group hits into records.

        Unlike ``similar``, null attribute values are kept (as None), so
        elements without attributes do not shift the following records.
        """
        options = enc.SimilarityOptions(
            with_scores=with_scores,
            with_attribs=with_attribs,
            count=count,
            epsilon=epsilon,
            ef=ef,
            filter=filter,
            filter_ef=filter_ef,
            truth=truth,
        )
        frame = enc.encode_similarity(key, source, options)
        return dec.decode_similarity_records(
            self._execute(frame), with_scores, with_attribs, enc.VSIM, key
        )
