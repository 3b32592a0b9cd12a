"""
Semantic index: embed domain objects into a vector index and search it by
free text.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol, Union

from .attributes import to_attributes_json
from .embedding_client import EmbeddingProvider
from .exceptions import EmbeddingError, VectorClientError
from .vector_client import ByValueList, QuantizationType, SimilarityRecord, VectorSetClient

logger = logging.getLogger(__name__)


class VectorDocument(Protocol):
    """Domain object that can be stored in a semantic index."""

    def to_vector_text(self) -> str:
        """Descriptive text used to compute the embedding."""

    def to_element_id(self) -> str:
        """Stable element identifier."""


class SemanticIndex:
    """Embeds documents and queries with one provider over one index key."""

    def __init__(
        self,
        client: VectorSetClient,
        embedder: EmbeddingProvider,
        key: str,
        quantization: Optional[Union[QuantizationType, str]] = None,
    ):
        """Initialize semantic index.

        Args:
            client: Vector set client
            embedder: Callable text -> embedding
            key: Vector index key
            quantization: Storage quantization for added documents
        """
        self.client = client
        self.embedder = embedder
        self.key = key
        self.quantization = quantization

    def _embed(self, text: str) -> List[float]:
        try:
            vector = list(self.embedder(text))
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Embedding provider failed: {e}") from e
        if not vector:
            raise EmbeddingError("Embedding provider returned an empty vector")
        return vector

    def add_document(self, doc: VectorDocument) -> bool:
        """Embed and store one document with its JSON attributes.

        Returns:
            True if the element was newly added
        """
        vector = self._embed(doc.to_vector_text())
        result = self.client.add(
            self.key,
            len(vector),
            vector,
            doc.to_element_id(),
            quantization=self.quantization,
            attributes=to_attributes_json(doc),
        )
        return result == 1

    def add_documents(self, docs: Iterable[VectorDocument]) -> int:
        """Store documents one by one; a failing document is logged and skipped.

        Returns:
            Number of documents newly added
        """
        added = 0
        for doc in docs:
            element_id = doc.to_element_id()
            try:
                if self.add_document(doc):
                    added += 1
                else:
                    logger.info("Element %s was not added (already present?)", element_id)
            except VectorClientError as e:
                logger.warning("Failed to add element %s: %s", element_id, e)
        return added

    def search(
        self,
        query: str,
        count: int = 5,
        epsilon: Optional[float] = 0.25,
        filter: Optional[str] = None,
    ) -> List[SimilarityRecord]:
        """Return the documents closest to a free-text query.

        Args:
            query: Query text
            count: Maximum number of hits
            epsilon: Maximum distance in [0, 1] (None for no limit)
            filter: Attribute filter expression

        Returns:
            Records with element id, score and attributes
        """
        vector = self._embed(query)
        return self.client.similar_records(
            self.key,
            ByValueList.from_vector(vector),
            with_scores=True,
            with_attribs=True,
            count=count,
            epsilon=epsilon,
            filter=filter,
        )
