"""
HTTP embedding client.

Turns text into a fixed-length list of floats by calling an embedding
service. Accepts OpenAI-compatible bodies (``{"data": [{"embedding": [...]}]}``)
and plain ``{"embedding": [...]}`` bodies.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List, Optional

import requests

from .config import EmbeddingServiceConfig
from .exceptions import EmbeddingError

logger = logging.getLogger(__name__)

EmbeddingProvider = Callable[[str], List[float]]


class HttpEmbeddingClient:
    """Embedding provider backed by an HTTP endpoint."""

    def __init__(
        self,
        config: EmbeddingServiceConfig,
        session: Optional[requests.Session] = None,
    ):
        """Initialize embedding client.

        Args:
            config: Embedding service configuration
            session: Optional requests session (one is created otherwise)
        """
        self.config = config
        self.session = session or requests.Session()

    def __call__(self, text: str) -> List[float]:
        return self.embed(text)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def embed(self, text: str) -> List[float]:
        """Return the embedding for text.

        Args:
            text: Non-empty input text

        Returns:
            Embedding values

        Raises:
            EmbeddingError: On empty input, HTTP/network failure, malformed
                body, non-numeric values or unexpected dimension
        """
        if not text or not text.strip():
            raise EmbeddingError("Text for embedding is empty")
        payload: Dict[str, Any] = {"input": text}
        if self.config.model:
            payload["model"] = self.config.model
        try:
            response = self.session.post(
                self.config.url,
                json=payload,
                headers=self._headers(),
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.RequestException as e:
            logger.warning("Embedding request to %s failed: %s", self.config.url, e)
            raise EmbeddingError(
                f"Embedding request failed: {e}", details={"url": self.config.url}
            ) from e
        except ValueError as e:
            raise EmbeddingError(f"Embedding response is not JSON: {e}") from e

        vector = self._parse(body)
        expected = self.config.expected_dimension
        if expected is not None and len(vector) != expected:
            raise EmbeddingError(
                f"Embedding dimension {len(vector)} != expected {expected}",
                details={"dimension": len(vector), "expected": expected},
            )
        logger.debug("Embedded %d chars into %d dims", len(text), len(vector))
        return vector

    @staticmethod
    def _parse(body: Any) -> List[float]:
        raw: Any = None
        if isinstance(body, dict):
            data = body.get("data")
            if isinstance(data, list) and data and isinstance(data[0], dict):
                raw = data[0].get("embedding")
            elif "embedding" in body:
                raw = body["embedding"]
            elif isinstance(body.get("embeddings"), list) and body["embeddings"]:
                raw = body["embeddings"][0]
        if not isinstance(raw, list) or not raw:
            raise EmbeddingError(
                "Embedding response has no embedding", details={"keys": _keys(body)}
            )
        try:
            vector = [float(v) for v in raw]
        except (TypeError, ValueError) as e:
            raise EmbeddingError(f"Embedding contains non-numeric values: {e}") from e
        if not all(math.isfinite(v) for v in vector):
            raise EmbeddingError("Embedding contains non-finite values")
        return vector

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()


def _keys(body: Any) -> List[str]:
    return sorted(body.keys()) if isinstance(body, dict) else []
