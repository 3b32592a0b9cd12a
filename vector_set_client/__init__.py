"""
Vector Set Client

Typed client for vector set indexes served over the Redis command protocol:
insert, similarity search, attributes and enumeration, with pooled
connections and typed reply decoding.

Can be used as a library or via the ``vset`` CLI.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

__version__ = "1.0.0"
__author__ = "Vasiliy Zdanovskiy"
__email__ = "vasilyvz@gmail.com"

from .core import (
    ClientConfig,
    ConfigurationError,
    ConnectionPoolError,
    DecodeError,
    DispatchError,
    DispatchTimeoutError,
    EmbeddingError,
    EmbeddingServiceConfig,
    HttpEmbeddingClient,
    PoolClosedError,
    PoolConfig,
    PoolExhaustedError,
    RemoteCommandError,
    SemanticIndex,
    ValidationError,
    VectorClientError,
    VectorDocument,
    VectorSetClient,
    load_config,
)
from .core.vector_client import (
    ByElementId,
    ByRawBytes,
    ByValueList,
    QuantizationType,
    SimilarityRecord,
    group_records,
)

__all__ = [
    # Client
    "VectorSetClient",
    "ClientConfig",
    "PoolConfig",
    "EmbeddingServiceConfig",
    "load_config",
    # Vector sources and results
    "ByElementId",
    "ByValueList",
    "ByRawBytes",
    "QuantizationType",
    "SimilarityRecord",
    "group_records",
    # Embeddings
    "HttpEmbeddingClient",
    "SemanticIndex",
    "VectorDocument",
    # Errors
    "VectorClientError",
    "ValidationError",
    "DispatchError",
    "DispatchTimeoutError",
    "RemoteCommandError",
    "DecodeError",
    "ConnectionPoolError",
    "PoolExhaustedError",
    "PoolClosedError",
    "EmbeddingError",
    "ConfigurationError",
]
