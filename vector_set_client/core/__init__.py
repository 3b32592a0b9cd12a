"""
Core functionality for the vector set client.

This module contains configuration, the error hierarchy, the vector set
client and the embedding helpers built on top of it.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from .config import ClientConfig, EmbeddingServiceConfig, PoolConfig, load_config
from .embedding_client import HttpEmbeddingClient
from .exceptions import (
    ConfigurationError,
    ConnectionPoolError,
    DecodeError,
    DispatchError,
    DispatchTimeoutError,
    EmbeddingError,
    PoolClosedError,
    PoolExhaustedError,
    RemoteCommandError,
    ValidationError,
    VectorClientError,
)
from .semantic_index import SemanticIndex, VectorDocument
from .vector_client import VectorSetClient

__all__ = [
    "ClientConfig",
    "EmbeddingServiceConfig",
    "PoolConfig",
    "load_config",
    "HttpEmbeddingClient",
    "SemanticIndex",
    "VectorDocument",
    "VectorSetClient",
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
