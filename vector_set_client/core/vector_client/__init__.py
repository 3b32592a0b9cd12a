"""
Vector set client package.

Provides the client library for the vector set command protocol: command
encoding, pooled dispatch and reply decoding.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from .client import VectorSetClient
from .command_encoder import AddOptions, SimilarityOptions
from .dispatcher import RawCommandDispatcher
from .pool import ConnectionPool, PooledConnection, redis_connection_factory
from .protocol import (
    ByElementId,
    ByRawBytes,
    ByValueList,
    CommandFrame,
    QuantizationType,
    Reply,
    VectorSource,
)
from .reply_decoder import group_records
from .result import PoolStats, RawEmbedding, SimilarityRecord

__all__ = [
    "VectorSetClient",
    "AddOptions",
    "SimilarityOptions",
    "RawCommandDispatcher",
    "ConnectionPool",
    "PooledConnection",
    "redis_connection_factory",
    "ByElementId",
    "ByValueList",
    "ByRawBytes",
    "CommandFrame",
    "QuantizationType",
    "Reply",
    "VectorSource",
    "group_records",
    "PoolStats",
    "RawEmbedding",
    "SimilarityRecord",
]
