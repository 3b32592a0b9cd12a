"""
Protocol and wire types for the vector set service.

Command frames, the reply sum type and query vector sources live here;
the encoder, dispatcher and decoder import from this package.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from .frame import CHARSET, CommandFrame, FrameBuilder, to_token
from .reply import (
    NULL,
    ArrayReply,
    BulkReply,
    IntegerReply,
    NullReply,
    Reply,
    UnsupportedReplyError,
    reply_from_raw,
)
from .vector_source import (
    ByElementId,
    ByRawBytes,
    ByValueList,
    QuantizationType,
    VectorSource,
    VectorSourceKind,
    format_vector_values,
)

__all__ = [
    "CHARSET",
    "CommandFrame",
    "FrameBuilder",
    "to_token",
    "NULL",
    "Reply",
    "NullReply",
    "IntegerReply",
    "BulkReply",
    "ArrayReply",
    "UnsupportedReplyError",
    "reply_from_raw",
    "ByElementId",
    "ByValueList",
    "ByRawBytes",
    "VectorSource",
    "VectorSourceKind",
    "QuantizationType",
    "format_vector_values",
]
