"""
Vector set client.

Provides a typed API over the vector set command set. Each call encodes a
frame (validating arguments first), dispatches it over a pooled connection
and decodes the reply into the operation's result type.

The client owns its pool: construct it, use it from any number of threads,
then close it. Several independently configured clients may coexist.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import ClientConfig
from ..exceptions import DispatchError, VectorClientError
from . import command_encoder as enc
from .client_api_attributes import _ClientAPIAttributesMixin
from .client_api_elements import _ClientAPIElementsMixin
from .client_api_index import _ClientAPIIndexMixin
from .client_api_search import _ClientAPISearchMixin
from .client_helpers import _ClientHelpersMixin
from .dispatcher import RawCommandDispatcher
from .pool import ConnectionFactory, ConnectionPool, redis_connection_factory
from .protocol import BulkReply
from .result import PoolStats

logger = logging.getLogger(__name__)


class VectorSetClient(
    _ClientHelpersMixin,
    _ClientAPIElementsMixin,
    _ClientAPISearchMixin,
    _ClientAPIAttributesMixin,
    _ClientAPIIndexMixin,
):
    """Client for vector set operations over a pooled connection set."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        connection_factory: Optional[ConnectionFactory] = None,
    ):
        """Initialize vector set client.

        No connection is opened here; connections are created on first use
        or by ``connect``.

        Args:
            config: Client configuration (defaults apply when omitted)
            connection_factory: Callable creating PooledConnection objects;
                defaults to redis-py connections built from config
        """
        self.config = config or ClientConfig()
        factory = connection_factory or redis_connection_factory(self.config)
        self.pool = ConnectionPool(factory, self.config.pool)
        self.dispatcher = RawCommandDispatcher(self.pool, timeout=self.config.command_timeout)

    def connect(self) -> int:
        """Pre-create ``min_idle`` connections.

        Returns:
            Number of connections created

        Raises:
            DispatchError: If min_idle > 0 and no connection could be created
        """
        created = self.pool.prefill()
        wanted = self.config.pool.min_idle
        if wanted and self.pool.stats().idle == 0:
            raise DispatchError(
                f"Cannot connect to {self.config.host}:{self.config.port}",
                command="CONNECT",
            )
        logger.info(
            "Vector set client connected to %s:%s db=%s (%d new connection(s))",
            self.config.host,
            self.config.port,
            self.config.database,
            created,
        )
        return created

    def close(self) -> None:
        """Close all connections; calling it again is a no-op."""
        if not self.pool.closed:
            logger.info("Closing vector set client for %s:%s", self.config.host, self.config.port)
        self.pool.close()

    @property
    def closed(self) -> bool:
        return self.pool.closed

    def health_check(self) -> bool:
        """Return True if the service answers PING.

        Returns:
            True if healthy, False otherwise
        """
        try:
            reply = self._execute(enc.encode_ping())
        except VectorClientError:
            return False
        return isinstance(reply, BulkReply) and reply.value == b"PONG"

    def pool_stats(self) -> PoolStats:
        """Return a snapshot of the connection pool."""
        return self.pool.stats()

    def __enter__(self) -> "VectorSetClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
