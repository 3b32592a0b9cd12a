"""
Pytest fixtures for vector set client testing.

Provides a scripted in-memory transport that stands in for redis-py
connections, so pool, dispatcher and client logic run without a server.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from collections import deque
from typing import Any, Callable, List, Optional, Tuple

import pytest
import redis

from vector_set_client.core.config import ClientConfig, PoolConfig
from vector_set_client.core.vector_client import ConnectionPool, PooledConnection, VectorSetClient


class FakeServer:
    """Scripted server shared by all fake connections."""

    def __init__(self):
        self.frames: List[Tuple[bytes, ...]] = []
        self.replies: deque = deque()
        self.handler: Optional[Callable[[Tuple[bytes, ...]], Any]] = None
        self.refuse_connect = False
        self.ping_ok = True
        self.connections: List["FakeRawConnection"] = []

    def reply(self, *values: Any) -> "FakeServer":
        """Queue replies returned in order (exceptions are raised)."""
        self.replies.extend(values)
        return self

    def commands(self) -> List[Tuple[bytes, ...]]:
        """Frames sent, excluding health-check PINGs."""
        return [f for f in self.frames if f[0] != b"PING"]

    def last_args(self) -> List[str]:
        """Arguments of the last non-PING frame as text."""
        return [t.decode("utf-8") for t in self.commands()[-1][1:]]

    def answer(self, tokens: Tuple[bytes, ...]) -> Any:
        if self.handler is not None:
            return self.handler(tokens)
        if self.replies:
            return self.replies.popleft()
        return None


class FakeRawConnection:
    """Minimal stand-in for redis.connection.Connection."""

    def __init__(self, server: FakeServer):
        self.server = server
        self.connected = False
        self.disconnects = 0
        self.pending: deque = deque()
        self.socket_timeout = None
        self._sock = None

    def connect(self) -> None:
        if self.server.refuse_connect:
            raise redis.ConnectionError("Connection refused")
        self.connected = True
        self.server.connections.append(self)

    def send_command(self, *args: Any) -> None:
        # redis-py opens a new socket when sending on a disconnected connection
        if not self.connected:
            self.connect()
        tokens = tuple(a if isinstance(a, bytes) else str(a).encode("utf-8") for a in args)
        self.server.frames.append(tokens)
        self.pending.append(tokens)

    def read_response(self) -> Any:
        if not self.connected:
            raise redis.ConnectionError("Connection closed by server")
        tokens = self.pending.popleft()
        if tokens[0] == b"PING":
            if self.server.ping_ok:
                return b"PONG"
            raise redis.ConnectionError("Connection reset")
        value = self.server.answer(tokens)
        if isinstance(value, BaseException):
            raise value
        return value

    def disconnect(self) -> None:
        self.connected = False
        self.pending.clear()
        self.disconnects += 1


def fake_factory(server: FakeServer):
    """Connection factory producing fake pooled connections."""
    return lambda: PooledConnection(FakeRawConnection(server))


@pytest.fixture
def server():
    """Fresh scripted server."""
    return FakeServer()


@pytest.fixture
def make_client(server):
    """Build a client over the fake server; pool options may be overridden."""
    clients = []

    def _make(command_timeout: Optional[float] = None, **pool_kwargs: Any) -> VectorSetClient:
        pool_kwargs.setdefault("min_idle", 0)
        if "max_total" in pool_kwargs:
            pool_kwargs.setdefault("max_idle", pool_kwargs["max_total"])
        config = ClientConfig(command_timeout=command_timeout, pool=PoolConfig(**pool_kwargs))
        client = VectorSetClient(config, connection_factory=fake_factory(server))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def client(make_client):
    """Client over the fake server with default pool settings."""
    return make_client()


@pytest.fixture
def connection_factory(server):
    """Factory producing fake pooled connections for the shared server."""
    return fake_factory(server)


@pytest.fixture
def make_pool(connection_factory):
    """Build a bare pool over the fake server."""
    pools = []

    def _make(**kwargs: Any) -> ConnectionPool:
        kwargs.setdefault("min_idle", 0)
        if "max_total" in kwargs:
            kwargs.setdefault("max_idle", kwargs["max_total"])
        pool = ConnectionPool(connection_factory, PoolConfig(**kwargs))
        pools.append(pool)
        return pool

    yield _make
    for pool in pools:
        pool.close()
