"""
Thread-safe connection pool for the vector set service.

Lends redis-py connections to one caller at a time and reclaims them.
Acquisition blocks until a connection is free when ``block_when_exhausted``
is set (bounded by ``max_wait`` or the caller's deadline) and fails fast
with PoolExhaustedError otherwise.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Callable, Deque, List, Optional, Sequence, Set

import redis
from redis.connection import Connection

from ..config import ClientConfig, PoolConfig
from ..exceptions import PoolClosedError, PoolExhaustedError
from .result import PoolStats

logger = logging.getLogger(__name__)


class PooledConnection:
    """A redis-py connection plus the bookkeeping the pool needs."""

    def __init__(self, raw: Connection):
        """Initialize pooled connection.

        Args:
            raw: Unconnected or connected redis-py connection
        """
        self.raw = raw
        self.created_at = time.monotonic()
        self.last_used = self.created_at
        self.closed = False

    def connect(self) -> None:
        """Open the socket (AUTH and SELECT are sent by redis-py on connect)."""
        self.raw.connect()

    def _ensure_open(self) -> None:
        # redis-py reconnects on send when the socket is gone; a connection
        # shut down by its pool must not.
        if self.closed:
            raise redis.ConnectionError("Connection was closed by its pool")

    def send(self, tokens: Sequence[bytes]) -> None:
        """Write one command frame."""
        self._ensure_open()
        self.raw.send_command(*tokens)

    def read(self):
        """Read one reply."""
        self._ensure_open()
        return self.raw.read_response()

    def set_io_timeout(self, seconds: Optional[float]) -> None:
        """Apply a socket timeout to the open socket."""
        sock = getattr(self.raw, "_sock", None)
        if sock is not None:
            sock.settimeout(seconds)

    def reset_io_timeout(self) -> None:
        """Restore the configured socket timeout."""
        self.set_io_timeout(getattr(self.raw, "socket_timeout", None))

    def ping(self) -> bool:
        """Return True if the service answers PING."""
        try:
            self._ensure_open()
            self.raw.send_command("PING")
            return self.raw.read_response() in (b"PONG", "PONG", True)
        except (redis.RedisError, OSError) as e:
            logger.debug("PING failed on %s: %s", self, e)
            return False

    def close(self) -> None:
        """Disconnect for good; later I/O raises instead of reconnecting."""
        self.closed = True
        self.disconnect()

    def disconnect(self) -> None:
        """Close the socket; never raises."""
        try:
            self.raw.disconnect()
        except (redis.RedisError, OSError) as e:
            logger.debug("Error while disconnecting %s: %s", self, e)


ConnectionFactory = Callable[[], PooledConnection]


def redis_connection_factory(config: ClientConfig) -> ConnectionFactory:
    """Build a factory creating unconnected redis-py connections for config."""

    def _factory() -> PooledConnection:
        return PooledConnection(
            Connection(
                host=config.host,
                port=config.port,
                db=config.database,
                username=config.username,
                password=config.password,
                socket_timeout=config.socket_timeout,
                socket_connect_timeout=config.connect_timeout,
                health_check_interval=0,
                protocol=2,
            )
        )

    return _factory


class ConnectionPool:
    """Bounded pool of reusable connections.

    Every connection handed out by ``acquire`` must come back exactly once,
    through ``release`` (healthy) or ``discard`` (indeterminate state).
    """

    def __init__(self, factory: ConnectionFactory, config: Optional[PoolConfig] = None):
        """Initialize connection pool.

        Args:
            factory: Callable creating a new, unconnected PooledConnection
            config: Pool sizing and health-check configuration
        """
        self.factory = factory
        self.config = config or PoolConfig()
        self._cond = threading.Condition(threading.Lock())
        self._idle: Deque[PooledConnection] = deque()
        self._in_use: Set[PooledConnection] = set()
        self._reserved = 0
        self._closed = False
        self._last_sweep = time.monotonic()
        self._sweeping = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _total(self) -> int:
        return len(self._idle) + len(self._in_use) + self._reserved

    def acquire(self, timeout: Optional[float] = None) -> PooledConnection:
        """Borrow a connection.

        Args:
            timeout: Maximum seconds to wait; defaults to ``max_wait``

        Returns:
            Connected PooledConnection owned by the caller

        Raises:
            PoolClosedError: If the pool is closed
            PoolExhaustedError: If no connection is available within budget
            redis.RedisError, OSError: If a new connection cannot be opened
        """
        if timeout is None:
            timeout = self.config.max_wait
        deadline = None if timeout is None else time.monotonic() + timeout
        self._maybe_sweep()
        while True:
            conn, fresh = self._checkout(deadline)
            if fresh:
                return self._open()
            if not self.config.test_on_borrow or conn.ping():
                return conn
            logger.warning("Discarding connection that failed health check on borrow")
            self.discard(conn)

    def _checkout(self, deadline: Optional[float]):
        with self._cond:
            while True:
                if self._closed:
                    raise PoolClosedError()
                if self._idle:
                    conn = self._idle.pop()
                    self._in_use.add(conn)
                    return conn, False
                if self._total() < self.config.max_total:
                    self._reserved += 1
                    return None, True
                if not self.config.block_when_exhausted:
                    raise PoolExhaustedError(
                        f"Connection pool exhausted (max_total={self.config.max_total})"
                    )
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    raise PoolExhaustedError(
                        f"No connection available within wait budget "
                        f"(max_total={self.config.max_total})"
                    )
                self._cond.wait(remaining)

    def _open(self) -> PooledConnection:
        try:
            conn = self.factory()
            conn.connect()
        except Exception:
            with self._cond:
                self._reserved -= 1
                self._cond.notify()
            raise
        with self._cond:
            self._reserved -= 1
            if self._closed:
                conn.close()
                raise PoolClosedError()
            self._in_use.add(conn)
        logger.debug("Opened new pooled connection (total=%d)", self._total())
        return conn

    def release(self, conn: PooledConnection) -> None:
        """Return a healthy connection for reuse.

        Connections beyond ``max_idle`` and connections released after
        ``close`` are disconnected instead of being kept.
        """
        with self._cond:
            if conn not in self._in_use:
                raise ValueError("Connection is not checked out from this pool")
            self._in_use.discard(conn)
            keep = not self._closed and len(self._idle) < self.config.max_idle
            if keep:
                conn.last_used = time.monotonic()
                self._idle.append(conn)
            self._cond.notify()
        if not keep:
            conn.disconnect()

    def discard(self, conn: PooledConnection) -> None:
        """Drop a borrowed connection whose protocol state is unknown."""
        with self._cond:
            if conn not in self._in_use:
                raise ValueError("Connection is not checked out from this pool")
            self._in_use.discard(conn)
            self._cond.notify()
        conn.disconnect()
        logger.debug("Discarded pooled connection")

    def prefill(self) -> int:
        """Open connections until ``min_idle`` are idle.

        Returns:
            Number of connections created
        """
        created = 0
        while True:
            with self._cond:
                if self._closed or len(self._idle) >= self.config.min_idle:
                    return created
                if self._total() >= self.config.max_total:
                    return created
                self._reserved += 1
            try:
                conn = self._open()
            except (redis.RedisError, OSError) as e:
                logger.warning("Failed to pre-create connection: %s", e)
                return created
            except PoolClosedError:
                return created
            self.release(conn)
            created += 1

    def _maybe_sweep(self) -> Optional[threading.Thread]:
        """Start an idle sweep in the background once per check interval.

        Returns:
            The sweeper thread, or None when no sweep was due
        """
        if not self.config.test_while_idle:
            return None
        now = time.monotonic()
        with self._cond:
            if self._closed or self._sweeping:
                return None
            if now - self._last_sweep < self.config.idle_check_interval:
                return None
            self._last_sweep = now
            self._sweeping = True
        sweeper = threading.Thread(
            target=self._sweep, name="vset-idle-sweep", daemon=True
        )
        sweeper.start()
        return sweeper

    def _sweep(self) -> None:
        try:
            self.check_idle()
        finally:
            with self._cond:
                self._sweeping = False

    def check_idle(self) -> int:
        """PING idle connections that have not been used for an interval.

        Connections under test are checked out so no caller can borrow
        them meanwhile. Unhealthy ones are disconnected.

        Returns:
            Number of connections dropped
        """
        cutoff = time.monotonic() - self.config.idle_check_interval
        with self._cond:
            stale = [c for c in self._idle if c.last_used <= cutoff]
            for conn in stale:
                self._idle.remove(conn)
                self._in_use.add(conn)
        dropped = 0
        for conn in stale:
            if conn.ping():
                self.release(conn)
            else:
                dropped += 1
                self.discard(conn)
        if dropped:
            logger.warning("Dropped %d idle connection(s) that failed health check", dropped)
        return dropped

    def close(self) -> None:
        """Close the pool; idempotent.

        Idle connections are disconnected. Checked-out connections are
        disconnected too, so in-flight calls fail on their next I/O; their
        later release or discard only updates bookkeeping.
        """
        with self._cond:
            if self._closed:
                return
            self._closed = True
            to_close: List[PooledConnection] = list(self._idle) + list(self._in_use)
            self._idle.clear()
            self._cond.notify_all()
        for conn in to_close:
            conn.close()
        logger.debug("Connection pool closed (%d connection(s) disconnected)", len(to_close))

    def stats(self) -> PoolStats:
        """Return a snapshot of pool bookkeeping."""
        with self._cond:
            return PoolStats(
                idle=len(self._idle),
                in_use=len(self._in_use),
                max_total=self.config.max_total,
                closed=self._closed,
            )
