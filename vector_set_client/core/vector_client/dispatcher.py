"""
Raw command dispatcher.

Borrows a connection, writes one frame, reads one reply and gives the
connection back. Transport failures are wrapped into DispatchError and the
connection involved is discarded; an error reply from the service leaves the
connection in a known state, so it is released normally. No retries.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
import socket
import time
from typing import Optional

import redis

from ..exceptions import (
    DecodeError,
    DispatchError,
    DispatchTimeoutError,
    RemoteCommandError,
)
from .pool import ConnectionPool
from .protocol import CommandFrame, Reply, UnsupportedReplyError, reply_from_raw

logger = logging.getLogger(__name__)


class RawCommandDispatcher:
    """Executes command frames over pooled connections."""

    def __init__(self, pool: ConnectionPool, timeout: Optional[float] = None):
        """Initialize dispatcher.

        Args:
            pool: Connection pool to borrow from
            timeout: Default overall deadline per call in seconds
                (acquisition plus I/O); None means no deadline
        """
        self.pool = pool
        self.timeout = timeout

    def execute(self, frame: CommandFrame, timeout: Optional[float] = None) -> Reply:
        """Send a frame and return its reply.

        Args:
            frame: Encoded command frame
            timeout: Overall deadline in seconds; defaults to the dispatcher's

        Returns:
            Reply converted from the raw protocol value

        Raises:
            PoolExhaustedError: If no connection is available in time
            PoolClosedError: If the pool has been closed
            DispatchTimeoutError: If the deadline or a socket timeout expires
            DispatchError: If connecting, sending or receiving fails
            RemoteCommandError: If the service replies with an error
            DecodeError: If the reply has no Reply counterpart
        """
        if timeout is None:
            timeout = self.timeout
        deadline = None if timeout is None else time.monotonic() + timeout
        command, key = frame.command, frame.key or None

        try:
            conn = self.pool.acquire(timeout=timeout)
        except redis.TimeoutError as e:
            raise self._timeout(command, key, e) from e
        except (redis.RedisError, OSError) as e:
            raise DispatchError(
                f"{command}: cannot open connection: {e}", command=command, key=key, cause=e
            ) from e

        discard = True
        try:
            if deadline is None:
                conn.reset_io_timeout()
            else:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise self._timeout(command, key, None)
                conn.set_io_timeout(remaining)
            conn.send(frame.tokens())
            raw = conn.read()
            discard = False
        except redis.ResponseError as e:
            discard = False
            raise RemoteCommandError(f"{command}: {e}", command=command, key=key) from e
        except (redis.TimeoutError, socket.timeout) as e:
            raise self._timeout(command, key, e) from e
        except (redis.RedisError, OSError) as e:
            logger.warning("Dispatch of %s failed: %s", command, e)
            raise DispatchError(
                f"{command}: transport failure: {e}", command=command, key=key, cause=e
            ) from e
        finally:
            if discard:
                self.pool.discard(conn)
            else:
                self.pool.release(conn)

        try:
            return reply_from_raw(raw)
        except UnsupportedReplyError as e:
            raise DecodeError(str(e), command=command, key=key, reply=raw) from e

    def _timeout(
        self, command: str, key: Optional[str], cause: Optional[BaseException]
    ) -> DispatchTimeoutError:
        logger.warning("Dispatch of %s timed out", command)
        return DispatchTimeoutError(
            f"{command}: deadline exceeded", command=command, key=key, cause=cause
        )
