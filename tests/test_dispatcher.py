"""
Tests for the raw command dispatcher.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import socket
from types import SimpleNamespace

import pytest
import redis

from vector_set_client.core.exceptions import (
    DecodeError,
    DispatchError,
    DispatchTimeoutError,
    PoolClosedError,
    PoolExhaustedError,
    RemoteCommandError,
)
from vector_set_client.core.vector_client import command_encoder as enc
from vector_set_client.core.vector_client import dispatcher as dispatcher_module
from vector_set_client.core.vector_client.dispatcher import RawCommandDispatcher
from vector_set_client.core.vector_client.protocol import ArrayReply, BulkReply, IntegerReply


@pytest.fixture
def pool(make_pool):
    """Pool without borrow-time PINGs so frames are easy to inspect."""
    return make_pool(max_total=2, test_on_borrow=False, block_when_exhausted=False)


@pytest.fixture
def dispatcher(pool):
    """Dispatcher over the fake pool."""
    return RawCommandDispatcher(pool)


class TestExecute:
    """Test successful dispatch."""

    def test_sends_frame_and_converts_reply(self, server, pool, dispatcher):
        """Test one frame out, one converted reply back."""
        server.reply(5)
        reply = dispatcher.execute(enc.encode_cardinality("idx"))
        assert reply == IntegerReply(5)
        assert server.frames == [(b"VCARD", b"idx")]
        assert pool.stats().idle == 1
        assert pool.stats().in_use == 0

    def test_sequence_reply(self, server, dispatcher):
        """Test nested raw values become ArrayReply."""
        server.reply([b"e1", b"e2"])
        reply = dispatcher.execute(enc.encode_range("idx", "-", "+", 10))
        assert reply == ArrayReply((BulkReply(b"e1"), BulkReply(b"e2")))

    def test_connection_reused_across_calls(self, server, dispatcher):
        """Test sequential calls share one pooled connection."""
        server.reply(1, 2, 3)
        for _ in range(3):
            dispatcher.execute(enc.encode_dimension("idx"))
        assert len(server.connections) == 1


class TestFailures:
    """Test error mapping and connection bookkeeping."""

    def test_remote_error_releases_connection(self, server, pool, dispatcher):
        """Test an error reply is reported and the connection kept."""
        server.reply(redis.ResponseError("ERR element not found"))
        with pytest.raises(RemoteCommandError) as exc_info:
            dispatcher.execute(enc.encode_remove("idx", "e1"))
        assert exc_info.value.command == "VREM"
        assert exc_info.value.key == "idx"
        assert "element not found" in str(exc_info.value)
        assert pool.stats().idle == 1
        assert server.connections[0].disconnects == 0

    def test_timeout_discards_connection(self, server, pool, dispatcher):
        """Test a read timeout raises DispatchTimeoutError and drops the connection."""
        server.reply(redis.TimeoutError("Timeout reading from socket"))
        with pytest.raises(DispatchTimeoutError) as exc_info:
            dispatcher.execute(enc.encode_cardinality("idx"))
        assert exc_info.value.code == "DISPATCH_TIMEOUT"
        assert isinstance(exc_info.value, DispatchError)
        assert pool.stats().total == 0
        assert server.connections[0].disconnects == 1

    def test_socket_timeout_maps_to_timeout(self, server, dispatcher):
        """Test bare socket timeouts are treated as deadline expiry."""
        server.reply(socket.timeout("timed out"))
        with pytest.raises(DispatchTimeoutError):
            dispatcher.execute(enc.encode_cardinality("idx"))

    def test_transport_failure_discards_connection(self, server, pool, dispatcher):
        """Test a dropped connection raises DispatchError and is not reused."""
        server.reply(redis.ConnectionError("Connection closed by server"), 3)
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.execute(enc.encode_cardinality("idx"))
        assert exc_info.value.code == "DISPATCH_ERROR"
        assert isinstance(exc_info.value.cause, redis.ConnectionError)
        assert pool.stats().total == 0
        assert dispatcher.execute(enc.encode_cardinality("idx")) == IntegerReply(3)
        assert len(server.connections) == 2

    def test_connect_failure_wrapped(self, server, pool, dispatcher):
        """Test failing to open a connection is a DispatchError."""
        server.refuse_connect = True
        with pytest.raises(DispatchError):
            dispatcher.execute(enc.encode_cardinality("idx"))
        assert pool.stats().total == 0

    def test_unsupported_reply_is_decode_error(self, server, pool, dispatcher):
        """Test a raw value with no reply counterpart."""
        server.reply(3.5)
        with pytest.raises(DecodeError):
            dispatcher.execute(enc.encode_cardinality("idx"))
        assert pool.stats().idle == 1

    def test_pool_errors_pass_through(self, pool, dispatcher):
        """Test exhaustion and closed-pool errors are not wrapped."""
        held = [pool.acquire(), pool.acquire()]
        with pytest.raises(PoolExhaustedError):
            dispatcher.execute(enc.encode_cardinality("idx"))
        for conn in held:
            pool.release(conn)
        pool.close()
        with pytest.raises(PoolClosedError):
            dispatcher.execute(enc.encode_cardinality("idx"))

    def test_expired_deadline_discards_connection(self, server, pool, monkeypatch):
        """Test a deadline spent while acquiring fails before any I/O."""
        ticks = iter([100.0, 200.0])
        monkeypatch.setattr(
            dispatcher_module, "time", SimpleNamespace(monotonic=lambda: next(ticks))
        )
        dispatcher = RawCommandDispatcher(pool, timeout=1.0)
        with pytest.raises(DispatchTimeoutError):
            dispatcher.execute(enc.encode_cardinality("idx"))
        assert server.frames == []
        assert pool.stats().total == 0

    def test_call_in_flight_during_close_fails(self, server, pool, dispatcher, monkeypatch):
        """Test a call holding a connection when the pool closes gets DispatchError."""
        acquire = pool.acquire

        def acquire_then_close(timeout=None):
            conn = acquire(timeout=timeout)
            pool.close()
            return conn

        monkeypatch.setattr(pool, "acquire", acquire_then_close)
        server.reply(1)
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.execute(enc.encode_cardinality("idx"))
        assert isinstance(exc_info.value.cause, redis.ConnectionError)
        assert server.frames == []
        assert len(server.connections) == 1
        assert pool.stats().total == 0
