"""
Exception hierarchy for vector set client operations.

Validation, dispatch, decode and pool failures are kept apart so callers can
tell "could not talk to the service" from "got a reply that cannot be read".

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from typing import Any, Optional


class VectorClientError(Exception):
    """Base exception for vector set client errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        command: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            code: Optional error code for programmatic handling
            command: Remote command name the error relates to
            key: Vector index key the error relates to
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.command = command
        self.key = key
        self.details = details or {}


class ValidationError(VectorClientError):
    """Raised when caller-supplied arguments violate a precondition."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        constraint: Optional[str] = None,
        command: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Argument name that failed validation
            constraint: Short name of the violated constraint
            command: Remote command name
            key: Vector index key
            details: Optional additional details
        """
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            command=command,
            key=key,
            details=details,
        )
        self.field = field
        self.constraint = constraint


class DispatchError(VectorClientError):
    """Raised when sending a frame or receiving its reply fails."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        key: Optional[str] = None,
        cause: Optional[BaseException] = None,
        code: str = "DISPATCH_ERROR",
    ):
        """
        Initialize dispatch error.

        Args:
            message: Error message
            command: Remote command name
            key: Vector index key
            cause: Underlying transport exception
            code: Error code
        """
        details = {"cause": repr(cause)} if cause is not None else None
        super().__init__(message, code=code, command=command, key=key, details=details)
        self.cause = cause


class DispatchTimeoutError(DispatchError):
    """Raised when the call deadline or a socket timeout expires."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        key: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(
            message, command=command, key=key, cause=cause, code="DISPATCH_TIMEOUT"
        )


class RemoteCommandError(VectorClientError):
    """Raised when the service answers a frame with an error reply."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        key: Optional[str] = None,
    ):
        super().__init__(message, code="REMOTE_ERROR", command=command, key=key)


class DecodeError(VectorClientError):
    """Raised when a reply does not match the shape an operation expects."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        key: Optional[str] = None,
        reply: Any = None,
    ):
        """
        Initialize decode error.

        Args:
            message: Error message
            command: Remote command name
            key: Vector index key
            reply: The offending reply value
        """
        super().__init__(
            message,
            code="DECODE_ERROR",
            command=command,
            key=key,
            details={"reply": repr(reply)},
        )
        self.reply = reply


class ConnectionPoolError(VectorClientError):
    """Base exception for connection pool errors."""

    def __init__(self, message: str, code: str = "POOL_ERROR"):
        super().__init__(message, code=code)


class PoolExhaustedError(ConnectionPoolError):
    """Raised when no connection becomes available within the budget."""

    def __init__(self, message: str):
        super().__init__(message, code="POOL_EXHAUSTED")


class PoolClosedError(ConnectionPoolError):
    """Raised when a connection is requested from a closed pool."""

    def __init__(self, message: str = "Connection pool is closed"):
        super().__init__(message, code="POOL_CLOSED")


class EmbeddingError(VectorClientError):
    """Raised when the embedding provider fails or returns malformed data."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, code="EMBEDDING_ERROR", details=details)


class ConfigurationError(VectorClientError):
    """Raised when client configuration is invalid."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
