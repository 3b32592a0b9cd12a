"""
Configuration for the vector set client.

Provides configuration schema, validation and loading from JSON files.
All models are frozen: a client's configuration cannot change after it
has been constructed.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigurationError


class PoolConfig(BaseModel):
    """Connection pool sizing and health-check configuration."""

    model_config = {"extra": "forbid", "frozen": True}

    max_total: int = Field(default=30, ge=1, description="Maximum connections")
    max_idle: int = Field(default=15, ge=0, description="Maximum idle connections")
    min_idle: int = Field(default=5, ge=0, description="Minimum idle connections")
    test_on_borrow: bool = Field(
        default=True, description="PING an idle connection before lending it"
    )
    test_while_idle: bool = Field(
        default=True, description="Periodically PING idle connections"
    )
    block_when_exhausted: bool = Field(
        default=True,
        description="Wait for a connection when the pool is at max_total (False = fail fast)",
    )
    max_wait: Optional[float] = Field(
        default=None,
        description="Seconds to wait for a connection when blocking (None = no limit)",
    )
    idle_check_interval: float = Field(
        default=30.0, gt=0, description="Seconds between idle connection sweeps"
    )

    @field_validator("max_wait")
    @classmethod
    def validate_max_wait(cls, v: Optional[float]) -> Optional[float]:
        """Validate wait budget is non-negative."""
        if v is not None and v < 0:
            raise ValueError(f"max_wait must be >= 0, got {v}")
        return v

    @model_validator(mode="after")
    def validate_sizes(self) -> "PoolConfig":
        """Validate min_idle <= max_idle <= max_total."""
        if self.max_idle > self.max_total:
            raise ValueError(
                f"max_idle ({self.max_idle}) must not exceed max_total ({self.max_total})"
            )
        if self.min_idle > self.max_idle:
            raise ValueError(
                f"min_idle ({self.min_idle}) must not exceed max_idle ({self.max_idle})"
            )
        return self


class EmbeddingServiceConfig(BaseModel):
    """Configuration for the HTTP embedding service."""

    model_config = {"extra": "forbid", "frozen": True}

    url: str = Field(..., description="Embedding endpoint URL")
    model: Optional[str] = Field(default=None, description="Model name sent with requests")
    api_key: Optional[str] = Field(default=None, description="Bearer token")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    expected_dimension: Optional[int] = Field(
        default=None, ge=1, description="Reject embeddings of any other length"
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL scheme."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Embedding URL must start with http:// or https://: {v}")
        return v


class ClientConfig(BaseModel):
    """Vector set client configuration."""

    model_config = {"extra": "forbid", "frozen": True}

    host: str = Field(default="127.0.0.1", description="Service host")
    port: int = Field(default=6379, description="Service port")
    connect_timeout: float = Field(
        default=3.0, gt=0, description="Connect timeout in seconds"
    )
    socket_timeout: Optional[float] = Field(
        default=None, description="Default socket read/write timeout in seconds"
    )
    username: Optional[str] = Field(default=None, description="ACL user name")
    password: Optional[str] = Field(default=None, description="Credential")
    database: int = Field(default=0, ge=0, description="Logical database index")
    command_timeout: Optional[float] = Field(
        default=None,
        description="Overall per-call deadline (acquisition + I/O) in seconds",
    )
    pool: PoolConfig = Field(default_factory=PoolConfig)
    embedding: Optional[EmbeddingServiceConfig] = Field(default=None)

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"Port must be in 1..65535, got {v}")
        return v

    @field_validator("socket_timeout", "command_timeout")
    @classmethod
    def validate_timeouts(cls, v: Optional[float]) -> Optional[float]:
        """Validate optional timeouts are positive."""
        if v is not None and v <= 0:
            raise ValueError(f"Timeout must be > 0, got {v}")
        return v


def validate_config(
    config_path: Path,
) -> tuple[bool, Optional[str], Optional[ClientConfig]]:
    """
    Validate configuration file.

    Args:
        config_path: Path to configuration file

    Returns:
        Tuple of (is_valid, error_message, config_object)
    """
    config_path = Path(config_path)
    if not config_path.exists():
        return False, f"Configuration file not found: {config_path}", None
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        return False, f"Invalid JSON in {config_path}: {e}", None
    if not isinstance(config_data, dict):
        return False, f"Configuration root must be an object: {config_path}", None
    try:
        return True, None, ClientConfig(**config_data)
    except ValidationError as e:
        return False, f"Invalid configuration: {e}", None


def load_config(config_path: Path) -> ClientConfig:
    """
    Load and validate configuration.

    Args:
        config_path: Path to configuration file

    Returns:
        ClientConfig object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    is_valid, error, config = validate_config(config_path)
    if not is_valid or config is None:
        raise ConfigurationError(
            error or "Invalid configuration", details={"path": str(config_path)}
        )
    return config


def generate_config(**overrides: Any) -> Dict[str, Any]:
    """
    Generate a configuration dictionary with defaults.

    Args:
        **overrides: Top-level fields to override

    Returns:
        Configuration dictionary suitable for JSON serialization
    """
    return ClientConfig(**overrides).model_dump(mode="json")
