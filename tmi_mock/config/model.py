from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class ServerConfig(BaseModel):
    """Runtime settings for the mock chat server.

    Attributes:
        host_address: Interface to bind.
        port: Listening port; 0 asks the OS for a free one.
        ping_interval: Seconds between liveness PINGs.
        pong_timeout: Seconds a client has to answer a PING.
        synthesize_user_threshold: Random draws at or above this fabricate a chatter.
        bind_max_attempts: Attempts to bind the port before giving up.
        bind_max_backoff: Upper bound for the wait between bind attempts.
        debug: Enable DEBUG logging.
    """

    host_address: str = "0.0.0.0"
    port: int = Field(default=3001, ge=0, le=65535)
    ping_interval: float = Field(default=30, gt=0)
    pong_timeout: float = Field(default=1, gt=0)
    synthesize_user_threshold: float = Field(default=0.75, ge=0, le=1)
    bind_max_attempts: int = Field(default=5, ge=1)
    bind_max_backoff: float = Field(default=10, ge=0)
    debug: bool = False

    @field_validator("host_address", mode="before")
    @classmethod
    def validate_host_address(cls, v: Any) -> str:
        """Strip whitespace; an empty address means all interfaces."""
        if v is None:
            return "0.0.0.0"
        if not isinstance(v, str):
            raise ValueError("host_address must be a string")
        return v.strip() or "0.0.0.0"

    @model_validator(mode="after")
    def validate_timing(self) -> ServerConfig:
        """The PONG window must close before the next PING goes out."""
        if self.pong_timeout >= self.ping_interval:
            raise ValueError("pong_timeout must be shorter than ping_interval")
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ServerConfig:
        """Create a ServerConfig from a mapping, ignoring None values."""
        return cls.model_validate({k: v for k, v in data.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()
