"""Client configuration model."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidArgumentError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 783
DEFAULT_TIMEOUT = 10
PROTOCOL_VERSION = "1.5"


@dataclass(frozen=True)
class ClientConfig:
    """Where spamd lives and how long to wait for it.

    ``timeout`` bounds the whole exchange (connect, write, and reading
    until spamd closes the connection), in seconds.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    protocol_version: str = PROTOCOL_VERSION

    def __post_init__(self) -> None:
        if not 1 <= self.port <= 65535:
            raise InvalidArgumentError(f"Port must be 1-65535, got {self.port}")
        if self.timeout <= 0:
            raise InvalidArgumentError(
                f"Timeout must be positive, got {self.timeout}"
            )

    def to_dict(self) -> dict:
        return {
            "host": self.host,
            "port": self.port,
            "timeout": self.timeout,
            "protocol_version": self.protocol_version,
        }
