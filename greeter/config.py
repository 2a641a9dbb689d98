import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PORT = 3000
PORT_ENV = "PORT"


class ConfigError(ValueError):
    """Raised when a setting is unusable."""


@dataclass(frozen=True)
class Config:
    port: int = DEFAULT_PORT

    def __post_init__(self):
        if not 0 <= self.port <= 65535:
            raise ConfigError(f"port out of range (0-65535): {self.port}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a config from ``PORT``, falling back to 3000 when unset or empty."""
        if environ is None:
            environ = os.environ

        raw = environ.get(PORT_ENV, "").strip()
        if not raw:
            return cls()

        try:
            port = int(raw)
        except ValueError:
            raise ConfigError(f"{PORT_ENV} must be an integer, got {raw!r}") from None

        return cls(port=port)
