"""Application configuration.

AppConfig is a frozen dataclass, immutable after creation with no string-key
dict lookups.  The route table (home redirect, logical pages, content types)
lives here and is read-only for the life of the process.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pagestream.errors import ConfigurationError

DEFAULT_PAGES: Mapping[str, str] = MappingProxyType(
    {
        "/home": "home/index.html",
        "/controller": "controller/index.html",
    }
)

DEFAULT_CONTENT_TYPES: Mapping[str, str] = MappingProxyType(
    {
        ".html": "text/html",
        ".css": "text/css",
        ".js": "text/javascript",
    }
)

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")
_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=8080, public_dir="./public")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    log_level: str = "info"

    # Routing
    home_location: str = "/home"
    pages: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_PAGES))
    content_types: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_CONTENT_TYPES))

    # Files
    public_dir: str | Path = "public"
    chunk_size: int = 64 * 1024

    def __post_init__(self) -> None:
        # Caller-supplied dicts become read-only copies.
        object.__setattr__(self, "pages", MappingProxyType(dict(self.pages)))
        object.__setattr__(self, "content_types", MappingProxyType(dict(self.content_types)))

        if "/" in self.pages:
            msg = "'/' is reserved for the home redirect and cannot be a logical page"
            raise ConfigurationError(msg)
        for route in self.pages:
            if not route.startswith("/"):
                msg = f"Logical page route {route!r} must start with '/'"
                raise ConfigurationError(msg)
        for ext in self.content_types:
            if not ext.startswith("."):
                msg = f"Content type key {ext!r} must include the leading '.'"
                raise ConfigurationError(msg)
        if self.chunk_size <= 0:
            msg = f"chunk_size must be positive, got {self.chunk_size}"
            raise ConfigurationError(msg)
        if self.log_level.lower() not in _LOG_LEVELS:
            msg = f"Unknown log level {self.log_level!r}; expected one of {', '.join(_LOG_LEVELS)}"
            raise ConfigurationError(msg)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> "AppConfig":
        """Build a config from ``PAGESTREAM_*`` environment variables.

        Recognised variables: ``PAGESTREAM_HOST``, ``PAGESTREAM_PORT``
        (falls back to ``PORT``), ``PAGESTREAM_PUBLIC_DIR``,
        ``PAGESTREAM_HOME``, ``PAGESTREAM_DEBUG`` and
        ``PAGESTREAM_LOG_LEVEL``.  Keyword *overrides* win over the
        environment.

        Raises:
            ConfigurationError: If a variable holds an unusable value.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        if "PAGESTREAM_HOST" in env:
            values["host"] = env["PAGESTREAM_HOST"]

        port = env.get("PAGESTREAM_PORT", env.get("PORT"))
        if port is not None:
            try:
                values["port"] = int(port)
            except ValueError as exc:
                msg = f"Invalid port {port!r}"
                raise ConfigurationError(msg) from exc

        if "PAGESTREAM_PUBLIC_DIR" in env:
            values["public_dir"] = Path(env["PAGESTREAM_PUBLIC_DIR"])
        if "PAGESTREAM_HOME" in env:
            values["home_location"] = env["PAGESTREAM_HOME"]
        if "PAGESTREAM_LOG_LEVEL" in env:
            values["log_level"] = env["PAGESTREAM_LOG_LEVEL"].lower()

        if "PAGESTREAM_DEBUG" in env:
            raw = env["PAGESTREAM_DEBUG"].strip().lower()
            if raw in _TRUTHY:
                values["debug"] = True
            elif raw in _FALSY:
                values["debug"] = False
            else:
                msg = f"Invalid PAGESTREAM_DEBUG value {raw!r}"
                raise ConfigurationError(msg)

        values.update(overrides)
        return cls(**values)
