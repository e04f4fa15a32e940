"""Pagestream exception hierarchy.

Shared across the router, the file service, and the ASGI handler so every
module raises and catches the same types.
"""

import errno
from dataclasses import dataclass
from enum import Enum


class PagestreamError(Exception):
    """Base for all pagestream-specific errors."""


class ConfigurationError(PagestreamError):
    """Raised when app configuration is invalid.

    Typically raised by ``AppConfig.from_env()`` at startup.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(PagestreamError):
    """An error that maps directly to an HTTP status code.

    Raised by the router. The ASGI handler turns these into
    empty-body responses with the same status.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no rule matched the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class FailureKind(Enum):
    """Discriminant for file lookup failures."""

    NOT_FOUND = "not_found"
    OTHER = "other"


_NOT_FOUND_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR, errno.EISDIR})


@dataclass(frozen=True, slots=True)
class FileLookupError(PagestreamError):
    """A file-access collaborator could not produce a stream.

    The router decides the response status from ``kind`` alone; ``detail``
    is diagnostic text for logs and is never parsed.
    """

    kind: FailureKind
    path: str
    detail: str = ""

    def __str__(self) -> str:
        text = f"{self.kind.value}: {self.path}"
        if self.detail:
            text = f"{text} ({self.detail})"
        return text

    @property
    def is_not_found(self) -> bool:
        return self.kind is FailureKind.NOT_FOUND

    @classmethod
    def not_found(cls, path: str, detail: str = "") -> "FileLookupError":
        return cls(kind=FailureKind.NOT_FOUND, path=path, detail=detail)

    @classmethod
    def from_os_error(cls, path: str, exc: OSError) -> "FileLookupError":
        """Classify an ``OSError`` raised while resolving or opening *path*."""
        if isinstance(exc, (FileNotFoundError, NotADirectoryError, IsADirectoryError)) or (
            exc.errno in _NOT_FOUND_ERRNOS
        ):
            kind = FailureKind.NOT_FOUND
        else:
            kind = FailureKind.OTHER
        return cls(kind=kind, path=path, detail=exc.strerror or str(exc))
