"""HTTP response values returned by the router.

Each value describes exactly one terminal response. The sender turns
them into ASGI messages; nothing here performs I/O.
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class Response:
    """A status-only response with an empty body (404, 500)."""

    status: int


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect response."""

    url: str
    status: int = 302


@dataclass(frozen=True, slots=True)
class FileResponse:
    """A file body piped to the client chunk by chunk.

    The stream is handed over to the sender, which drains and closes
    it. When ``content_type`` is ``None`` no ``Content-Type`` header is
    written and the transport default status applies.
    """

    status: ClassVar[int] = 200

    stream: AsyncIterator[bytes]
    content_type: str | None = None


AnyResponse = Response | Redirect | FileResponse
