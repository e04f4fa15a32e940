"""File-access contract between the router and its collaborator.

The router only depends on ``FileStreamProvider``; anything with an async
``get_file_stream`` method can stand in for the filesystem-backed
``Controller`` (tests use in-memory fakes).
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class FileInfo:
    """A resolved file under the public directory."""

    path: Path
    type: str | None


@dataclass(frozen=True, slots=True)
class FileStream:
    """A lazily-read file body plus its detected extension.

    ``stream`` is single-use. Whoever receives a ``FileStream`` owns it
    and must drain or close it.
    """

    stream: AsyncIterator[bytes]
    type: str | None = None


@runtime_checkable
class FileStreamProvider(Protocol):
    """Anything that can turn a logical or literal path into a byte stream.

    Implementations raise ``FileLookupError`` with
    ``FailureKind.NOT_FOUND`` when no backing file exists, and with
    ``FailureKind.OTHER`` for any other I/O problem.
    """

    async def get_file_stream(self, path: str) -> FileStream: ...


def extension_of(path: str) -> str | None:
    """Return the trailing extension of *path* including the dot.

    Only the last path segment is considered, so ``/v1.2/readme`` has
    no extension, and neither has a dotfile like ``.env``.  Returns
    ``None`` when there is none.
    """
    name = path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    if dot <= 0 or dot == len(name) - 1:
        return None
    return name[dot:]
