"""Filesystem-backed file service.

Resolves paths under the public directory and opens them for chunked,
non-blocking reads via anyio.  Lookups never leave the public directory.
"""

import logging
import stat
from pathlib import Path

import anyio
from anyio import AsyncFile

from pagestream.errors import FileLookupError
from pagestream.files import FileInfo, FileStream

logger = logging.getLogger("pagestream.files")


class FileChunks:
    """Async iterator over an open file, ``chunk_size`` bytes at a time.

    Closes the file once exhausted or when ``aclose()`` is called,
    whichever comes first.
    """

    __slots__ = ("_chunk_size", "_closed", "_file")

    def __init__(self, file: AsyncFile[bytes], chunk_size: int) -> None:
        self._file = file
        self._chunk_size = chunk_size
        self._closed = False

    def __aiter__(self) -> "FileChunks":
        return self

    async def __anext__(self) -> bytes:
        if self._closed:
            raise StopAsyncIteration
        chunk = await self._file.read(self._chunk_size)
        if not chunk:
            await self.aclose()
            raise StopAsyncIteration
        return chunk

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._file.aclose()


class FileService:
    """Looks up files under *public_dir* and opens them as streams.

    Usage::

        service = FileService("./public")
        result = await service.get_file_stream("home/index.html")
        async for chunk in result.stream:
            ...
    """

    __slots__ = ("_chunk_size", "_public_dir")

    def __init__(self, public_dir: str | Path, *, chunk_size: int = 64 * 1024) -> None:
        self._public_dir = Path(public_dir).resolve()
        self._chunk_size = chunk_size

    @property
    def public_dir(self) -> Path:
        return self._public_dir

    async def get_file_info(self, file: str) -> FileInfo:
        """Resolve *file* to a regular file inside the public directory.

        Raises:
            FileLookupError: ``NOT_FOUND`` when the file is missing, is not
                a regular file, or resolves outside the public directory;
                ``OTHER`` for any other ``OSError``.
        """
        relative = file.lstrip("/")
        candidate = anyio.Path(self._public_dir / relative)
        try:
            resolved = await candidate.resolve()
            if not resolved.is_relative_to(self._public_dir):
                raise FileLookupError.not_found(file, "outside public directory")
            info = await resolved.stat()
        except OSError as exc:
            raise FileLookupError.from_os_error(file, exc) from exc

        if not stat.S_ISREG(info.st_mode):
            raise FileLookupError.not_found(file, "not a regular file")

        return FileInfo(path=Path(resolved), type=resolved.suffix or None)

    async def create_file_stream(self, path: Path) -> FileChunks:
        """Open *path* for reading and wrap it as a chunk iterator."""
        try:
            file = await anyio.open_file(path, "rb")
        except OSError as exc:
            raise FileLookupError.from_os_error(str(path), exc) from exc
        return FileChunks(file, self._chunk_size)

    async def get_file_stream(self, file: str) -> FileStream:
        """Resolve and open *file*; the caller owns the returned stream."""
        info = await self.get_file_info(file)
        logger.debug("Opening %s", info.path)
        stream = await self.create_file_stream(info.path)
        return FileStream(stream=stream, type=info.type)
