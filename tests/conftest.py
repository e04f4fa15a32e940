"""Shared fixtures for pagestream tests."""

from collections.abc import AsyncIterator
from dataclasses import dataclass, field

import pytest

from pagestream.config import AppConfig
from pagestream.files import FileStream


class RecordingStream:
    """An in-memory byte stream that remembers whether it was closed."""

    def __init__(self, chunks: list[bytes]) -> None:
        self._chunks = list(chunks)
        self.closed = False

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self

    async def __anext__(self) -> bytes:
        if self.closed or not self._chunks:
            raise StopAsyncIteration
        return self._chunks.pop(0)

    async def aclose(self) -> None:
        self.closed = True


@dataclass
class FakeProvider:
    """A ``FileStreamProvider`` that records calls and returns a canned outcome."""

    result: FileStream | None = None
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def get_file_stream(self, path: str) -> FileStream:
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def public_dir(tmp_path):
    """A public directory laid out like a real deployment."""
    public = tmp_path / "public"
    (public / "home").mkdir(parents=True)
    (public / "controller").mkdir()
    (public / "home" / "index.html").write_text("<h1>Home</h1>")
    (public / "controller" / "index.html").write_text("<h1>Controller</h1>")
    (public / "home" / "css").mkdir()
    (public / "home" / "css" / "style.css").write_text("body { color: red; }")
    (public / "home" / "js").mkdir()
    (public / "home" / "js" / "app.js").write_text("console.log('hi');")
    (public / "notes.txt").write_text("plain")
    (public / "LICENSE").write_text("MIT")
    return public
