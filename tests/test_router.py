"""Tests for pagestream.routing — the dispatch decision for each request."""

import logging

import pytest

from conftest import FakeProvider, RecordingStream
from pagestream.config import AppConfig
from pagestream.errors import FailureKind, FileLookupError
from pagestream.files import FileStream, extension_of
from pagestream.http.request import Request
from pagestream.http.response import FileResponse, Redirect, Response
from pagestream.routing import Router


def _request(method: str, path: str) -> Request:
    return Request(method=method, path=path)


class _Sink:
    """Collects ASGI messages written by ``Router.handle``."""

    def __init__(self) -> None:
        self.messages: list[dict] = []

    async def __call__(self, message: dict) -> None:
        self.messages.append(message)

    @property
    def start(self) -> dict:
        return self.messages[0]

    @property
    def headers(self) -> dict[bytes, bytes]:
        return dict(self.start["headers"])

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self.messages[1:])


class TestHomeRedirect:
    @pytest.mark.asyncio
    async def test_get_root_redirects_home(self, config: AppConfig) -> None:
        provider = FakeProvider()
        router = Router(config, provider)

        response = await router.dispatch(_request("GET", "/"))

        assert response == Redirect(config.home_location)
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_redirect_is_written_with_location(self, config: AppConfig) -> None:
        router = Router(config, FakeProvider())
        sink = _Sink()

        await router.handle(_request("GET", "/"), sink)

        assert sink.start["status"] == 302
        assert sink.headers[b"location"] == b"/home"
        assert sink.body == b""

    @pytest.mark.asyncio
    async def test_custom_home_location(self) -> None:
        router = Router(AppConfig(home_location="/dashboard"), FakeProvider())

        response = await router.dispatch(_request("GET", "/"))

        assert isinstance(response, Redirect)
        assert response.url == "/dashboard"


class TestLogicalPages:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("path", "file"),
        [("/home", "home/index.html"), ("/controller", "controller/index.html")],
    )
    async def test_page_streams_mapped_file(self, config: AppConfig, path: str, file: str) -> None:
        stream = RecordingStream([b"data"])
        provider = FakeProvider(result=FileStream(stream=stream))
        router = Router(config, provider)

        response = await router.dispatch(_request("GET", path))

        assert provider.calls == [file]
        assert isinstance(response, FileResponse)
        assert response.stream is stream

    @pytest.mark.asyncio
    async def test_page_without_type_sends_no_content_type(self, config: AppConfig) -> None:
        provider = FakeProvider(result=FileStream(stream=RecordingStream([b"<h1>", b"Home</h1>"])))
        router = Router(config, provider)
        sink = _Sink()

        await router.handle(_request("GET", "/home"), sink)

        assert b"content-type" not in sink.headers
        assert sink.body == b"<h1>Home</h1>"

    @pytest.mark.asyncio
    async def test_page_with_html_type(self, config: AppConfig) -> None:
        provider = FakeProvider(result=FileStream(stream=RecordingStream([b"x"]), type=".html"))
        router = Router(config, provider)

        response = await router.dispatch(_request("GET", "/controller"))

        assert isinstance(response, FileResponse)
        assert response.content_type == "text/html"

    @pytest.mark.asyncio
    async def test_custom_page_map(self) -> None:
        provider = FakeProvider(result=FileStream(stream=RecordingStream([])))
        router = Router(AppConfig(pages={"/about": "about/index.html"}), provider)

        await router.dispatch(_request("GET", "/about"))
        await router.dispatch(_request("GET", "/home"))

        assert provider.calls == ["about/index.html", "/home"]


class TestLiteralFiles:
    @pytest.mark.asyncio
    async def test_unknown_extension_streams_without_headers(self, config: AppConfig) -> None:
        stream = RecordingStream([b"data"])
        provider = FakeProvider(result=FileStream(stream=stream, type=".ext"))
        router = Router(config, provider)
        sink = _Sink()

        response = await router.handle(_request("GET", "/file.ext"), sink)

        assert provider.calls == ["/file.ext"]
        assert isinstance(response, FileResponse)
        assert response.content_type is None
        assert b"content-type" not in sink.headers
        assert sink.body == b"data"

    @pytest.mark.asyncio
    async def test_known_extension_sets_content_type(self, config: AppConfig) -> None:
        provider = FakeProvider(result=FileStream(stream=RecordingStream([b"data"]), type=".html"))
        router = Router(config, provider)
        sink = _Sink()

        await router.handle(_request("GET", "/index.html"), sink)

        assert provider.calls == ["/index.html"]
        assert sink.start["status"] == 200
        assert sink.headers[b"content-type"] == config.content_types[".html"].encode()
        assert sink.body == b"data"

    @pytest.mark.asyncio
    async def test_path_extension_used_when_provider_has_no_type(self, config: AppConfig) -> None:
        provider = FakeProvider(result=FileStream(stream=RecordingStream([b"a{}"])))
        router = Router(config, provider)

        response = await router.dispatch(_request("GET", "/css/style.css"))

        assert isinstance(response, FileResponse)
        assert response.content_type == "text/css"

    @pytest.mark.asyncio
    async def test_provider_type_wins_over_path_extension(self, config: AppConfig) -> None:
        provider = FakeProvider(result=FileStream(stream=RecordingStream([]), type=".js"))
        router = Router(config, provider)

        response = await router.dispatch(_request("GET", "/bundle.html"))

        assert isinstance(response, FileResponse)
        assert response.content_type == "text/javascript"

    @pytest.mark.asyncio
    async def test_stream_is_closed_after_piping(self, config: AppConfig) -> None:
        stream = RecordingStream([b"one", b"two"])
        provider = FakeProvider(result=FileStream(stream=stream, type=".js"))
        router = Router(config, provider)
        sink = _Sink()

        await router.handle(_request("GET", "/app.js"), sink)

        assert stream.closed
        assert [m.get("more_body") for m in sink.messages[1:]] == [True, True, False]


class TestUnrouted:
    @pytest.mark.asyncio
    async def test_post_unknown_is_404(self, config: AppConfig) -> None:
        provider = FakeProvider()
        router = Router(config, provider)
        sink = _Sink()

        await router.handle(_request("POST", "/unknown"), sink)

        assert sink.start["status"] == 404
        assert sink.body == b""
        assert provider.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "HEAD"])
    async def test_non_get_on_logical_page_is_404(self, config: AppConfig, method: str) -> None:
        provider = FakeProvider()
        router = Router(config, provider)

        response = await router.dispatch(_request(method, "/home"))

        assert response == Response(status=404)
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_post_root_is_404(self, config: AppConfig) -> None:
        router = Router(config, FakeProvider())

        response = await router.dispatch(_request("POST", "/"))

        assert isinstance(response, Response)
        assert response.status == 404


class TestProviderFailures:
    @pytest.mark.asyncio
    async def test_missing_file_is_404(self, config: AppConfig) -> None:
        provider = FakeProvider(error=FileLookupError.not_found("/index.png"))
        router = Router(config, provider)
        sink = _Sink()

        await router.handle(_request("GET", "/index.png"), sink)

        assert provider.calls == ["/index.png"]
        assert sink.start["status"] == 404
        assert sink.body == b""

    @pytest.mark.asyncio
    async def test_other_lookup_error_is_500(self, config: AppConfig) -> None:
        provider = FakeProvider(
            error=FileLookupError(kind=FailureKind.OTHER, path="/route", detail="Permission denied")
        )
        router = Router(config, provider)
        sink = _Sink()

        await router.handle(_request("GET", "/route"), sink)

        assert sink.start["status"] == 500
        assert sink.body == b""

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_500(self, config: AppConfig) -> None:
        provider = FakeProvider(error=RuntimeError("Error:"))
        router = Router(config, provider)

        response = await router.dispatch(_request("GET", "/route"))

        assert response == Response(status=500)

    @pytest.mark.asyncio
    async def test_not_found_text_in_message_does_not_matter(self, config: AppConfig) -> None:
        provider = FakeProvider(
            error=FileLookupError(kind=FailureKind.OTHER, path="/x", detail="not found")
        )
        router = Router(config, provider)

        response = await router.dispatch(_request("GET", "/x"))

        assert isinstance(response, Response)
        assert response.status == 500

    @pytest.mark.asyncio
    async def test_missing_logical_page_is_404(self, config: AppConfig) -> None:
        provider = FakeProvider(error=FileLookupError.not_found("home/index.html"))
        router = Router(config, provider)

        response = await router.dispatch(_request("GET", "/home"))

        assert isinstance(response, Response)
        assert response.status == 404


class TestExtensionOf:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/index.html", ".html"),
            ("/home/js/app.min.js", ".js"),
            ("/v1.2/readme", None),
            ("/LICENSE", None),
            ("/.env", None),
            ("/trailing.", None),
        ],
    )
    def test_extension_of(self, path: str, expected: str | None) -> None:
        assert extension_of(path) == expected


class TestFailureLogging:
    @pytest.mark.asyncio
    async def test_other_lookup_error_logged_with_traceback(self, config: AppConfig, caplog) -> None:
        provider = FakeProvider(
            error=FileLookupError(kind=FailureKind.OTHER, path="/route", detail="Permission denied")
        )
        router = Router(config, provider)

        with caplog.at_level(logging.ERROR, logger="pagestream.routing"):
            await router.dispatch(_request("GET", "/route"))

        (record,) = caplog.records
        assert record.message == "500 GET /route"
        assert record.exc_info is not None
        assert record.exc_info[0] is FileLookupError

    @pytest.mark.asyncio
    async def test_missing_file_not_logged_as_error(self, config: AppConfig, caplog) -> None:
        router = Router(config, FakeProvider(error=FileLookupError.not_found("/a.png")))

        with caplog.at_level(logging.ERROR, logger="pagestream.routing"):
            await router.dispatch(_request("GET", "/a.png"))

        assert caplog.records == []
