"""Request router.

Decides, for each request, between the home redirect, a logical page,
a literal file lookup, and 404.  File lookups go through an injected
``FileStreamProvider``; its failures never escape the router.

Rules, evaluated in order:

1. ``GET /``               -> 302 to ``config.home_location``
2. ``GET <logical page>``  -> stream ``config.pages[path]``
3. ``GET <anything else>`` -> stream the literal path
4. anything else           -> 404
"""

import logging

from pagestream._internal.asgi import Send
from pagestream.config import AppConfig
from pagestream.errors import FileLookupError, HTTPError, NotFound
from pagestream.files import FileStreamProvider, extension_of
from pagestream.http.request import Request
from pagestream.http.response import AnyResponse, FileResponse, Redirect, Response
from pagestream.server.sender import send_any

logger = logging.getLogger("pagestream.routing")


class Router:
    """Stateless dispatcher over a frozen route table.

    Safe to share across concurrent requests: it holds only the
    immutable config and the provider reference.
    """

    __slots__ = ("_config", "_provider")

    def __init__(self, config: AppConfig, provider: FileStreamProvider) -> None:
        self._config = config
        self._provider = provider

    async def handle(self, request: Request, send: Send) -> AnyResponse:
        """Dispatch *request* and write exactly one response to *send*.

        Returns the response that was sent, for access logging.
        """
        response = await self.dispatch(request)
        await send_any(response, send)
        return response

    async def dispatch(self, request: Request) -> AnyResponse:
        """Decide the response for *request* without sending anything."""
        try:
            return await self._route(request)
        except HTTPError as exc:
            logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
            return Response(status=exc.status)

    async def _route(self, request: Request) -> AnyResponse:
        if request.method != "GET":
            raise NotFound(f"No route for {request.method} {request.path}")

        if request.path == "/":
            return Redirect(self._config.home_location)

        page = self._config.pages.get(request.path)
        if page is not None:
            return await self._stream(page)

        return await self._stream(request.path, fallback_type=extension_of(request.path))

    async def _stream(self, path: str, *, fallback_type: str | None = None) -> AnyResponse:
        """Ask the provider for *path* and map the outcome to a response."""
        try:
            result = await self._provider.get_file_stream(path)
        except FileLookupError as exc:
            if not exc.is_not_found:
                logger.exception("500 GET %s", path)
                return Response(status=500)
            raise NotFound(str(exc)) from exc
        except Exception:
            logger.exception("500 GET %s", path)
            return Response(status=500)

        file_type = result.type or fallback_type
        content_type = self._config.content_types.get(file_type) if file_type else None
        return FileResponse(stream=result.stream, content_type=content_type)
