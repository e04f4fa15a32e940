"""ASGI handler — translates ASGI scope/messages to pagestream types.

The only component that reads the raw scope. Builds a Request, hands it
to the router, and writes an access log line for every request.
"""

import logging

from pagestream._internal.asgi import Message, Receive, Scope, Send
from pagestream.http.request import Request
from pagestream.http.response import Response
from pagestream.routing.router import Router
from pagestream.server.sender import send_response

logger = logging.getLogger("pagestream.server")


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    router: Router,
) -> None:
    """Process a single HTTP request through the router."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    started = False

    async def tracked_send(message: Message) -> None:
        nonlocal started
        if message["type"] == "http.response.start":
            started = True
        await send(message)

    try:
        response = await router.handle(request, tracked_send)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        # Headers already on the wire: the server closes the connection.
        if not started:
            await send_response(Response(status=500), send)
        return

    logger.info("%s %s -> %d", request.method, request.url, response.status)
