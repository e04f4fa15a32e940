"""ASGI response sending — translates pagestream responses to ASGI messages.

Handles empty-body status responses, redirects, and file streams piped chunk
by chunk.
"""

import logging

from pagestream._internal.asgi import Send
from pagestream.http.response import AnyResponse, FileResponse, Redirect, Response

logger = logging.getLogger("pagestream.server")


async def send_response(response: Response, send: Send) -> None:
    """Send a status-only response with an empty body."""
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": [(b"content-length", b"0")],
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"",
        }
    )


async def send_redirect(redirect: Redirect, send: Send) -> None:
    """Send a redirect with a ``Location`` header and an empty body."""
    await send(
        {
            "type": "http.response.start",
            "status": redirect.status,
            "headers": [
                (b"location", redirect.url.encode("latin-1")),
                (b"content-length", b"0"),
            ],
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"",
        }
    )


async def send_file_response(response: FileResponse, send: Send) -> None:
    """Pipe a file stream to the client.

    Sends the start message immediately, then each chunk as an ASGI
    body message with ``more_body=True``, then closes with an empty
    body.  The source stream is always closed, even when the client
    goes away mid-transfer.  On a mid-stream read error the body is
    ended early; headers are already on the wire so the status stays.
    """
    stream = response.stream
    try:
        raw_headers: list[tuple[bytes, bytes]] = []
        if response.content_type is not None:
            raw_headers.append((b"content-type", response.content_type.encode("latin-1")))
        await send(
            {
                "type": "http.response.start",
                "status": response.status,
                "headers": raw_headers,
            }
        )
        while True:
            try:
                chunk = await anext(stream)
            except StopAsyncIteration:
                break
            except OSError:
                logger.exception("Read error while streaming response body")
                break
            if chunk:
                await send(
                    {
                        "type": "http.response.body",
                        "body": chunk,
                        "more_body": True,
                    }
                )

        await send(
            {
                "type": "http.response.body",
                "body": b"",
                "more_body": False,
            }
        )
    finally:
        aclose = getattr(stream, "aclose", None)
        if aclose is not None:
            await aclose()


async def send_any(response: AnyResponse, send: Send) -> None:
    """Dispatch on response type and send it."""
    if isinstance(response, FileResponse):
        await send_file_response(response, send)
    elif isinstance(response, Redirect):
        await send_redirect(response, send)
    else:
        await send_response(response, send)
