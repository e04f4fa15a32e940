"""Pagestream application class.

Owns the frozen config, the file-access collaborator, and the router.
Speaks ASGI 3.0: ``lifespan`` and ``http`` scopes.
"""

import logging
from pathlib import Path

from pagestream._internal.asgi import Receive, Scope, Send
from pagestream.config import AppConfig
from pagestream.controller import Controller
from pagestream.files import FileStreamProvider
from pagestream.routing.router import Router
from pagestream.server.handler import handle_request
from pagestream.service import FileService

logger = logging.getLogger("pagestream.server")


class App:
    """The pagestream application.

    Usage::

        app = App(AppConfig(public_dir="./public"))
        app.run()

    Pass ``controller=`` to serve from something other than the local
    public directory; it only needs an async ``get_file_stream``.
    """

    __slots__ = ("_controller", "_router", "config")

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        controller: FileStreamProvider | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        if controller is None:
            service = FileService(self.config.public_dir, chunk_size=self.config.chunk_size)
            controller = Controller(service)
        self._controller: FileStreamProvider = controller
        self._router = Router(self.config, controller)

    @property
    def controller(self) -> FileStreamProvider:
        return self._controller

    def run(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        app_path: str | None = None,
    ) -> None:
        """Start serving with pounce.

        Args:
            host: Override bind host.
            port: Override bind port.
            app_path: ``"module:attribute"`` import string pounce uses to
                reimport the app when ``config.debug`` turns on reload.
        """
        from pagestream.server.dev import run_server

        _host = self.config.host if host is None else host
        _port = self.config.port if port is None else port
        logger.info("Serving %s on http://%s:%d", self.config.public_dir, _host, _port)
        run_server(self, _host, _port, reload=self.config.debug, app_path=app_path)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, router=self._router)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Nothing needs opening or closing; startup only reports where
        files will be served from.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                public_dir = Path(self.config.public_dir)
                if not public_dir.is_dir():
                    logger.warning("Public directory %s does not exist", public_dir.resolve())
                else:
                    logger.debug("Public directory: %s", public_dir.resolve())
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


def create_app(**overrides: object) -> App:
    """App factory reading ``PAGESTREAM_*`` environment variables."""
    return App(AppConfig.from_env(**overrides))
