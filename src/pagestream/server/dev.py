"""Server bootstrap.

Starts a pounce ASGI server with the live pagestream App object.
"""


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start a pounce server with the given pagestream App.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``),
    but we already hold a live ``App`` object, so ``pounce.Server`` is
    used directly with the ASGI callable.

    Args:
        app: ASGI callable (pagestream App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on source changes (development only).
        app_path: Optional ``"module:attribute"`` import string.  When
            provided, pounce reimports the app on each reload cycle.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
