"""Pagestream: a tiny ASGI server for logical HTML pages and static files.

``GET /`` redirects home, logical routes map to HTML pages, and every
other ``GET`` streams the matching file from the public directory.

Basic usage::

    from pagestream import App, AppConfig

    app = App(AppConfig(public_dir="./public"))
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "AnyResponse",
    "App",
    "AppConfig",
    "ConfigurationError",
    "Controller",
    "FailureKind",
    "FileLookupError",
    "FileResponse",
    "FileService",
    "FileStream",
    "FileStreamProvider",
    "HTTPError",
    "NotFound",
    "PagestreamError",
    "Redirect",
    "Request",
    "Response",
    "Router",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import pagestream`` fast while providing a clean top-level API.
    """
    if name == "App":
        from pagestream.app import App

        return App

    if name == "AppConfig":
        from pagestream.config import AppConfig

        return AppConfig

    if name == "Request":
        from pagestream.http.request import Request

        return Request

    if name in ("AnyResponse", "FileResponse", "Redirect", "Response"):
        from pagestream.http import response

        return getattr(response, name)

    if name in (
        "ConfigurationError",
        "FailureKind",
        "FileLookupError",
        "HTTPError",
        "NotFound",
        "PagestreamError",
    ):
        from pagestream import errors

        return getattr(errors, name)

    if name in ("FileStream", "FileStreamProvider"):
        from pagestream import files

        return getattr(files, name)

    if name == "FileService":
        from pagestream.service import FileService

        return FileService

    if name == "Controller":
        from pagestream.controller import Controller

        return Controller

    if name == "Router":
        from pagestream.routing.router import Router

        return Router

    msg = f"module 'pagestream' has no attribute {name!r}"
    raise AttributeError(msg)
