"""Pagestream CLI — start the server.

Entry point registered as ``pagestream`` in ``pyproject.toml``::

    [project.scripts]
    pagestream = "pagestream.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``pagestream`` command."""
    parser = argparse.ArgumentParser(
        prog="pagestream",
        description="Serve logical HTML pages and static files over ASGI.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- pagestream run ---------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument(
        "app",
        nargs="?",
        default="pagestream.app:create_app",
        help="Import string (default: pagestream.app:create_app)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--public-dir",
        default=None,
        help="Directory to serve files from (sets PAGESTREAM_PUBLIC_DIR)",
    )
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable auto-reload and debug logging",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from pagestream.cli._run import run_server

        run_server(args)
