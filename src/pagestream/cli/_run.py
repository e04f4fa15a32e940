"""``pagestream run``: resolve an app and serve it with pounce."""

import argparse
import logging
import os
import sys

from pagestream.cli._resolve import resolve_app
from pagestream.errors import ConfigurationError

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def run_server(args: argparse.Namespace) -> None:
    """Start the pagestream server.

    ``--public-dir`` and ``--debug`` are exported as ``PAGESTREAM_*``
    variables before the app is resolved so env-reading factories pick
    them up.  ``--host``/``--port`` override the resolved app's config.
    """
    if args.public_dir is not None:
        os.environ["PAGESTREAM_PUBLIC_DIR"] = args.public_dir
    if args.debug:
        os.environ["PAGESTREAM_DEBUG"] = "1"

    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    level = "debug" if app.config.debug else app.config.log_level
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)

    app.run(host=args.host, port=args.port, app_path=args.app)
