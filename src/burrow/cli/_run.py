"""``burrow run`` — development server command."""

import argparse
import logging
import sys

from burrow.cli._resolve import resolve_app


def configure_logging(level: str) -> None:
    """Send burrow's loggers to stderr at *level*."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and start the pounce development server.

    ``--host``/``--port``/``--log-level`` override the app config.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(args.log_level or app.config.log_level)

    host = args.host or app.config.host
    port = args.port or app.config.port

    # Build the table now so a broken route tree fails before binding
    app._ensure_frozen()

    from burrow.server.dev import run_dev_server

    run_dev_server(
        app,
        host,
        port,
        reload=app.config.debug and app.config.reload,
        reload_dirs=app.config.reload_dirs,
        app_path=args.app,
    )
