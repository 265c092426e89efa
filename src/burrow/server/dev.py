"""Development server.

Serves the live burrow App with a single pounce worker.  pounce is an
optional dependency (``pip install burrow[server]``) and is imported
only when a server is actually started.
"""

import logging

logger = logging.getLogger("burrow.server")


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = True,
    reload_dirs: tuple[str, ...] = (),
    app_path: str | None = None,
) -> None:
    """Bind *host*:*port* and serve *app* until interrupted.

    Args:
        app: The burrow App (any ASGI callable works).
        host: Bind host address.
        port: Bind port number.
        reload: Restart when watched files change.
        reload_dirs: Directories watched besides the working directory,
            normally the mounted routes directories.
        app_path: ``"module:attribute"`` string.  With reload on, pounce
            re-imports it after each change so edited route files are
            walked again.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    logger.info("Serving on http://%s:%d (reload=%s)", host, port, reload)
    server = Server(
        ServerConfig(host=host, port=port, workers=1, reload=reload, reload_dirs=reload_dirs),
        app,
        app_path=app_path,
    )
    server.run()
