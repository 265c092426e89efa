"""Burrow application class.

Mutable during setup (route mounts, lifecycle hooks).
Frozen at runtime when app.run() or __call__() is first invoked: the
routes directory is walked once and the resulting table is read-only.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from burrow._internal.asgi import Receive, Scope, Send
from burrow._internal.invoke import invoke
from burrow.config import AppConfig
from burrow.errors import ConfigurationError
from burrow.loader import ModuleLoader, load_handler
from burrow.middleware.static import StaticAssets
from burrow.routing.discovery import discover_routes
from burrow.routing.route import RouteEntry
from burrow.routing.table import RouteTable
from burrow.server.handler import handle_request

logger = logging.getLogger("burrow.app")


@dataclass(frozen=True, slots=True)
class _Mount:
    """A routes directory waiting to be walked."""

    directory: Path
    prefix: str


class App:
    """The burrow application.

    Usage::

        app = App(AppConfig(routes_dir="routes", assets_dir="dist"))
        app.mount_routes()   # optional: config.routes_dir is mounted by default
        app.run()

    Thread safety:
        Setup is single-threaded.  The freeze transition uses a Lock +
        double-check so exactly one thread builds the route table, even
        when several ASGI workers receive their first request at once.
        After that the table is only read.  ``reload_routes()`` builds a
        fresh table and swaps the reference in one assignment.
    """

    __slots__ = (
        "_assets",
        "_freeze_lock",
        "_frozen",
        "_loader",
        "_mounts",
        "_shutdown_hooks",
        "_startup_hooks",
        "_table",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        loader: ModuleLoader = load_handler,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._loader: ModuleLoader = loader
        self._mounts: list[_Mount] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._table: RouteTable | None = None
        self._assets: StaticAssets | None = None

    # -- Route mounting --

    def mount_routes(self, routes_dir: str | Path | None = None, *, prefix: str | None = None) -> None:
        """Mount a filesystem routes directory.

        Walks the directory at freeze time and registers one route per
        ``<method>.py`` file.  May be called several times; mounts are
        walked in the order they were added.

        Args:
            routes_dir: Directory to walk.  Defaults to
                ``config.routes_dir``.
            prefix: URL prefix for the mounted routes.  Defaults to
                ``config.routes_prefix``.

        Raises:
            ConfigurationError: If the directory does not exist.
        """
        self._check_not_frozen()
        directory = Path(routes_dir if routes_dir is not None else self.config.routes_dir)
        if not directory.is_dir():
            raise ConfigurationError(f"Routes directory not found: {directory}")
        self._mounts.append(
            _Mount(directory, prefix if prefix is not None else self.config.routes_prefix)
        )

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        after the route table is built and before the server accepts
        HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def table(self) -> RouteTable:
        """The frozen route table (freezes the app if needed)."""
        self._ensure_frozen()
        assert self._table is not None
        return self._table

    def reload_routes(self) -> RouteTable:
        """Rebuild the route table from disk and swap it in.

        Requests already in flight keep the table they started with.
        If the rebuild fails, the current table stays in place.
        """
        self._ensure_frozen()
        table = self._build_table()
        self._table = table
        logger.info("Reloaded %d routes", len(table))
        return table

    # -- Server --

    def run(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        app_path: str | None = None,
    ) -> None:
        """Build the route table and start the development server.

        Args:
            host: Override bind host.
            port: Override bind port.
            app_path: ``"module:attribute"`` naming this app.  Reload can
                only pick up added or removed route files when it is
                given; without it the server restarts with this
                instance and its already-built route table.
        """
        self._ensure_frozen()

        from burrow.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug and self.config.reload,
            reload_dirs=(*self.config.reload_dirs, *(str(m.directory) for m in self._mounts)),
            app_path=app_path,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        assert self._table is not None

        await handle_request(
            scope,
            receive,
            send,
            table=self._table,
            assets=self._assets,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Builds the route table at startup, before the first HTTP
        request, so a broken route tree fails the server start.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    await self._run_hooks(self._startup_hooks)
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return

            elif msg_type == "lifespan.shutdown":
                await self._run_hooks(self._shutdown_hooks)
                await send({"type": "lifespan.shutdown.complete"})
                return

    @staticmethod
    async def _run_hooks(hooks: list[Callable[..., Any]]) -> None:
        for hook in hooks:
            await invoke(hook)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Default mount: config.routes_dir, when it exists
        if not self._mounts:
            default_dir = Path(self.config.routes_dir)
            if default_dir.is_dir():
                self._mounts.append(_Mount(default_dir, self.config.routes_prefix))
            else:
                logger.info("No routes directory at %s; serving assets only", default_dir)

        # 2. Build the route table
        self._table = self._build_table()

        # 3. Static assets + shell fallback
        if self.config.assets_dir is not None:
            assets_dir = Path(self.config.assets_dir)
            if not assets_dir.is_dir():
                logger.warning("Assets directory %s does not exist", assets_dir)
            self._assets = StaticAssets(
                assets_dir,
                shell=self.config.shell_document,
                cache_control=self.config.asset_cache_control,
                shell_cache_control=self.config.shell_cache_control,
            )

        self._frozen = True

    def _build_table(self) -> RouteTable:
        entries: list[RouteEntry] = []
        for mount in self._mounts:
            entries.extend(discover_routes(mount.directory, prefix=mount.prefix, loader=self._loader))
        table = RouteTable(entries)
        logger.info("Loaded %d routes", len(table))
        for entry in table:
            logger.debug("  %-6s %s  (%s)", entry.method, entry.path, entry.source)
        return table

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Mount routes and register hooks before calling app.run()."
            )
            raise RuntimeError(msg)
