"""Application configuration.

AppConfig is a frozen dataclass, immutable after creation.  Values come
from keyword arguments or from ``BURROW_*`` environment variables.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from burrow.errors import ConfigurationError

# Environment variable prefix read by AppConfig.from_env()
ENV_PREFIX = "BURROW_"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, routes_dir="server/routes", assets_dir="dist")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False

    # Reload (development mode, requires debug=True)
    reload: bool = True
    reload_dirs: tuple[str, ...] = ()

    # Route discovery
    routes_dir: str | Path = "routes"
    routes_prefix: str = "/api"

    # Built assets + SPA shell
    assets_dir: str | Path | None = "dist"
    shell_document: str = "index.html"
    asset_cache_control: str = "public, max-age=3600"
    shell_cache_control: str = "no-cache"

    # Logging
    log_level: str = "info"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> "AppConfig":
        """Build a config from ``BURROW_*`` environment variables.

        Recognised variables: ``BURROW_HOST``, ``BURROW_PORT`` (falls back
        to ``PORT``), ``BURROW_DEBUG``, ``BURROW_ROUTES_DIR``,
        ``BURROW_ROUTES_PREFIX``, ``BURROW_ASSETS_DIR``,
        ``BURROW_SHELL_DOCUMENT`` and ``BURROW_LOG_LEVEL``.  Keyword
        *overrides* win over the environment.

        Raises:
            ConfigurationError: If a numeric variable is not a number.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        host = env.get(f"{ENV_PREFIX}HOST")
        if host:
            values["host"] = host

        port = env.get(f"{ENV_PREFIX}PORT") or env.get("PORT")
        if port:
            try:
                values["port"] = int(port)
            except ValueError:
                msg = f"Port must be an integer, got {port!r}"
                raise ConfigurationError(msg) from None

        debug = env.get(f"{ENV_PREFIX}DEBUG")
        if debug is not None:
            values["debug"] = debug.strip().lower() in _TRUTHY

        for field_name in ("routes_dir", "routes_prefix", "assets_dir", "shell_document", "log_level"):
            value = env.get(f"{ENV_PREFIX}{field_name.upper()}")
            if value is not None:
                values[field_name] = value

        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
