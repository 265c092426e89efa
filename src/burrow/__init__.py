"""Burrow — file-based routing for ASGI services and single-page clients.

The server half walks a routes directory and serves one handler per
``<method>.py`` file.  The client half turns an enumerated pages tree
into a lazily loaded page table.  Both share one pattern compiler.

Basic usage::

    from burrow import App, AppConfig

    app = App(AppConfig(routes_dir="routes", assets_dir="dist"))
    app.run()

A route file::

    # routes/users/[id]/get.py  ->  GET /api/users/:id
    from burrow import Request, Response

    async def handler(request: Request) -> Response:
        return Response.json({"id": request.path_params["id"]})
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BurrowError",
    "ConfigurationError",
    "ContractViolation",
    "HTTPError",
    "InvalidPatternSyntax",
    "ModuleLoadFailure",
    "NavigationState",
    "NavigationStatus",
    "Navigator",
    "NotFound",
    "PageTable",
    "Request",
    "Response",
    "RouteTable",
    "StaticAssets",
    "build_page_table",
    "compile_path",
    "with_middleware",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import burrow`` fast while providing a clean top-level API.
    """
    if name == "App":
        from burrow.app import App

        return App

    if name == "AppConfig":
        from burrow.config import AppConfig

        return AppConfig

    if name == "Request":
        from burrow.http.request import Request

        return Request

    if name == "Response":
        from burrow.http.response import Response

        return Response

    if name in ("RouteTable", "compile_path"):
        from burrow import routing as _routing

        return getattr(_routing, name)

    if name in ("with_middleware", "StaticAssets"):
        from burrow import middleware as _mw

        return getattr(_mw, name)

    if name in ("NavigationState", "NavigationStatus", "Navigator", "PageTable", "build_page_table"):
        from burrow import pages as _pages

        return getattr(_pages, name)

    if name in (
        "BurrowError",
        "ConfigurationError",
        "ContractViolation",
        "HTTPError",
        "InvalidPatternSyntax",
        "ModuleLoadFailure",
        "NotFound",
    ):
        from burrow import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
