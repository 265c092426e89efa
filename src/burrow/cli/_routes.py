"""``burrow routes`` — list discovered routes.

Resolves an import string to a burrow App and prints every route with
its method, pattern, and source file.
"""

import argparse
import sys

from burrow.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / SOURCE table for ``args.app``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    entries = app.table.entries()
    if not entries:
        print("No routes registered.")
        return

    rows = [(entry.method, entry.path, entry.source or "") for entry in entries]

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "SOURCE"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, source in rows:
        print(fmt.format(method, path, source))
