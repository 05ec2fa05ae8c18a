"""Command line helpers for the redirect service.

Example:
-------
    $ pxy-redirect resolve /6/wc++98-c++11-compat-binary-literal
    $ pxy-redirect rules
    $ pxy-redirect serve --port 8080

"""

from __future__ import annotations

# ==============================================================================
# IMPORTS
# ==============================================================================

import argparse
import json
import sys
from collections.abc import Sequence
from typing import TextIO

from .config.settings import get_settings
from .gateway.services import build_service
from .resolver import Home, Redirect, ResolveOutcome, ValidationError
from .utils.logging import configure_logging

# ==============================================================================
# COMMANDS
# ==============================================================================


def describe(outcome: ResolveOutcome) -> dict[str, object]:
    """Return a JSON-serialisable summary of an outcome."""
    if isinstance(outcome, Redirect):
        return {
            "outcome": "redirect",
            "location": outcome.target,
            "version": str(outcome.version),
            "fragment": outcome.fragment,
        }
    if isinstance(outcome, Home):
        return {"outcome": "home", "path": outcome.path}
    if isinstance(outcome, ValidationError):
        return {
            "outcome": "error",
            "kind": outcome.kind.value,
            "status": outcome.status,
            "message": outcome.message,
        }
    raise TypeError(f"Unsupported outcome: {outcome!r}")


def command_resolve(args: argparse.Namespace, out: TextIO) -> int:
    service = build_service(get_settings())
    outcome = service.resolver.resolve(args.path)
    summary = describe(outcome)
    if args.json:
        out.write(json.dumps(summary, sort_keys=True) + "\n")
    elif isinstance(outcome, Redirect):
        out.write(f"{service.redirect_status} {outcome.target}\n")
    elif isinstance(outcome, Home):
        out.write("200 home\n")
    else:
        out.write(f"{summary['status']} {summary['kind']}\n")
    return 1 if isinstance(outcome, ValidationError) else 0


def command_rules(args: argparse.Namespace, out: TextIO) -> int:
    service = build_service(get_settings())
    for index, rule in enumerate(service.resolver.rules, start=1):
        out.write(f"{index}. major {rule.description}: x.{rule.minor}.{rule.patch}\n")
    out.write("default: x.0.0\n")
    return 0


def command_serve(args: argparse.Namespace, out: TextIO) -> int:  # pragma: no cover
    import uvicorn

    uvicorn.run(
        "pxy_redirect.gateway.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_config=None,
    )
    return 0


# ==============================================================================
# CLI INTERFACE
# ==============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pxy-redirect", description="Clang diagnostics redirect utilities"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    resolve = commands.add_parser("resolve", help="Resolve a request path")
    resolve.add_argument("path", help="Request path, e.g. /13/wall")
    resolve.add_argument("--json", action="store_true", help="Print a JSON summary")
    resolve.set_defaults(handler=command_resolve)

    rules = commands.add_parser("rules", help="Print the active version rule table")
    rules.set_defaults(handler=command_rules)

    serve = commands.add_parser("serve", help="Run the HTTP gateway with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(handler=command_serve)
    return parser


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(level="WARNING")
    return args.handler(args, out or sys.stdout)


__all__ = ["build_parser", "describe", "main"]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
