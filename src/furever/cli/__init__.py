"""Furever CLI: serve the backend.

Entry point registered as ``furever`` in ``pyproject.toml``::

    [project.scripts]
    furever = "furever.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``furever`` command."""
    parser = argparse.ArgumentParser(
        prog="furever",
        description="Furever Home: backend service for a pet-adoption site.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- furever run ------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the HTTP server")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--db", default=None, help="Database URL (sqlite:///path)")
    run_parser.add_argument(
        "--client-dir",
        default=None,
        help="Directory holding the built reference client",
    )
    run_parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    run_parser.add_argument("--log-level", default=None, help="Log level (debug, info, ...)")
    run_parser.add_argument(
        "--sign-out-failure-rate",
        type=float,
        default=None,
        help="Probability (0-1) that a valid sign-out answers 402",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from furever.cli._run import run_server

        run_server(args)
