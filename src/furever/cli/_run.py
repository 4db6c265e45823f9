"""``furever run``: build the app from CLI flags and serve it."""

import argparse
import sys
from dataclasses import replace

from furever.config import AppConfig
from furever.errors import ConfigurationError
from furever.logs import configure_logging


def build_config(args: argparse.Namespace, base: AppConfig | None = None) -> AppConfig:
    """Apply CLI flags on top of *base* (defaults when omitted).

    Raises ``ConfigurationError`` for out-of-range values.
    """
    config = base or AppConfig()
    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.db is not None:
        overrides["database_url"] = args.db
    if args.client_dir is not None:
        overrides["client_dir"] = args.client_dir
    if args.debug:
        overrides["debug"] = True
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.sign_out_failure_rate is not None:
        overrides["sign_out_failure_rate"] = args.sign_out_failure_rate
    return replace(config, **overrides)


def run_server(args: argparse.Namespace) -> None:
    """Start uvicorn with a freshly built App."""
    try:
        config = build_config(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    logger = configure_logging(config)

    import uvicorn

    from furever.app import App

    app = App(config)
    logger.info(
        "Furever Home\nThe backend service is listening at: http://%s:%d/",
        config.host,
        config.port,
    )
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        lifespan="on",
        log_level="debug" if config.debug else config.log_level.lower(),
    )
