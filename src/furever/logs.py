"""Logging setup: console output mirrored to plain-text log files.

Records below WARNING are mirrored to ``out.log``; WARNING and above go
to ``err.log``. Every mirrored line is prefixed with the level and a
local timestamp, and ANSI color codes are stripped.
"""

import logging
import re
import sys
from datetime import datetime
from pathlib import Path

from furever.config import AppConfig

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")

_HANDLER_MARK = "_furever_handler"

_LEVEL_PREFIX = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "err",
    logging.CRITICAL: "err",
}


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


class MirrorFormatter(logging.Formatter):
    """``[<level>] [<local time>] <line>`` for each line of the message."""

    def format(self, record: logging.LogRecord) -> str:
        content = strip_ansi(super().format(record))
        prefix = _LEVEL_PREFIX.get(record.levelno, record.levelname.lower())
        stamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        return "\n".join(f"[{prefix}] [{stamp}] {line}" for line in content.split("\n"))


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARK, True)
    return handler


def configure_logging(config: AppConfig) -> logging.Logger:
    """Install console and file-mirror handlers on the ``furever`` logger.

    Safe to call more than once: handlers installed by a previous call
    are closed and replaced.
    """
    root = logging.getLogger("furever")
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root.removeHandler(handler)
            handler.close()

    if config.debug:
        level = logging.DEBUG
    else:
        # "trace" is uvicorn-only; stdlib logging tops out at DEBUG
        name = config.log_level.upper()
        level = logging.DEBUG if name == "TRACE" else logging.getLevelNamesMapping()[name]
    root.setLevel(level)
    root.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(_mark(console))

    if config.out_log is not None:
        out = logging.FileHandler(Path(config.out_log), encoding="utf-8")
        out.addFilter(_BelowWarning())
        out.setFormatter(MirrorFormatter())
        root.addHandler(_mark(out))

    if config.err_log is not None:
        err = logging.FileHandler(Path(config.err_log), encoding="utf-8")
        err.setLevel(logging.WARNING)
        err.setFormatter(MirrorFormatter())
        root.addHandler(_mark(err))

    return root
