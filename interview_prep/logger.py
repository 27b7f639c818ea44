"""
Logging setup.

console (default) -> RichHandler
json              -> python-json-logger, one object per line
"""

import logging
import sys

from pythonjsonlogger import jsonlogger
from rich.console import Console
from rich.logging import RichHandler

from interview_prep.config import LOG_FORMAT, LOG_LEVEL


def _console_handler() -> logging.Handler:
    return RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )


def _json_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
    return handler


def setup_logging(force: bool = False) -> None:
    """Configure the root logger once; pass force=True to rebuild handlers."""
    root = logging.getLogger()
    if root.handlers and not force:
        return

    for h in list(root.handlers):
        root.removeHandler(h)

    level = LOG_LEVEL.upper()
    root.setLevel(level)

    handler = _json_handler() if LOG_FORMAT.lower() == "json" else _console_handler()
    root.addHandler(handler)

    # uvicorn configures its own loggers; route them through ours
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers = [handler]
        uv_logger.propagate = False
        uv_logger.setLevel(level)
