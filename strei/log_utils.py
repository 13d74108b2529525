"""Logging-related utilities.

The tray app usually runs without a visible console, so everything worth
knowing goes to a log file in the application home as well as stdout.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import Optional

from . import __version__

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(log_path: Path, *, debug: bool = False) -> Optional[str]:
    """Configure logging to a persistent file.

    Returns the log file path, or ``None`` when an existing logging
    configuration was left alone (e.g. when embedded or under pytest).
    """
    root = logging.getLogger()
    # Don't clobber an existing logging configuration.
    if root.handlers:
        return None

    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(str(log_path), mode="a", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )

    # Hook unhandled exceptions so we get a traceback in the log file.
    def _excepthook(exc_type, exc, tb):
        logging.error("Unhandled exception", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _excepthook

    def _thread_excepthook(args):
        logging.error("Unhandled thread exception", exc_info=(args.exc_type, args.exc_value, args.exc_traceback))

    threading.excepthook = _thread_excepthook

    logging.info("strei started (v%s)", __version__)
    return str(log_path)
