"""Logging setup shared by the app and the core (stdlib logging).

LOG_LEVEL picks the console level.  A daily file under logs/ (or
JOBBOARD_LOG_DIR) always records DEBUG, unless JOBBOARD_NO_FILE_LOG is set.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

_DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
# Streamlit's file watcher is chatty at DEBUG
_NOISY = ("watchdog", "urllib3", "PIL")
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _log_dir() -> Path:
    override = os.environ.get("JOBBOARD_LOG_DIR", "").strip()
    return Path(override).expanduser() if override else _DEFAULT_LOG_DIR


def _file_handler() -> logging.Handler | None:
    if os.environ.get("JOBBOARD_NO_FILE_LOG", "").strip():
        return None
    try:
        log_dir = _log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        path = log_dir / f"jobboard_{datetime.now().strftime('%Y-%m-%d')}.log"
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(logging.DEBUG)
    return handler


def _configure() -> None:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    for name in _NOISY:
        logging.getLogger(name).setLevel(logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    fh = _file_handler()
    root.setLevel(logging.DEBUG if fh is not None else level)

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if fh is not None:
        fh.setFormatter(formatter)
        root.addHandler(fh)
