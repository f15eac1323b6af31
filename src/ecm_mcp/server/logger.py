"""
File-only logging — stdout belongs to the JSON-RPC stream in stdio mode

All module loggers are children of the ``ecm_mcp`` package logger, which owns
the two file handlers (full log and errors-only) and never propagates to root.
"""

import logging
from pathlib import Path

from ecm_mcp.config import Config

PACKAGE_LOGGER = "ecm_mcp"

_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _file_handler(path: Path, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    return handler


def _configure_package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if root.handlers:
        return root

    Config.ensure_dirs()
    level = logging.getLevelName(Config.LOG_LEVEL)
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    root.addHandler(_file_handler(Config.LOG_FILE, logging.DEBUG))
    root.addHandler(_file_handler(Config.ERROR_LOG, logging.ERROR))
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger ``ecm_mcp.<name>``; writes to the log files only."""
    _configure_package_logger()
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
