"""
Logging configuration for snip.

Quiet by default: only warnings reach stderr. Debug mode and the
persistent operations log are opt-in from the CLI.
"""

import logging
import sys
import warnings
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

OPS_LOG_FILENAME = "snip-ops.log"


def configure_quiet_mode(quiet: bool = True):
    """
    Configure logging to suppress verbose output.

    Args:
        quiet: If True, silence warnings and keep snip at WARNING.
            If False, leave levels untouched.
    """
    if quiet:
        warnings.filterwarnings("ignore")
        logging.getLogger("snip").setLevel(logging.WARNING)


def enable_debug_mode():
    """Enable debug-level logging to stderr."""
    warnings.filterwarnings("default")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Add stderr handler if not already present
    if not any(isinstance(h, logging.StreamHandler) and h.stream == sys.stderr
               for h in root_logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S"
        ))
        root_logger.addHandler(handler)

    logging.getLogger("snip").setLevel(logging.DEBUG)


def configure_ops_log(db_path: Union[Path, str]) -> Optional[RotatingFileHandler]:
    """Configure a persistent operations log beside the database.

    Writes to {db dir}/snip-ops.log using a rotating file handler
    (1MB max, 3 backups). Returns None for in-memory databases, otherwise
    the handler so the caller can remove and close it.
    """
    if str(db_path) == ":memory:":
        return None

    log_path = Path(db_path).expanduser().parent / OPS_LOG_FILENAME
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        str(log_path),
        maxBytes=1_000_000,
        backupCount=3,
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    snip_logger = logging.getLogger("snip")
    snip_logger.addHandler(handler)
    # Let INFO through to the file even in quiet mode
    if snip_logger.level == logging.NOTSET or snip_logger.level > logging.INFO:
        snip_logger.setLevel(logging.INFO)

    return handler


def remove_ops_log(handler: Optional[logging.Handler]) -> None:
    """Detach and close a handler returned by configure_ops_log."""
    if handler is None:
        return
    logging.getLogger("snip").removeHandler(handler)
    handler.close()
