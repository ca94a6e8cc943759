"""
Logging setup for the shop console.

The operator's prompts go to stdout and log records to stderr, so both
share the terminal.  ``setup_logging`` therefore defaults to WARNING:
store failures and abandoned operations are shown, while per-record
INFO lines ("Added customer ...") only appear with ``--log-level INFO``
or in the file given by ``--log-file``/``SHOP_LOG_FILE``.  Calling it
again is a no-op once the root logger has handlers.
"""

import logging
from pathlib import Path
from typing import Optional


def setup_logging(level: str = "WARNING", logfile: Optional[str] = None) -> None:
    """Attach a stderr handler and an optional file handler to the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, no file
        handler is added.  Paths are resolved relative to the
        current working directory.
    """
    logger = logging.getLogger()
    if logger.handlers:
        # Already configured by a test harness or an earlier main().
        return

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
