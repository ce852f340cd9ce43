# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The `argresolve` logger and an opt-in helper to route its records.

Library modules only emit records on `logger`. By default they propagate to
whatever the host application configured. `setup_logging` is for programs that
want argresolve's own output without touching their root logger: it replaces
the handlers of the `argresolve` logger only and stops propagation.

Modes:
- "cli": human-readable records through Rich on stderr.
- "json": one JSON object per line through python-json-logger.

The mode comes from the `mode` argument, then the `ARGRESOLVE_LOG_MODE`
environment variable, then falls back to "cli".
"""
from __future__ import annotations

import logging
import os

from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from argresolve.console import error_console

LOG_MODE_ENV = "ARGRESOLVE_LOG_MODE"
LOG_MODES = ("cli", "json")
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"

logger = logging.getLogger("argresolve")


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            console=error_console,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(JSON_LOG_FORMAT))
    return handler


def _file_handler(log_filename: str, as_json: bool) -> logging.Handler:
    handler = logging.FileHandler(log_filename, "a", "UTF-8")
    if as_json:
        handler.setFormatter(JsonFormatter(JSON_LOG_FORMAT))
    else:
        handler.setFormatter(
            logging.Formatter(TEXT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
    return handler


def setup_logging(
    mode: str | None = None,
    console_log_level: int = logging.WARNING,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
) -> logging.Logger:
    """
    Route the `argresolve` logger to the console and, optionally, a file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        mode (str | None): "cli" or "json". Defaults to `ARGRESOLVE_LOG_MODE`,
            then "cli".
        console_log_level (int): Level of the console handler.
        log_filename (str | None): Also append records to this file.
        json_log_to_file (bool): Write the file as JSON lines instead of text.
        file_log_level (int): Level of the file handler.

    Returns:
        logging.Logger: The configured `argresolve` logger.

    Raises:
        ValueError: If the mode is not one of `LOG_MODES`.
    """
    mode = (mode or os.getenv(LOG_MODE_ENV) or "cli").strip().lower()
    if mode not in LOG_MODES:
        raise ValueError(
            f"Invalid log mode: {mode!r}. Must be one of: {', '.join(LOG_MODES)}"
        )

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)
    logger.addHandler(console_handler)
    levels = [console_log_level]

    if log_filename:
        file_handler = _file_handler(log_filename, json_log_to_file)
        file_handler.setLevel(file_log_level)
        logger.addHandler(file_handler)
        levels.append(file_log_level)

    logger.setLevel(min(levels))
    logger.propagate = False
    logger.debug("Logging initialized in '%s' mode", mode)
    return logger
