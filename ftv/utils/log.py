"""
Logging utilities for the ftv toolkit.

Every logger gets pretty console output via Rich. Long-running or batch
commands (`ftv ingest`, `ftv replay`) additionally write JSON lines to
`{command}.log` in the working directory. The level defaults to INFO and can
be overridden with the FTV_LOG_LEVEL environment variable.
"""

import json
import logging
import os
import sys
from pathlib import Path

from rich.logging import RichHandler

JSON_LOG_COMMANDS = ("ingest", "replay")
LEVEL_ENV = "FTV_LOG_LEVEL"

# LogRecord attributes that are not user-supplied `extra=` fields
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """
    Formatter that serializes log records, including `extra=` fields, to JSON.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level":     record.levelname,
            "logger":    record.name,
            "message":   record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                log_record[key] = value
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


def _default_level() -> int | str:
    return os.environ.get(LEVEL_ENV, "").upper() or logging.INFO


def _json_log_command() -> str | None:
    if len(sys.argv) > 1 and sys.argv[1] in JSON_LOG_COMMANDS:
        return sys.argv[1]
    return None


def get_logger(name: str, level: int | str | None = None) -> logging.Logger:
    """
    Return a configured logger for the given name.

    Parameters
    ----------
    name
        Logger name (typically __name__).
    level
        Log level (int or string); defaults to $FTV_LOG_LEVEL, else INFO.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    level = level if level is not None else _default_level()
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = RichHandler(rich_tracebacks=True, show_path=False)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

        command = _json_log_command()
        if command is not None:
            log_path = Path.cwd() / f"{command}.log"
            file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            logger.addHandler(file_handler)

    return logger
