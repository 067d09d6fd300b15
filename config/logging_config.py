"""Logging setup for the CLI: quiet console, rotating app and LLM-call logs.

``versecraft.log`` receives every record at the configured level.
``llm_calls.log`` additionally captures the upstream client and its retry
loop at DEBUG, so overload backoffs can be inspected after a run even when
the console is silent.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_LOG_FILE = "versecraft.log"
LLM_LOG_FILE = "llm_calls.log"

# Loggers whose records are mirrored into LLM_LOG_FILE
LLM_LOGGERS = ("tools.agent_sdk_client", "tools.retry")

# Chatty dependencies held at WARNING unless running with DEBUG
_QUIET_LOGGERS = ("claude_agent_sdk", "asyncio")

_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        str(path), maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _reset_handlers(logger: logging.Logger) -> None:
    """Detach every handler; file handlers are closed so log files are released."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[str | Path] = None,
    console_enabled: bool = True,
) -> None:
    """Install the root and LLM-call handlers. Safe to call more than once.

    Args:
        level: Level for the console and the application log.
        log_dir: Where log files go. Defaults to ./data/logs.
        console_enabled: Echo records to stderr (the CLI enables it with -v).
    """
    log_dir = Path(log_dir or "./data/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root = logging.getLogger()
    _reset_handlers(root)
    root.setLevel(level)
    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
    root.addHandler(_rotating_handler(log_dir / APP_LOG_FILE, level, formatter))

    llm_handler = _rotating_handler(log_dir / LLM_LOG_FILE, logging.DEBUG, formatter)
    for name in LLM_LOGGERS:
        llm_logger = logging.getLogger(name)
        _reset_handlers(llm_logger)
        llm_logger.setLevel(logging.DEBUG)
        llm_logger.addHandler(llm_handler)

    quiet_level = logging.NOTSET if level <= logging.DEBUG else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    logging.getLogger(__name__).debug("Logging initialized: level=%s, dir=%s", level, log_dir)
