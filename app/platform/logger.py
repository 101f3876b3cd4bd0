import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FILE_NAME = "waitlist.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_formatter = logging.Formatter(LOG_FORMAT)
_console_handler = logging.StreamHandler()
_console_handler.setFormatter(_formatter)

# Loggers handed out by get_logger; they all write through one shared file handler
_loggers: dict[str, logging.Logger] = {}
_log_dir: Optional[Path] = None
_file_handler: Optional[RotatingFileHandler] = None


def _open_file_handler(log_dir: Path) -> RotatingFileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_dir / LOG_FILE_NAME, maxBytes=10_000_000, backupCount=5)
    handler.setFormatter(_formatter)
    return handler


def get_log_dir() -> Path:
    if _log_dir is None:
        configure_logging(os.getenv("LOG_DIR") or "logs")
    return _log_dir


def configure_logging(log_dir: Union[str, Path]) -> None:
    """
    Point the waitlist log file at ``log_dir``.

    Called by ``create_app`` with ``Settings.LOG_DIR``; loggers created earlier
    (module-level ones, mostly) are moved over to the new file.
    """
    global _log_dir, _file_handler

    log_dir = Path(log_dir).resolve()
    if log_dir == _log_dir:
        return

    previous = _file_handler
    _file_handler = _open_file_handler(log_dir)
    _log_dir = log_dir

    for logger in _loggers.values():
        if previous is not None:
            logger.removeHandler(previous)
        logger.addHandler(_file_handler)

    if previous is not None:
        previous.close()


def get_logger(name: str) -> logging.Logger:
    """Console + rotating file logger, INFO and up."""
    if name in _loggers:
        return _loggers[name]

    get_log_dir()

    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.addHandler(_console_handler)
    logger.addHandler(_file_handler)

    _loggers[name] = logger
    return logger
