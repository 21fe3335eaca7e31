"""
Logging configuration module.

One log file per day under LOG_DIR, shared by the jobscope logger tree and
the libraries it runs on (APScheduler job events, uvicorn access/errors).
The server is started with uvicorn's own log config disabled, so these
handlers are the only place its output goes.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from jobscope.config import LOG_DIR

LOGGER_NAME = "jobscope"

# Library loggers routed to the same handlers as the jobscope tree
LIBRARY_LOGGERS = ("apscheduler", "uvicorn")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HHMMSS of the first handler created in this process; every day's file reuses it
_PROCESS_START_TIME: Optional[str] = None


def _today() -> str:
    return datetime.now().strftime("%Y%m%d")


class DailyRotatingFileHandler(logging.FileHandler):
    """
    File handler that switches files when the calendar day changes.

    File name: <log_dir>/jobscope_<YYYYMMDD>_<START_HHMMSS>.log
    """

    def __init__(self, log_dir: str = LOG_DIR, encoding: str = "utf-8"):
        global _PROCESS_START_TIME
        if _PROCESS_START_TIME is None:
            _PROCESS_START_TIME = datetime.now().strftime("%H%M%S")

        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._start_hhmmss = _PROCESS_START_TIME
        self._current_date = _today()

        super().__init__(self._path_for(self._current_date), mode="a", encoding=encoding)

    def _path_for(self, date_str: str) -> str:
        return str(self.log_dir / f"jobscope_{date_str}_{self._start_hhmmss}.log")

    def _rotate_if_needed(self) -> None:
        today = _today()
        if today == self._current_date:
            return
        self.close()
        self._current_date = today
        self.baseFilename = self._path_for(today)
        self.stream = self._open()

    def emit(self, record: logging.LogRecord) -> None:
        self._rotate_if_needed()
        super().emit(record)


def build_handlers(level: int, log_dir: str = LOG_DIR) -> List[logging.Handler]:
    """Console and daily-file handlers at the given level."""
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: List[logging.Handler] = [
        logging.StreamHandler(),
        DailyRotatingFileHandler(log_dir=log_dir),
    ]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def _attach(logger: logging.Logger, level: int, handlers: List[logging.Handler]) -> None:
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.setLevel(level)
    logger.propagate = False
    for handler in handlers:
        logger.addHandler(handler)


def setup_logging(log_level: str = "INFO", log_dir: str = LOG_DIR) -> logging.Logger:
    """
    Configure the "jobscope" logger and the library loggers, return the former.

    Safe to call again: previous handlers are closed and replaced.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        log_dir: Directory for daily log files

    Returns:
        logging.Logger: The "jobscope" logger
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    handlers = build_handlers(level, log_dir)

    logger = logging.getLogger(LOGGER_NAME)
    _attach(logger, level, handlers)

    for name in LIBRARY_LOGGERS:
        _attach(logging.getLogger(name), level, handlers)

    file_handler = next(h for h in handlers if isinstance(h, DailyRotatingFileHandler))
    logger.info(f"Logging started - level: {logging.getLevelName(level)}, file: {file_handler.baseFilename}")

    return logger
