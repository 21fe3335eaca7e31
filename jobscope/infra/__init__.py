"""
Infrastructure module - logging and common utilities.
"""

from .logging_config import DailyRotatingFileHandler, build_handlers, setup_logging

__all__ = [
    "DailyRotatingFileHandler",
    "build_handlers",
    "setup_logging",
]
