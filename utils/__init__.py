# utils/__init__.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Utility module exports

from .logger import LogLevel, configure_logging, get_logger, set_log_level

__all__ = [
    "LogLevel",
    "configure_logging",
    "get_logger",
    "set_log_level",
]
