# utils/logger.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Logging utility for model checking runs with configurable levels

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for model checking runs."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class CheckerLogger:
    """Centralized logger for the model checker with structured output."""

    def __init__(self, name: str = "ariadne", level: LogLevel = LogLevel.INFO):
        """Initialize the checker logger.

        Args:
            name: Logger name (typically module name)
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(CheckerFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    def is_debug_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for model checking events
    def exploration_start(self, net_id: str, places: int, transitions: int, marking: str):
        """Log the start of a state-space exploration."""
        self.debug(
            f"Exploring net {net_id} ({places} places, {transitions} transitions) "
            f"from {marking}"
        )

    def step_graph_built(self, net_id: str, steps: int, arcs: int):
        """Log the size of a completed step graph."""
        self.debug(f"Step graph of {net_id}: {steps} steps, {arcs} arcs")

    def paths_enumerated(self, kind: str, count: int):
        """Log the number of enumerated paths."""
        self.debug(f"Enumerated {count} {kind} paths")

    def unfolding_built(self, net_id: str, events: int, conditions: int, cutoffs: int):
        """Log the size of an unfolding prefix."""
        self.debug(
            f"Unfolded {net_id}: {events} events ({cutoffs} cut-off), {conditions} conditions"
        )

    def formula_result(self, formula: str, node: str, result: bool):
        """Log the verdict of a formula at a node."""
        self.debug(f"{formula} @ {node} -> {result}")

    def verdict(self, label: str, result: bool):
        """Log a verdict line for reports."""
        mark = "✅" if result else "❌"
        self.info(f"{mark} {label}: {result}")

    def validation_result(self, success: bool, message: str = ""):
        """Log validation results."""
        if success:
            self.debug(f"✅ {message}" if message else "✅ Validation successful")
        else:
            self.error(f"❌ {message}" if message else "❌ Validation failed")


class CheckerFormatter(logging.Formatter):
    """Custom formatter for checker logging with clean output."""

    def format(self, record):
        # For INFO level and above, show message only (clean output)
        if record.levelno >= logging.INFO:
            return record.getMessage()

        # For DEBUG level, show with level indicator
        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[CheckerLogger] = None


def get_logger(name: str = "ariadne") -> CheckerLogger:
    """Get or create the global checker logger instance.

    Args:
        name: Logger name (default: "ariadne")

    Returns:
        CheckerLogger instance
    """
    global _global_logger
    if _global_logger is None:
        # one logger for the whole process; `name` only matters on first use
        _global_logger = CheckerLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    get_logger().set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
