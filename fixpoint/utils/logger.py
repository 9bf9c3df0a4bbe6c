"""
Logging infrastructure for fixpoint.

Provides structured logging with configurable levels, formatting, colored
console output (colorlog) and optional file output.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import colorlog

_FORMAT = "%(asctime)s - %(name)-24s - %(levelname)-8s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class FixpointFormatter(logging.Formatter):
    """Formatter for fixpoint log records with optional colors and source location."""

    def __init__(self, use_colors: bool = False, include_location: bool = False):
        self.use_colors = use_colors
        self.include_location = include_location

        format_str = _FORMAT
        if self.include_location:
            format_str += " [%(filename)s:%(lineno)d]"

        if self.use_colors:
            self.colored_formatter = colorlog.ColoredFormatter(
                "%(log_color)s" + format_str,
                datefmt=_DATEFMT,
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            )

        super().__init__(format_str, datefmt=_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        if self.use_colors:
            return self.colored_formatter.format(record)
        return super().format(record)


class FixpointLogger:
    """Central logging manager for fixpoint."""

    _instance = None
    _loggers: dict[str, logging.Logger] = {}
    _log_level = logging.WARNING
    _log_to_file = False
    _log_file_path: Path | None = None
    _use_colors = True
    _include_location = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def configure(
        cls,
        level: str | int = "WARNING",
        log_to_file: bool = False,
        log_file_path: str | Path | None = None,
        use_colors: bool = True,
        include_location: bool = False,
    ) -> None:
        """
        Configure global logging settings for fixpoint.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_to_file: Whether to log to file
            log_file_path: Path to log file (defaults to ./logs/fixpoint_<timestamp>.log)
            use_colors: Use colored terminal output
            include_location: Include file location in log messages
        """
        if isinstance(level, str):
            cls._log_level = getattr(logging, level.upper())
        else:
            cls._log_level = level

        cls._log_to_file = log_to_file
        cls._use_colors = use_colors
        cls._include_location = include_location

        if log_to_file:
            if log_file_path is None:
                log_dir = Path.cwd() / "logs"
                log_dir.mkdir(exist_ok=True)
                timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                cls._log_file_path = log_dir / f"fixpoint_{timestamp}.log"
            else:
                cls._log_file_path = Path(log_file_path)
                cls._log_file_path.parent.mkdir(parents=True, exist_ok=True)

        for logger in cls._loggers.values():
            cls._setup_logger(logger)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get or create a logger for the specified module.

        Args:
            name: Logger name (typically __name__ from calling module)

        Returns:
            Configured logger instance
        """
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            cls._loggers[name] = logger
            cls._setup_logger(logger)

        return cls._loggers[name]

    @classmethod
    def _setup_logger(cls, logger: logging.Logger) -> None:
        """Configure an individual logger with the current settings."""
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(cls._log_level)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            FixpointFormatter(use_colors=cls._use_colors, include_location=cls._include_location)
        )
        console_handler.setLevel(cls._log_level)
        logger.addHandler(console_handler)

        if cls._log_to_file and cls._log_file_path:
            file_handler = logging.FileHandler(cls._log_file_path)
            # File logs never use colors
            file_handler.setFormatter(FixpointFormatter(use_colors=False, include_location=cls._include_location))
            file_handler.setLevel(cls._log_level)
            logger.addHandler(file_handler)

        logger.propagate = False


def get_logger(name: str = "fixpoint") -> logging.Logger:
    """Get a configured logger, usually ``get_logger(__name__)``."""
    return FixpointLogger.get_logger(name)


def configure_logging(**kwargs: Any) -> None:
    """
    Configure global logging settings.

    Keyword Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to file
        log_file_path: Path to log file
        use_colors: Use colored terminal output
        include_location: Include file location in messages
    """
    FixpointLogger.configure(**kwargs)


def log_run_start(logger: logging.Logger, method_name: str, x0: float, config: dict[str, Any]) -> None:
    """Log the start of an iteration run with its configuration."""
    logger.debug(f"Starting {method_name} iteration from x0={x0!r}")
    logger.debug(f"Run configuration: {config}")


def log_step(logger: logging.Logger, step: int, value: float, max_steps: int) -> None:
    """Log one iteration step."""
    logger.debug(f"Step {step}/{max_steps}: x = {value!r}")


def log_run_completion(
    logger: logging.Logger,
    method_name: str,
    status: str,
    num_steps: int,
    value: float | None,
    execution_time: float,
) -> None:
    """Log run completion with a summary."""
    logger.info(f"{method_name} completed - Status: {status.upper()}")
    logger.debug(f"Final results: {num_steps} steps, xn: {value!r}, time: {execution_time:.6f}s")


def log_validation_error(logger: logging.Logger, component: str, error_msg: str, argument: str) -> None:
    """Log a rejected argument."""
    logger.warning(f"Validation error in {component}: {error_msg} (argument: {argument})")


__all__ = [
    "FixpointFormatter",
    "FixpointLogger",
    "configure_logging",
    "get_logger",
    "log_run_completion",
    "log_run_start",
    "log_step",
    "log_validation_error",
]
