"""
Utility Functions Module

Provides:
- Logging configuration
- Per-worker random sources for reproducible runs
"""

import sys
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union
import numpy as np
from logging.handlers import RotatingFileHandler

from .exceptions import ConfigurationError

ROOT_LOGGER_NAME = "rowgen"

# Loggers of the S3 client stack, routed through the same handlers as rowgen
TRANSPORT_LOGGER_NAMES = ("boto3", "botocore", "s3transfer", "urllib3")


class LoggerConfig:
    """
    Logging configuration manager

    Console logging goes to stderr; stdout is reserved for generated rows.
    The S3 client libraries log through the same handlers, at WARNING unless
    rowgen itself runs at DEBUG (retries and request traces are only shown
    in verbose runs).
    """

    @staticmethod
    def setup_logger(
        name: str = ROOT_LOGGER_NAME,
        level: int = logging.INFO,
        log_file: Optional[Union[str, Path]] = None,
        log_to_console: bool = True,
        log_format: Optional[str] = None,
        transport_loggers: Tuple[str, ...] = TRANSPORT_LOGGER_NAMES
    ) -> logging.Logger:
        """
        Setup and configure logger

        Args:
            name: Logger name
            level: Logging level
            log_file: Optional file path for file logging
            log_to_console: Whether to log to the console (stderr)
            log_format: Custom log format
            transport_loggers: Third-party loggers that share the handlers

        Returns:
            Configured logger
        """
        if log_format is None:
            log_format = (
                '%(asctime)s - %(name)s - %(levelname)s - '
                '%(threadName)s - %(message)s'
            )

        formatter = logging.Formatter(log_format)
        handlers: List[logging.Handler] = []

        if log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            handlers.append(console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5
            )
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        logger = logging.getLogger(name)
        LoggerConfig._attach(logger, level, handlers)

        transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
        for transport_name in transport_loggers:
            transport_logger = logging.getLogger(transport_name)
            LoggerConfig._attach(transport_logger, transport_level, handlers)
            transport_logger.propagate = False

        return logger

    @staticmethod
    def _attach(logger: logging.Logger, level: int, handlers: List[logging.Handler]):
        """Replace a logger's handlers; handler levels stay open so the logger level decides"""
        logger.setLevel(level)

        # Remove existing handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            if handler not in handlers:
                handler.close()

        for handler in handlers:
            logger.addHandler(handler)


class SeedManager:
    """
    Hands out independent random sources, one per worker

    With a seed, the same worker index always gets the same stream; without
    one, every run draws fresh OS entropy.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._sequence = np.random.SeedSequence(seed)

    def spawn(self, count: int) -> List[np.random.Generator]:
        """
        Create `count` independent generators

        Args:
            count: Number of generators

        Returns:
            List of numpy Generators
        """
        return [np.random.default_rng(child) for child in self._sequence.spawn(count)]


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True
) -> logging.Logger:
    """
    Quick logging setup

    Args:
        level: Logging level (number or name)
        log_file: Optional log file path
        log_to_console: Whether to log to stderr as well
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ConfigurationError(f"Unknown logging level: '{level}'")
        level = resolved
    return LoggerConfig.setup_logger(level=level, log_file=log_file, log_to_console=log_to_console)
