"""
Centralized logging configuration for WinNet.

This module provides a single point of configuration for all logging in
WinNet, ensuring consistent formatting, handlers, and levels across all
modules.
"""

import logging
import sys
from typing import Optional

from . import config


class WinNetLogger:
    """Centralized logger configuration for WinNet."""

    _initialized = False
    _debug_enabled = False

    @classmethod
    def setup(cls, debug: bool = False, force_reinit: bool = False) -> None:
        """
        Set up centralized logging for the entire application.

        Args:
            debug: If True, enable DEBUG level logging
            force_reinit: If True, reinitialize even if already set up
        """
        if cls._initialized and not force_reinit:
            return

        # Clear any existing handlers to avoid duplication
        root_logger = logging.getLogger()
        if root_logger.hasHandlers():
            root_logger.handlers.clear()

        cls._debug_enabled = debug
        log_level = logging.DEBUG if debug else logging.INFO
        root_logger.setLevel(log_level)

        formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

        cls._add_file_handler(root_logger, formatter)
        cls._add_console_handler(root_logger, formatter)

        cls._initialized = True

        logger = logging.getLogger(__name__)
        logger.debug(f"WinNet logging initialized (debug={'on' if debug else 'off'})")

    @classmethod
    def _add_file_handler(cls, logger: logging.Logger, formatter: logging.Formatter) -> None:
        """Add file handler for persistent logging."""
        try:
            config.LOG_DIR.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(config.LOG_FILE, encoding="utf-8")
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)  # File always gets debug
            logger.addHandler(file_handler)
        except OSError as e:
            # If file logging fails, at least log to console
            print(f"Warning: Could not set up file logging: {e}", file=sys.stderr)

    @classmethod
    def _add_console_handler(cls, logger: logging.Logger, formatter: logging.Formatter) -> None:
        """Add console handler for interactive feedback."""
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.DEBUG if cls._debug_enabled else logging.WARNING)
        logger.addHandler(console_handler)

    @classmethod
    def get_logger(cls, name: Optional[str] = None) -> logging.Logger:
        """
        Get a logger instance.

        Library modules call this at import time, so it does not install
        handlers; the command line tool calls setup() explicitly.

        Args:
            name: Logger name (typically __name__)

        Returns:
            Logger instance
        """
        return logging.getLogger(name)


# Convenience functions for easy import
def setup_logging(debug: bool = False, force_reinit: bool = False) -> None:
    """Set up centralized logging. Wrapper for WinNetLogger.setup()."""
    WinNetLogger.setup(debug=debug, force_reinit=force_reinit)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance. Wrapper for WinNetLogger.get_logger()."""
    return WinNetLogger.get_logger(name)
