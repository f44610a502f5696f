"""Logging configuration for github-release.

Provides centralized logging with credential redaction to ensure API
tokens are never written to the console or log files, even when the
HTTP dumps of diagnostic mode are enabled.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Optional


# Credential patterns to redact from logs
TOKEN_PATTERNS = [
    # Authorization header values
    (re.compile(r'(Bearer\s+)[^\s,"\']+', re.IGNORECASE), r'\1[REDACTED]'),
    (re.compile(r'(Authorization["\s:=]+token\s+)[^\s,"\']+', re.IGNORECASE), r'\1[REDACTED]'),
    # GitHub token literals
    (re.compile(r'\bgh[pousr]_[A-Za-z0-9]{20,}'), '[REDACTED]'),
    (re.compile(r'\bgithub_pat_[A-Za-z0-9_]{20,}'), '[REDACTED]'),
    # Credentials embedded in URLs
    (re.compile(r'(https?://)[^/\s:@]+:[^/\s@]+@'), r'\1[REDACTED]@'),
]

LOGGER_NAME = "github_release"


class TokenRedactingFormatter(logging.Formatter):
    """Custom formatter that redacts credentials from log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record, redacting any credential."""
        message = super().format(record)
        for pattern, replacement in TOKEN_PATTERNS:
            message = pattern.sub(replacement, message)
        return message


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True
) -> logging.Logger:
    """
    Configure application logging with credential redaction.

    Args:
        level: Logging level (default INFO)
        log_file: Optional file path for log output
        console: Whether to output to stderr (default True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    # Console output stays terse; the file gets timestamps
    console_formatter = TokenRedactingFormatter(fmt="%(message)s")
    file_formatter = TokenRedactingFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (default is app logger)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
