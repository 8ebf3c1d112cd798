"""
Logging for the back office.

Every module logs through logging.getLogger(__name__) under the "academy"
logger; setup_logger() attaches the handlers once. Passwords and GitHub
access tokens are masked before any handler formats a record.
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


MASK = "********"

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def mask_token(token: Optional[str]) -> str:
    """
    Mask an access token for logging, keeping its type prefix.

    Examples:
        >>> mask_token("ghp_1234567890abcdef")
        'ghp_********'
        >>> mask_token("abc")
        '********'
    """
    if not token or len(token) <= 8:
        return MASK
    return token[:4] + MASK


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that masks passwords and access tokens.

    Covers "password=..." style pairs, "Authorization: token ..." headers
    and bare GitHub personal access tokens.
    """

    _PATTERNS = [
        (
            re.compile(r'password["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)', re.IGNORECASE),
            r'password: ' + MASK,
        ),
        (
            re.compile(r'\b(pass|pwd)["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)', re.IGNORECASE),
            r'\1: ' + MASK,
        ),
        (
            re.compile(r'\b(token|bearer)\s+([A-Za-z0-9_\-\.]{8,})', re.IGNORECASE),
            r'\1 ' + MASK,
        ),
        (
            re.compile(r'\b(gh[pousr]_|github_pat_)[A-Za-z0-9_]+'),
            r'\1' + MASK,
        ),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Mask sensitive data in the log record.

        Args are rendered into the message first so values passed with
        %-style formatting are masked too.

        Returns:
            Always True (allows all records through after masking)
        """
        message = record.getMessage()
        for pattern, replacement in self._PATTERNS:
            message = pattern.sub(replacement, message)

        record.msg = message
        record.args = None
        return True


def _handler(handler: logging.Handler, sensitive_filter: logging.Filter) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(sensitive_filter)
    return handler


def setup_logger(
    name: str = "academy",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Attach console (and optionally rotating file) handlers to a logger.

    Calling it again for a logger that already has handlers returns the
    logger unchanged.

    Args:
        name: Logger to configure; "academy" covers the whole package
        level: Threshold for the logger
        log_file: Also write to this file, rotated at 10MB with 5 backups

    Examples:
        >>> logger = setup_logger(level=logging.DEBUG,
        ...                       log_file="output/logs/academy.log")
        >>> logger.info("Back office started")
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    sensitive_filter = SensitiveDataFilter()

    logger.addHandler(_handler(logging.StreamHandler(), sensitive_filter))

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_handler(
            RotatingFileHandler(
                log_file,
                maxBytes=MAX_LOG_BYTES,
                backupCount=LOG_BACKUPS,
                encoding='utf-8'
            ),
            sensitive_filter,
        ))

    # Records logged on this logger directly are masked before any handler
    logger.addFilter(sensitive_filter)

    return logger
