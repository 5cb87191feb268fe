import re
import sys
import logging
import logging.handlers
from pathlib import Path
from config.settings import (
    LOG_DIR,
    LOG_FORMAT,
    LOG_LEVEL,
    LOG_FILE,
    MAX_LOG_SIZE,
    LOG_BACKUP_COUNT,
)


class SensitiveDataFilter(logging.Filter):
    """Redact tokens from log messages before they reach any handler."""

    patterns = [
        (re.compile(r"token=[^&\s]+"), "token=***REDACTED***"),
        (re.compile(r"Bearer [^\s'\"]+"), "Bearer ***REDACTED***"),
        (re.compile(r"(gh[pousr]_)[A-Za-z0-9]{20,}"), r"\1***REDACTED***"),
        (re.compile(r"\"token\": \"[^\"]+\""), "\"token\": \"***REDACTED***\""),
    ]

    def filter(self, record):
        if isinstance(record.msg, str):
            for pattern, replacement in self.patterns:
                record.msg = pattern.sub(replacement, record.msg)
        return True


def setup_logging(level=LOG_LEVEL, secure_logging=True, log_to_file=True):
    """
    Configure logging for the application.

    Args:
        level: Level for the console handler; the log file always records DEBUG
        secure_logging: If True, will redact tokens in logs
        log_to_file: If True, also write to the rotating log file in LOG_DIR

    Returns:
        None
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear existing handlers
    root_logger.handlers = []

    formatter = logging.Formatter(LOG_FORMAT)
    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
    )

    # Filters go on handlers so records propagated from module loggers are covered
    sensitive_filter = SensitiveDataFilter() if secure_logging else None

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    if sensitive_filter:
        console_handler.addFilter(sensitive_filter)
    root_logger.addHandler(console_handler)

    if log_to_file:
        Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            LOG_FILE, maxBytes=MAX_LOG_SIZE, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.setFormatter(detailed_formatter)
        file_handler.setLevel(logging.DEBUG)
        if sensitive_filter:
            file_handler.addFilter(sensitive_filter)
        root_logger.addHandler(file_handler)

    # Set lower level for third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)

    logging.debug(f"Logging configured with level {logging.getLevelName(level)}")
