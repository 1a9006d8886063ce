"""Structured JSON logging for intlphone.

Provides consistent logging across all modules with:
    - JSON format for file logs
    - Human-readable console output
    - Rotating file handler
    - Context fields (stage, iso_country, calling_code, etc.)
    - Phone numbers masked in anything above DEBUG

Usage:
    from intlphone.core.logging import get_logger, setup_logging

    setup_logging()  # Call once at startup
    logger = get_logger(__name__)

    logger.info("Location resolved", extra={"context": {"iso_country": "PH"}})
"""

import json
import logging
import re
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

ROOT_LOGGER_NAME = "intlphone"


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for file output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON string with timestamp, level, module, message, and context
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "context"):
            log_data["context"] = record.context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable format for console output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record for console.

        Args:
            record: The log record to format

        Returns:
            Human-readable string
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        level = record.levelname[:4]
        message = record.getMessage()

        if hasattr(record, "context") and record.context:
            ctx_parts = [f"{k}={v}" for k, v in record.context.items()]
            if ctx_parts:
                message += f" [{', '.join(ctx_parts)}]"

        return f"{timestamp} {level:4s} {record.name}: {message}"


# Seven or more digits in a row
_PHONE_DIGITS = re.compile(r"\d{7,}")


def redact_phone_digits(text: str) -> str:
    """Mask digit runs that look like phone numbers, keeping the last four."""
    return _PHONE_DIGITS.sub(lambda m: "*" * (len(m.group()) - 4) + m.group()[-4:], text)


class PhoneRedactionFilter(logging.Filter):
    """Keep raw phone numbers out of records above DEBUG.

    Rewrites the message and any string context values in place, so every
    handler after this one sees the redacted record too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno <= logging.DEBUG:
            return True

        record.msg = redact_phone_digits(record.getMessage())
        record.args = None

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            record.context = {
                k: redact_phone_digits(v) if isinstance(v, str) else v
                for k, v in context.items()
            }
        return True


_logging_initialized = False


def setup_logging(
    log_dir: Optional[Path] = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """Initialize logging system.

    Call once at application startup. Library callers that never call
    this get no output beyond what their own root logger configures.

    Args:
        log_dir: Directory for log files. Defaults to ~/.intlphone/logs
        console_level: Minimum level for console output (default: WARNING)
        file_level: Minimum level for file output (default: DEBUG)
    """
    global _logging_initialized

    if _logging_initialized:
        return

    if log_dir is None:
        log_dir = Path.home() / ".intlphone" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter())
    console_handler.addFilter(PhoneRedactionFilter())
    root_logger.addHandler(console_handler)

    log_file = log_dir / "intlphone.log"
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(JSONFormatter())
    file_handler.addFilter(PhoneRedactionFilter())
    root_logger.addHandler(file_handler)

    _logging_initialized = True
    root_logger.debug("Logging initialized", extra={"context": {"log_dir": str(log_dir)}})


def get_logger(name: str) -> logging.Logger:
    """Get logger for module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance under the intlphone namespace
    """
    prefix = ROOT_LOGGER_NAME + "."
    if name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(prefix):
        name = name[len(prefix) :]
    return logging.getLogger(f"{prefix}{name}")
