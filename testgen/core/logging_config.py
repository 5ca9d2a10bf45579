"""
Logging configuration for the Playwright test generator.

Provides structured JSON logging, optional file rotation and different output
formats for interactive and CI environments. Console output goes to stderr so
that it never interleaves with the operator prompts on stdout.
"""

import functools
import json
import logging
import logging.handlers
import sys
import time
import uuid
from datetime import datetime, timezone
from typing import Optional

from .config import Config
from .exceptions import FileOperationError


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def __init__(self, run_id: str):
        super().__init__()
        self.run_id = run_id

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "component": record.name,
            "run_id": self.run_id,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "metadata"):
            log_entry["metadata"] = record.metadata

        for attr in ["test_case", "action_kind", "field_name", "file_path", "duration"]:
            if hasattr(record, attr):
                log_entry[attr] = getattr(record, attr)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter for interactive sessions."""

    def __init__(self, run_id: str):
        super().__init__()
        self.run_id = run_id

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as human-readable text."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        message = f"[{timestamp}] {record.levelname:8} {record.name:20} | {record.getMessage()}"
        message += f" (run: {self.run_id[:8]})"

        if hasattr(record, "metadata") and record.metadata:
            metadata_str = " | ".join(f"{k}={v}" for k, v in record.metadata.items())
            message += f" | {metadata_str}"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def generate_run_id() -> str:
    """
    Generate a unique run ID for correlating the log lines of one session.

    Returns:
        Identifier of the form ``YYYYMMDD-<16 hex chars>``
    """
    run_id = uuid.uuid4().hex[:16]
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d")
    return f"{timestamp}-{run_id}"


def setup_logging(config: Config, run_id: str) -> logging.Logger:
    """
    Set up logging configuration based on environment and config.

    Args:
        config: Configuration object with logging settings
        run_id: Unique run identifier for log correlation

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    log_level = getattr(logging, config.log_level)
    root_logger.setLevel(log_level)

    if config.log_format == "json":
        formatter = StructuredFormatter(run_id)
    else:
        formatter = TextFormatter(run_id)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if config.log_file is not None:
        try:
            config.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                config.log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
        except OSError as e:
            raise FileOperationError(
                f"Failed to open log file: {e}",
                file_path=str(config.log_file),
                operation="open",
            ) from e
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger("testgen.logging")
    logger.debug(
        "Logging configured",
        extra={
            "metadata": {
                "run_id": run_id,
                "log_level": config.log_level,
                "log_format": config.log_format,
                "ci_mode": config.is_ci_mode,
                "log_file": str(config.log_file) if config.log_file else None,
            }
        },
    )

    return root_logger


def get_logger(name: str, **context) -> logging.Logger:
    """
    Get a logger with optional context.

    Args:
        name: Logger name (typically module name)
        **context: Additional context to include in log records

    Returns:
        Configured logger with context
    """
    logger = logging.getLogger(name)

    if context:

        class ContextAdapter(logging.LoggerAdapter):
            def process(self, msg, kwargs):
                if "extra" not in kwargs:
                    kwargs["extra"] = {}
                kwargs["extra"].update(self.extra)
                return msg, kwargs

        return ContextAdapter(logger, context)

    return logger


def log_performance(operation_name: str):
    """
    Decorator to log performance metrics for functions.

    Args:
        operation_name: Name of the operation being measured

    Returns:
        Decorator function
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(f"{func.__module__}.{func.__name__}")
            start_time = time.time()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.time() - start_time
                logger.error(
                    f"{operation_name} failed",
                    extra={
                        "metadata": {
                            "operation": operation_name,
                            "duration": duration,
                            "success": False,
                            "error": str(e),
                        }
                    },
                )
                raise

            duration = time.time() - start_time
            logger.info(
                f"{operation_name} completed",
                extra={
                    "metadata": {
                        "operation": operation_name,
                        "duration": duration,
                        "success": True,
                    }
                },
            )
            return result

        return wrapper

    return decorator
