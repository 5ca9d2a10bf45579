"""Core components for the Playwright test generator."""

from .config import Config
from .exceptions import (
    TestGenError,
    ValidationError,
    MissingFieldError,
    FileOperationError,
    TemplateRenderError,
)
from .logging_config import setup_logging, get_logger, generate_run_id

__all__ = [
    "Config",
    "TestGenError",
    "ValidationError",
    "MissingFieldError",
    "FileOperationError",
    "TemplateRenderError",
    "setup_logging",
    "get_logger",
    "generate_run_id",
]
