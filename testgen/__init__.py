"""
Playwright Test Generator

Interactive tool that collects a structured description of a test suite and
compiles it into a runnable Playwright Test ``.spec.ts`` file.
"""

__version__ = "0.1.0"
__author__ = "QA Tooling Team"

from .core.config import Config
from .core.exceptions import TestGenError
from .core.logging_config import setup_logging

__all__ = [
    "Config",
    "TestGenError",
    "setup_logging",
]
