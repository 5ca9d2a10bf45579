"""Interactive collection of suite descriptions from the operator."""

from .collector import InputCollector, SUITE_SENTINEL, STEP_SENTINEL
from .prompts import ConsolePrompter

__all__ = [
    "InputCollector",
    "ConsolePrompter",
    "SUITE_SENTINEL",
    "STEP_SENTINEL",
]
