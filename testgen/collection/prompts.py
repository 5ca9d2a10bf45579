"""
Terminal prompting helpers for the interactive collector.
"""

import sys
from enum import Enum
from typing import Callable, List, Mapping, Optional, Sequence, TextIO, TypeVar

E = TypeVar("E", bound=Enum)


class ConsolePrompter:
    """Reads operator answers from stdin and writes prompts to stdout.

    Every prompt blocks until the operator answers. End of input raises
    ``EOFError`` which the CLI treats as an abort.
    """

    def __init__(
        self,
        input_func: Optional[Callable[[str], str]] = None,
        output: Optional[TextIO] = None,
    ):
        self._input = input_func or input
        self._output = output or sys.stdout

    def say(self, text: str = "") -> None:
        print(text, file=self._output)

    def ask(self, prompt: str) -> str:
        self._output.flush()
        return self._input(f"{prompt} ").strip()


def menu_lines(
    options: Sequence[E], labels: Optional[Mapping[E, str]] = None
) -> List[str]:
    """Render a numbered menu, one line per option."""
    labels = labels or {}
    return [
        f"{index}) {labels.get(option, option.value)}"
        for index, option in enumerate(options, 1)
    ]


def parse_choice(raw: str, options: Sequence[E]) -> Optional[E]:
    """Resolve a menu answer to an option.

    Accepts the 1-based menu number, the option value or the option name,
    case-insensitively. Returns None for anything else.
    """
    text = raw.strip()
    if not text:
        return None

    if text.isdecimal():
        index = int(text)
        if 1 <= index <= len(options):
            return options[index - 1]
        return None

    lowered = text.lower().replace(" ", "_")
    for option in options:
        if lowered in (option.name.lower(), str(option.value).lower().replace(" ", "_")):
            return option
    return None
