"""
Code generator mapping encoded steps to Playwright TypeScript statements.
"""

import logging
import re
from typing import Callable, Dict, Iterable, List

from .models import ActionKind, AssertionKind, Step, TargetDescriptor

logger = logging.getLogger(__name__)

STEP_INDENT = " " * 6

# A slash preceded by an even number of backslashes
UNESCAPED_SLASH = re.compile(r"(?<!\\)((?:\\\\)*)/")


def ts_string(value: str) -> str:
    """Escape a value for a single-quoted TypeScript string literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def ts_regex(fragment: str) -> str:
    """Wrap a URL fragment into a TypeScript regex literal.

    Slashes already escaped by the operator are left as they are.
    """
    return "/" + UNESCAPED_SLASH.sub(r"\1\\/", fragment) + "/"


def locator(target: TargetDescriptor) -> str:
    """Build a getByRole locator expression for a target."""
    if target.has_name:
        return (
            f"page.getByRole('{ts_string(target.role)}', "
            f"{{ name: '{ts_string(target.accessible_name)}' }})"
        )
    return f"page.getByRole('{ts_string(target.role)}')"


class CodeGenerator:
    """Generates TypeScript source lines for encoded steps.

    Output depends only on the step, so the same step always produces the
    same lines.
    """

    def __init__(self, indent: str = STEP_INDENT):
        self.indent = indent
        self._action_handlers: Dict[ActionKind, Callable[[Step], str]] = {
            ActionKind.CLICK: self._click,
            ActionKind.FILL: self._fill,
            ActionKind.VERIFY: self._verify,
            ActionKind.NAVIGATE: self._navigate,
            ActionKind.SCREENSHOT: self._screenshot,
            ActionKind.CUSTOM: self._custom,
        }
        self._assertion_handlers: Dict[AssertionKind, Callable[[Step], str]] = {
            AssertionKind.VISIBLE: self._assert_visible,
            AssertionKind.HAS_TEXT: self._assert_has_text,
            AssertionKind.ENABLED: self._assert_enabled,
            AssertionKind.DISABLED: self._assert_disabled,
            AssertionKind.HAS_URL: self._assert_has_url,
        }

        missing = [k.value for k in ActionKind if k not in self._action_handlers]
        missing += [k.value for k in AssertionKind if k not in self._assertion_handlers]
        if missing:
            raise NotImplementedError(
                f"No code generation handler for: {', '.join(missing)}"
            )

    def generate_step(self, step: Step) -> List[str]:
        """Generate the indented source lines for one step.

        Args:
            step: Encoded step

        Returns:
            Ordered list of source lines
        """
        statement = self._action_handlers[step.action_kind](step)
        lines = [f"{self.indent}{line}" for line in statement.splitlines()]
        logger.debug(
            f"Generated {len(lines)} line(s) for {step.action_kind.value} step",
            extra={"metadata": {"action_kind": step.action_kind.value}},
        )
        return lines

    def generate_steps(self, steps: Iterable[Step]) -> List[str]:
        """Generate the concatenated source lines for steps in order."""
        lines: List[str] = []
        for step in steps:
            lines.extend(self.generate_step(step))
        return lines

    def _click(self, step: Step) -> str:
        return f"await {locator(step.target)}.click();"

    def _fill(self, step: Step) -> str:
        return f"await {locator(step.target)}.fill('{ts_string(step.fill_value)}');"

    def _verify(self, step: Step) -> str:
        return self._assertion_handlers[step.assertion_kind](step)

    def _navigate(self, step: Step) -> str:
        return f"await page.goto('{ts_string(step.navigate_target)}');"

    def _screenshot(self, step: Step) -> str:
        return (
            f"await page.screenshot({{ path: '{ts_string(step.screenshot_name)}.png', "
            f"fullPage: true }});"
        )

    def _custom(self, step: Step) -> str:
        # Operator code is trusted and emitted as typed
        return step.custom_statement.strip()

    def _assert_visible(self, step: Step) -> str:
        return f"await expect({locator(step.target)}).toBeVisible();"

    def _assert_has_text(self, step: Step) -> str:
        return (
            f"await expect({locator(step.target)})"
            f".toHaveText('{ts_string(step.assertion_expected)}');"
        )

    def _assert_enabled(self, step: Step) -> str:
        return f"await expect({locator(step.target)}).toBeEnabled();"

    def _assert_disabled(self, step: Step) -> str:
        return f"await expect({locator(step.target)}).toBeDisabled();"

    def _assert_has_url(self, step: Step) -> str:
        return f"await expect(page).toHaveURL({ts_regex(step.assertion_expected)});"
