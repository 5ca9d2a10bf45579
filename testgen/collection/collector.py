"""
Interactive input collector for Playwright test suites.

Drives the operator through the prompt sequence and returns a fully
populated ``Suite``. Nothing is written to disk here.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from ..core.config import Config
from ..core.exceptions import MissingFieldError
from ..generation.encoder import StepDraft, StepEncoder
from ..generation.models import (
    ACTION_DESCRIPTIONS,
    CATEGORY_DESCRIPTIONS,
    ActionKind,
    AssertionKind,
    Step,
    Suite,
    TestCase,
    TestCategory,
)
from .prompts import ConsolePrompter, menu_lines, parse_choice

logger = logging.getLogger(__name__)

SUITE_SENTINEL = "done"
STEP_SENTINEL = "next"

REQUIRED_MESSAGE = "This field is required."

TARGET_EXAMPLES = {
    ActionKind.CLICK: ("button", "Submit"),
    ActionKind.FILL: ("textbox", "Email"),
    ActionKind.VERIFY: ("heading", "Welcome"),
}

FIELD_PROMPTS = {
    "fill_value": "Value to fill:",
    "navigate_target": "URL path to navigate:",
    "screenshot_name": "Screenshot name:",
    "custom_statement": "Custom Playwright code:",
}

EXPECTED_PROMPTS = {
    AssertionKind.HAS_TEXT: "Expected text:",
    AssertionKind.HAS_URL: "Expected URL pattern:",
}


class InputCollector:
    """Collects a suite description from the operator one prompt at a time."""

    def __init__(
        self,
        prompter: Optional[ConsolePrompter] = None,
        encoder: Optional[StepEncoder] = None,
        config: Optional[Config] = None,
    ):
        """Initialize the input collector.

        Args:
            prompter: Object with ``ask(prompt)`` and ``say(text)``
            encoder: Step encoder used to validate every step
            config: Collection settings (menu strictness, target prompts)
        """
        self.config = config or Config()
        self.prompter = prompter or ConsolePrompter()
        self.encoder = encoder or StepEncoder(
            separate_target_fields=self.config.separate_target_prompts
        )

    def ask_required(self, prompt: str) -> str:
        """Ask until the operator gives a non-empty answer."""
        while True:
            answer = self.prompter.ask(prompt)
            if answer:
                return answer
            self.prompter.say(REQUIRED_MESSAGE)

    def ask_optional(self, prompt: str) -> Optional[str]:
        """Ask once; an empty answer means absent."""
        answer = self.prompter.ask(prompt)
        return answer or None

    def _section(self, title: str) -> None:
        self.prompter.say()
        self.prompter.say(f"━━━ {title} ━━━")
        self.prompter.say()

    def collect_suite(self) -> Suite:
        """Run the full prompt sequence and return the collected suite."""
        self.prompter.say("Playwright Automated Test Generator")
        self.prompter.say()

        self._section("Step 1: Test File Basics")
        feature_name = self.ask_required("Feature name (e.g., login, checkout, search):")
        file_base_name = self.ask_required("Test file name (without .spec.ts):")
        base_url = self.ask_required("Base URL (e.g., http://localhost:3000):")
        category = self._select_category()

        self._section("Step 2: Test Suite Info")
        describe_title = self.ask_required("Describe block title (e.g., Login Page):")
        initial_path = self.ask_required(
            "Initial page to navigate (path after base URL, e.g., /login):"
        )

        self._section("Step 3: Setup (beforeEach)")
        self.prompter.say(f"Default setup: Navigate to {base_url}{initial_path}")
        additional_setup = self.ask_optional(
            "Additional setup steps (or press Enter to skip):"
        )

        self._section("Step 4: Test Cases")
        self.prompter.say(
            f"Define your test cases (type '{SUITE_SENTINEL}' when finished)"
        )
        self.prompter.say()
        test_cases = self.collect_test_cases()

        suite = Suite(
            feature_name=feature_name,
            file_base_name=file_base_name,
            base_url=base_url,
            category=category,
            describe_title=describe_title,
            initial_path=initial_path,
            additional_setup=additional_setup,
            test_cases=test_cases,
        )
        logger.info(
            f"Collected suite '{suite.describe_title}'",
            extra={
                "metadata": {
                    "test_cases": len(suite.test_cases),
                    "steps": suite.step_count,
                    "category": suite.category.value,
                }
            },
        )
        return suite

    def collect_output_directory(self, default: Path) -> Path:
        """Ask for the output directory, keeping ``default`` on empty input."""
        self._section("Step 5: Output Location")
        answer = self.ask_optional(f"Output directory [{default}]:")
        return Path(answer) if answer else Path(default)

    def collect_test_cases(self) -> List[TestCase]:
        """Collect test cases until the sentinel or an empty title."""
        test_cases: List[TestCase] = []
        number = 1

        while True:
            self.prompter.say(f"━━━ Test Case {number} ━━━")
            title = self.ask_optional("Test title (e.g., 'displays login form'):")
            if title is None or title == SUITE_SENTINEL:
                break

            objective = self.ask_required("Test objective (what are we verifying?):")

            self.prompter.say()
            self.prompter.say("Define test steps")
            self.prompter.say(f"Type '{STEP_SENTINEL}' to move to next test case")
            self.prompter.say()
            steps = self.collect_steps()

            test_case = TestCase(title=title, objective=objective, steps=steps)
            test_cases.append(test_case)
            logger.info(
                f"Collected test case '{test_case.title}' with {len(steps)} step(s)",
                extra={"metadata": {"test_case": test_case.title, "steps": len(steps)}},
            )
            number += 1

        return test_cases

    def collect_steps(self) -> List[Step]:
        """Collect steps for one test case until the sentinel or an empty description."""
        steps: List[Step] = []
        number = 1

        while True:
            description = self.ask_optional(
                f"Step {number} description (or '{STEP_SENTINEL}'):"
            )
            if description is None or description == STEP_SENTINEL:
                break

            steps.append(self.collect_step(description))
            number += 1

        return steps

    def collect_step(self, description: str) -> Step:
        """Collect and encode one step, re-asking any missing required field."""
        action_kind, fallback = self._select_action()
        draft = StepDraft(description=description, action_kind=action_kind)

        if fallback is not None:
            draft.custom_statement = fallback
        else:
            self._fill_draft(draft)

        while True:
            try:
                return self.encoder.encode(draft)
            except MissingFieldError as e:
                logger.debug(
                    f"Re-prompting for {e.field_name}",
                    extra={"metadata": e.to_dict()},
                )
                self.prompter.say(REQUIRED_MESSAGE)
                self._ask_field(draft, e.field_name)

    def _fill_draft(self, draft: StepDraft) -> None:
        kind = draft.action_kind

        if kind in TARGET_EXAMPLES:
            self._ask_target(draft)

        if kind is ActionKind.FILL:
            self._ask_field(draft, "fill_value")
        elif kind is ActionKind.VERIFY:
            assertion_kind, fallback = self._select_assertion()
            if fallback is not None:
                draft.action_kind = ActionKind.CUSTOM
                draft.custom_statement = fallback
                return
            draft.assertion_kind = assertion_kind
            if assertion_kind in EXPECTED_PROMPTS:
                self._ask_field(draft, "assertion_expected")
        elif kind is ActionKind.NAVIGATE:
            self._ask_field(draft, "navigate_target")
        elif kind is ActionKind.SCREENSHOT:
            self._ask_field(draft, "screenshot_name")
        elif kind is ActionKind.CUSTOM:
            self._ask_field(draft, "custom_statement")

    def _ask_target(self, draft: StepDraft) -> None:
        self._ask_field(draft, self.encoder.target_field)
        if self.encoder.separate_target_fields:
            self._ask_field(draft, "target_name")

    def _ask_field(self, draft: StepDraft, field_name: str) -> None:
        role, name = TARGET_EXAMPLES.get(draft.action_kind, ("button", "Submit"))
        if field_name == "target_text":
            prompt = f"Element (role and name, e.g., '{role} {name}'):"
        elif field_name == "target_role":
            prompt = f"Element role (e.g., '{role}'):"
        elif field_name == "target_name":
            prompt = (
                f"Element accessible name (e.g., '{name}', "
                "or press Enter to match by role only):"
            )
        elif field_name == "assertion_expected":
            prompt = EXPECTED_PROMPTS[draft.assertion_kind]
        else:
            prompt = FIELD_PROMPTS[field_name]
        setattr(draft, field_name, self.ask_optional(prompt))

    def _select_category(self) -> TestCategory:
        options = list(TestCategory)
        self.prompter.say()
        self.prompter.say("Test category:")
        for line in menu_lines(options, CATEGORY_DESCRIPTIONS):
            self.prompter.say(line)
        self.prompter.say()

        while True:
            raw = self.ask_required(f"Select category (1-{len(options)}):")
            category = parse_choice(raw, options)
            if category is not None:
                return category
            if not self.config.strict_menus:
                logger.info(f"Unrecognized category '{raw}', using Functional")
                return TestCategory.FUNCTIONAL
            self.prompter.say(f"Invalid selection: {raw}")

    def _select_action(self) -> Tuple[ActionKind, Optional[str]]:
        """Return the selected action and, for unrecognized input, the raw text."""
        options = list(ActionKind)
        self.prompter.say("Action type for this step:")
        labels = {kind: f"{kind.value} - {text}" for kind, text in ACTION_DESCRIPTIONS.items()}
        for line in menu_lines(options, labels):
            self.prompter.say(line)
        self.prompter.say()

        while True:
            raw = self.ask_required(f"Action type (1-{len(options)}):")
            action_kind = parse_choice(raw, options)
            if action_kind is not None:
                return action_kind, None
            if not self.config.strict_menus:
                logger.info(
                    f"Unrecognized action selection '{raw}', recording it as a custom statement"
                )
                return ActionKind.CUSTOM, raw
            self.prompter.say(f"Invalid selection: {raw}")

    def _select_assertion(self) -> Tuple[Optional[AssertionKind], Optional[str]]:
        """Return the selected assertion or, for unrecognized input, the raw text."""
        options = list(AssertionKind)
        self.prompter.say("Assertion type:")
        for line in menu_lines(options):
            self.prompter.say(line)
        self.prompter.say()

        while True:
            raw = self.ask_required(f"Assertion (1-{len(options)}):")
            assertion_kind = parse_choice(raw, options)
            if assertion_kind is not None:
                return assertion_kind, None
            if not self.config.strict_menus:
                logger.info(
                    f"Unrecognized assertion selection '{raw}', recording it as a custom statement"
                )
                return None, raw
            self.prompter.say(f"Invalid selection: {raw}")
