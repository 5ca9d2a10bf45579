"""
Pytest configuration and shared fixtures for test generator tests.

Provides a scripted prompter, sample suites and an isolated configuration
for all test modules.
"""

import os
from datetime import datetime

import pytest

from testgen.core.config import Config
from testgen.generation.models import (
    ActionKind,
    AssertionKind,
    Step,
    Suite,
    TargetDescriptor,
    TestCase,
    TestCategory,
)


class ScriptedPrompter:
    """Prompter that replays a recorded transcript of operator answers."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []
        self.output = []

    def ask(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError("No more scripted answers")
        return self.answers.pop(0).strip()

    def say(self, text=""):
        self.output.append(text)

    @property
    def transcript(self):
        return "\n".join(self.output)


LOGIN_ANSWERS = [
    "login",                  # feature name
    "login",                  # file name
    "http://localhost:3000",  # base URL
    "1",                      # category
    "Login Page",             # describe title
    "/login",                 # initial path
    "",                       # additional setup
    "displays login form",    # test title
    "verify form renders",    # objective
    "check heading",          # step description
    "3",                      # verify
    "heading",                # role
    "Login",                  # accessible name
    "1",                      # toBeVisible
    "next",
    "done",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove environment variables that change configuration defaults."""
    for name in list(os.environ):
        if name == "CI" or name.startswith("TESTGEN_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def scripted_prompter():
    """Factory for scripted prompters."""
    return ScriptedPrompter


@pytest.fixture
def login_answers():
    """Operator answers describing the login suite."""
    return list(LOGIN_ANSWERS)


@pytest.fixture
def fixed_timestamp():
    """Fixed generation timestamp for deterministic output."""
    return datetime(2024, 1, 15, 10, 30, 0)


@pytest.fixture
def temp_config(tmp_path):
    """Create a configuration writing into a temporary directory."""
    return Config(output_dir=tmp_path / "tests")


@pytest.fixture
def heading_step():
    """Verify step asserting the Login heading is visible."""
    return Step(
        description="check heading",
        action_kind=ActionKind.VERIFY,
        target=TargetDescriptor(role="heading", accessible_name="Login"),
        assertion_kind=AssertionKind.VISIBLE,
    )


@pytest.fixture
def login_suite(heading_step):
    """Suite with one test case checking the login heading."""
    return Suite(
        feature_name="login",
        file_base_name="login",
        base_url="http://localhost:3000",
        category=TestCategory.FUNCTIONAL,
        describe_title="Login Page",
        initial_path="/login",
        test_cases=[
            TestCase(
                title="displays login form",
                objective="verify form renders",
                steps=[heading_step],
            )
        ],
    )


@pytest.fixture
def login_spec_content():
    """Expected spec file for the login suite generated on 2024-01-15."""
    return """\
import { test, expect } from '@playwright/test';

/**
 * Login Page - Automated Tests
 * Category: Functional
 * Feature: login
 * Generated: 2024-01-15
 */

test.describe('Login Page', () => {
  test.beforeEach(async ({ page }) => {
    // Navigate to the page before each test
    await page.goto('http://localhost:3000/login');
  });

  test('displays login form', async ({ page }) => {
    // verify form renders
    await test.step('Execute test steps', async () => {
      await expect(page.getByRole('heading', { name: 'Login' })).toBeVisible();
    });
  });
});
"""
