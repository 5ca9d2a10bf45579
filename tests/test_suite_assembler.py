"""
Unit tests for the suite assembler and writer.
"""

from datetime import datetime

import pytest

from testgen.core.config import Config
from testgen.core.exceptions import FileOperationError, TemplateRenderError
from testgen.generation.assembler import SUITE_TEMPLATE_NAME, SuiteAssembler, SuiteWriter
from testgen.generation.models import ActionKind, Step, Suite, TestCase, TestCategory


def make_suite(**overrides):
    values = dict(
        feature_name="checkout",
        file_base_name="checkout",
        base_url="https://shop.example.com",
        category=TestCategory.FORM_VALIDATION,
        describe_title="Checkout",
        initial_path="/cart",
    )
    values.update(overrides)
    return Suite(**values)


class TestSuiteAssembler:
    """Test cases for SuiteAssembler.render."""

    def test_login_scenario(self, login_suite, login_spec_content, fixed_timestamp):
        content = SuiteAssembler().render(login_suite, fixed_timestamp)

        assert content == login_spec_content

    def test_header_comment(self, fixed_timestamp):
        content = SuiteAssembler().render(make_suite(), fixed_timestamp)

        assert content.startswith("import { test, expect } from '@playwright/test';\n")
        assert " * Checkout - Automated Tests" in content
        assert " * Category: Form Validation" in content
        assert " * Feature: checkout" in content
        assert " * Generated: 2024-01-15" in content

    def test_no_test_cases_yields_empty_describe_block(self, fixed_timestamp):
        content = SuiteAssembler().render(make_suite(), fixed_timestamp)

        assert "test.describe('Checkout', () => {" in content
        assert "await page.goto('https://shop.example.com/cart');" in content
        assert "  test(" not in content
        assert content.endswith("  });\n});\n")

    def test_additional_setup_follows_navigation(self, fixed_timestamp):
        suite = make_suite(additional_setup="await page.evaluate(() => localStorage.clear());")

        content = SuiteAssembler().render(suite, fixed_timestamp)

        assert (
            "    await page.goto('https://shop.example.com/cart');\n"
            "    // Additional setup\n"
            "    await page.evaluate(() => localStorage.clear());\n"
            "  });\n"
        ) in content

    def test_multiline_additional_setup(self, fixed_timestamp):
        suite = make_suite(
            additional_setup="await page.setViewportSize({ width: 1280, height: 720 });\n"
            "await page.waitForLoadState('networkidle');"
        )

        content = SuiteAssembler().render(suite, fixed_timestamp)

        assert "    await page.setViewportSize({ width: 1280, height: 720 });\n" in content
        assert "    await page.waitForLoadState('networkidle');\n" in content

    def test_no_additional_setup_comment_without_setup(self, login_suite, fixed_timestamp):
        content = SuiteAssembler().render(login_suite, fixed_timestamp)

        assert "Additional setup" not in content

    def test_test_case_without_steps_still_emitted(self, fixed_timestamp):
        suite = make_suite(
            test_cases=[TestCase(title="placeholder", objective="to be written")]
        )

        content = SuiteAssembler().render(suite, fixed_timestamp)

        assert (
            "  test('placeholder', async ({ page }) => {\n"
            "    // to be written\n"
            "    await test.step('Execute test steps', async () => {\n"
            "    });\n"
            "  });\n"
        ) in content

    def test_test_blocks_in_collection_order(self, heading_step, fixed_timestamp):
        navigate = Step(
            description="go home", action_kind=ActionKind.NAVIGATE, navigate_target="/"
        )
        suite = make_suite(
            test_cases=[
                TestCase(title="first", objective="one", steps=[navigate, heading_step]),
                TestCase(title="second", objective="two", steps=[heading_step]),
            ]
        )

        content = SuiteAssembler().render(suite, fixed_timestamp)

        assert content.index("test('first'") < content.index("test('second'")
        first_block = content[content.index("test('first'"):content.index("test('second'")]
        assert first_block.index("page.goto('/')") < first_block.index("toBeVisible()")
        assert content.count("await test.step('Execute test steps'") == 2

    def test_titles_are_escaped(self, fixed_timestamp):
        suite = make_suite(
            describe_title="User's Cart",
            test_cases=[TestCase(title="can't checkout empty", objective="guard")],
        )

        content = SuiteAssembler().render(suite, fixed_timestamp)

        assert "test.describe('User\\'s Cart', () => {" in content
        assert "test('can\\'t checkout empty', async ({ page }) => {" in content

    def test_header_fields_cannot_close_comment(self, fixed_timestamp):
        suite = make_suite(describe_title="Cart */ totals", feature_name="cart*/")

        content = SuiteAssembler().render(suite, fixed_timestamp)
        header = content[content.index("/**"):content.index("test.describe(")]

        assert header.count("*/") == 1
        assert " * Cart *\\/ totals - Automated Tests" in header
        assert " * Feature: cart*\\/" in header
        assert "test.describe('Cart */ totals', () => {" in content

    def test_render_is_deterministic(self, login_suite, fixed_timestamp):
        assembler = SuiteAssembler()

        assert assembler.render(login_suite, fixed_timestamp) == assembler.render(
            login_suite, fixed_timestamp
        )

    def test_only_timestamp_differs_between_runs(self, login_suite, fixed_timestamp):
        assembler = SuiteAssembler()
        first = assembler.render(login_suite, fixed_timestamp).splitlines()
        second = assembler.render(login_suite, datetime(2025, 6, 1)).splitlines()

        differing = [(a, b) for a, b in zip(first, second) if a != b]

        assert len(first) == len(second)
        assert differing == [(" * Generated: 2024-01-15", " * Generated: 2025-06-01")]

    def test_template_dir_override(self, tmp_path, login_suite, fixed_timestamp):
        (tmp_path / SUITE_TEMPLATE_NAME).write_text(
            "// {{ suite.describe_title }} @ {{ generated_at }}\n"
            "{% for block in test_blocks %}{{ block.title }}\n{% endfor %}"
        )

        content = SuiteAssembler(template_dir=tmp_path).render(login_suite, fixed_timestamp)

        assert content == "// Login Page @ 2024-01-15\ndisplays login form\n"

    def test_missing_override_falls_back_to_default(
        self, tmp_path, login_suite, login_spec_content, fixed_timestamp
    ):
        content = SuiteAssembler(template_dir=tmp_path).render(login_suite, fixed_timestamp)

        assert content == login_spec_content

    def test_broken_template_raises(self, tmp_path, login_suite, fixed_timestamp):
        (tmp_path / SUITE_TEMPLATE_NAME).write_text("{% for block in test_blocks %}")

        with pytest.raises(TemplateRenderError):
            SuiteAssembler(template_dir=tmp_path).render(login_suite, fixed_timestamp)

    def test_undefined_variable_raises(self, tmp_path, login_suite, fixed_timestamp):
        (tmp_path / SUITE_TEMPLATE_NAME).write_text("{{ missing_value }}")

        with pytest.raises(TemplateRenderError):
            SuiteAssembler(template_dir=tmp_path).render(login_suite, fixed_timestamp)


class TestSuiteWriter:
    """Test cases for SuiteWriter.write."""

    def test_writes_spec_file(self, temp_config, login_suite, login_spec_content, fixed_timestamp):
        generated = SuiteWriter(temp_config).write(login_suite, generated_at=fixed_timestamp)

        output_path = temp_config.output_dir / "login.spec.ts"
        assert generated.file_path == str(output_path)
        assert generated.name == "login.spec.ts"
        assert output_path.read_text(encoding="utf-8") == login_spec_content
        assert generated.content == login_spec_content
        assert generated.test_count == 1
        assert generated.step_count == 1
        assert generated.generated_at == "2024-01-15"

    def test_creates_nested_output_directory(self, tmp_path, login_suite, fixed_timestamp):
        output_dir = tmp_path / "e2e" / "generated"

        SuiteWriter(Config()).write(login_suite, output_dir, fixed_timestamp)

        assert [p.name for p in output_dir.iterdir()] == ["login.spec.ts"]

    def test_overwrites_existing_file(self, temp_config, login_suite, login_spec_content, fixed_timestamp):
        temp_config.output_dir.mkdir(parents=True)
        (temp_config.output_dir / "login.spec.ts").write_text("stale")

        SuiteWriter(temp_config).write(login_suite, generated_at=fixed_timestamp)

        assert (temp_config.output_dir / "login.spec.ts").read_text() == login_spec_content

    def test_rerun_produces_identical_file(self, temp_config, login_suite, fixed_timestamp):
        writer = SuiteWriter(temp_config)
        first = writer.write(login_suite, generated_at=fixed_timestamp).content
        second = writer.write(login_suite, generated_at=fixed_timestamp).content

        assert first == second

    def test_custom_file_extension(self, tmp_path, login_suite, fixed_timestamp):
        config = Config(output_dir=tmp_path, file_extension=".test.ts")

        generated = SuiteWriter(config).write(login_suite, generated_at=fixed_timestamp)

        assert generated.name == "login.test.ts"

    def test_unwritable_directory_raises(self, tmp_path, login_suite, fixed_timestamp):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(FileOperationError) as exc_info:
            SuiteWriter(Config()).write(login_suite, blocker / "tests", fixed_timestamp)

        assert exc_info.value.operation == "write"
        assert exc_info.value.file_path == str(blocker / "tests" / "login.spec.ts")
