"""
Suite assembler and writer for Playwright spec files.

Wraps the generated step lines into a complete spec file (imports, describe
block, beforeEach hook, one test per test case) and writes it to disk.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
)

from ..core.config import Config
from ..core.exceptions import FileOperationError, TemplateRenderError
from ..core.logging_config import log_performance
from .generator import CodeGenerator, ts_string
from .models import GeneratedSpecFile, Suite

logger = logging.getLogger(__name__)

SUITE_TEMPLATE_NAME = "suite.spec.ts.j2"
SETUP_INDENT = " " * 4


def doc_comment(value: str) -> str:
    """Keep a value from closing the surrounding block comment."""
    return value.replace("*/", "*\\/")


DEFAULT_SUITE_TEMPLATE = """\
import { test, expect } from '@playwright/test';

/**
 * {{ suite.describe_title | doc_comment }} - Automated Tests
 * Category: {{ suite.category.value }}
 * Feature: {{ suite.feature_name | doc_comment }}
 * Generated: {{ generated_at }}
 */

test.describe('{{ suite.describe_title | ts_string }}', () => {
  test.beforeEach(async ({ page }) => {
    // Navigate to the page before each test
    await page.goto('{{ suite.start_url | ts_string }}');
{% if setup_lines %}
    // Additional setup
{% for line in setup_lines %}
{{ line }}
{% endfor %}
{% endif %}
  });
{% for block in test_blocks %}

  test('{{ block.title | ts_string }}', async ({ page }) => {
    // {{ block.objective }}
    await test.step('Execute test steps', async () => {
{% for line in block.lines %}
{{ line }}
{% endfor %}
    });
  });
{% endfor %}
});
"""


class SuiteAssembler:
    """Renders a collected suite into spec file source text."""

    def __init__(
        self,
        code_generator: Optional[CodeGenerator] = None,
        template_dir: Optional[Path] = None,
    ):
        """Initialize the suite assembler.

        Args:
            code_generator: Generator for per-step source lines
            template_dir: Directory holding a ``suite.spec.ts.j2`` override
        """
        self.code_generator = code_generator or CodeGenerator()
        self.template_dir = Path(template_dir) if template_dir else None

        loader = FileSystemLoader(str(self.template_dir)) if self.template_dir else None
        self.jinja_env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.jinja_env.filters["ts_string"] = ts_string
        self.jinja_env.filters["doc_comment"] = doc_comment

    def _get_template(self):
        if self.template_dir is not None:
            try:
                return self.jinja_env.get_template(SUITE_TEMPLATE_NAME)
            except TemplateNotFound:
                logger.warning(
                    f"No {SUITE_TEMPLATE_NAME} in {self.template_dir}, using built-in template"
                )
            except TemplateError as e:
                raise TemplateRenderError(
                    f"Cannot load suite template: {e}",
                    template_name=str(self.template_dir / SUITE_TEMPLATE_NAME),
                ) from e
        return self.jinja_env.from_string(DEFAULT_SUITE_TEMPLATE)

    def build_context(
        self, suite: Suite, generated_at: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """Build the template context for a suite."""
        timestamp = generated_at or datetime.now()
        setup_lines: List[str] = []
        if suite.additional_setup:
            setup_lines = [
                f"{SETUP_INDENT}{line.strip()}"
                for line in suite.additional_setup.splitlines()
                if line.strip()
            ]

        test_blocks = [
            {
                "title": test_case.title,
                "objective": test_case.objective,
                "lines": self.code_generator.generate_steps(test_case.steps),
            }
            for test_case in suite.test_cases
        ]

        return {
            "suite": suite,
            "generated_at": timestamp.strftime("%Y-%m-%d"),
            "setup_lines": setup_lines,
            "test_blocks": test_blocks,
        }

    def render(self, suite: Suite, generated_at: Optional[datetime] = None) -> str:
        """Render the complete spec file for a suite.

        Args:
            suite: Fully collected suite
            generated_at: Timestamp for the header, defaults to now

        Returns:
            Spec file source text

        Raises:
            TemplateRenderError: If the template fails to render
        """
        template = self._get_template()
        context = self.build_context(suite, generated_at)
        try:
            return template.render(**context)
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render suite template: {e}",
                template_name=template.name or "<default>",
            ) from e


class SuiteWriter:
    """Writes assembled spec files to the output directory."""

    def __init__(
        self,
        config: Optional[Config] = None,
        assembler: Optional[SuiteAssembler] = None,
    ):
        self.config = config or Config()
        self.assembler = assembler or SuiteAssembler(
            template_dir=self.config.template_dir
        )

    @log_performance("spec file generation")
    def write(
        self,
        suite: Suite,
        output_dir: Optional[Path] = None,
        generated_at: Optional[datetime] = None,
    ) -> GeneratedSpecFile:
        """Render a suite and write it as a single spec file.

        The file is written once, after the whole content has been rendered.

        Args:
            suite: Fully collected suite
            output_dir: Target directory, defaults to the configured one
            generated_at: Timestamp for the header, defaults to now

        Returns:
            GeneratedSpecFile describing the written file

        Raises:
            FileOperationError: If the directory or file cannot be written
        """
        generated_at = generated_at or datetime.now()
        content = self.assembler.render(suite, generated_at)
        output_path = self.config.get_output_path(suite.file_base_name, output_dir)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write spec file {output_path}: {e}")
            raise FileOperationError(
                f"Failed to write spec file: {e}",
                file_path=str(output_path),
                operation="write",
            ) from e

        generated = GeneratedSpecFile(
            name=output_path.name,
            file_path=str(output_path),
            content=content,
            suite_title=suite.describe_title,
            test_count=len(suite.test_cases),
            step_count=suite.step_count,
            generated_at=generated_at.strftime("%Y-%m-%d"),
        )
        logger.info(
            f"Spec file written: {output_path}",
            extra={"metadata": generated.to_dict()},
        )
        return generated
