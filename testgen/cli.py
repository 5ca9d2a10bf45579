"""
Command-line interface for the Playwright test generator.

Runs the interactive collection, writes the generated spec file and prints
the suggested next commands.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .collection.collector import InputCollector
from .collection.prompts import ConsolePrompter
from .core.config import Config
from .core.exceptions import TestGenError, ValidationError
from .core.logging_config import generate_run_id, get_logger, setup_logging
from .generation.assembler import SuiteWriter
from .generation.models import GeneratedSpecFile, Suite

ABORT_EXIT_CODE = 130


def print_next_steps(prompter, generated: GeneratedSpecFile, suite: Suite) -> None:
    """Print the file location and suggested follow-up commands."""
    say = prompter.say
    say("✅ Playwright test file generated successfully!")
    say()
    say(f"File location: {generated.file_path}")
    say()
    say("Next steps:")
    say("1. Review generated test file")
    say("2. Refine locators using Playwright MCP validation")
    say(f"3. Run tests: npx playwright test {generated.name}")
    say(f"4. Debug if needed: npx playwright test --debug {generated.name}")
    say("5. View report: npx playwright show-report")
    say()
    say("Playwright MCP Validation Commands:")
    say(f'  "Navigate to {suite.start_url}"')
    say('  "Get the accessibility snapshot"')
    say('  "Take a screenshot"')
    say()


def run_generator(config: Config, prompter=None) -> int:
    """Collect a suite from the operator and write the spec file.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logger = get_logger("testgen.cli")
    prompter = prompter or ConsolePrompter()
    collector = InputCollector(prompter, config=config)
    writer = SuiteWriter(config)

    try:
        suite = collector.collect_suite()
        output_dir = collector.collect_output_directory(config.output_dir)

        prompter.say()
        prompter.say("Generating Playwright test file...")
        prompter.say()
        generated = writer.write(suite, output_dir)

    except (EOFError, KeyboardInterrupt):
        logger.warning("Input aborted by operator, no file written")
        print("\n⚠️  Aborted, no file written.", file=sys.stderr)
        return ABORT_EXIT_CODE

    except TestGenError as e:
        logger.error(
            f"Test generation failed: {e.message}", extra={"metadata": e.to_dict()}
        )
        print(f"❌ {e.message}", file=sys.stderr)
        return 1

    print_next_steps(prompter, generated, suite)
    return 0


def load_config(parsed_args: argparse.Namespace) -> Config:
    """Build the effective configuration from file, environment and flags."""
    if parsed_args.config:
        config = Config.from_file(Path(parsed_args.config))
    else:
        config = Config.from_env()

    if parsed_args.strict_menus:
        config.strict_menus = True
    if parsed_args.single_target_prompt:
        config.separate_target_prompts = False
    if parsed_args.verbose:
        config.log_level = "DEBUG"
    if parsed_args.output_dir:
        config.output_dir = Path(parsed_args.output_dir)

    config.validate()
    return config


def create_main_parser() -> argparse.ArgumentParser:
    """Create main CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="playwright-testgen",
        description="Interactive generator for Playwright .spec.ts test files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  playwright-testgen
  playwright-testgen e2e/generated
  playwright-testgen --config testgen.yaml --strict-menus
        """,
    )

    parser.add_argument(
        "output_dir",
        nargs="?",
        help="Output directory for the generated spec file (default: ./tests)",
    )
    parser.add_argument(
        "--config",
        help="Path to a YAML or JSON configuration file",
    )
    parser.add_argument(
        "--strict-menus",
        action="store_true",
        help="Re-ask unrecognized menu selections instead of falling back",
    )
    parser.add_argument(
        "--single-target-prompt",
        action="store_true",
        help="Ask for elements as one 'role name' string",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(args: Optional[List[str]] = None, prompter=None) -> int:
    """Main CLI entry point."""
    parser = create_main_parser()

    if args is None:
        args = sys.argv[1:]

    parsed_args = parser.parse_args(args)

    try:
        config = load_config(parsed_args)
    except ValidationError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1

    run_id = generate_run_id()
    try:
        setup_logging(config, run_id)
    except TestGenError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1
    get_logger("testgen.cli").debug(
        "Test generator starting",
        extra={"metadata": {"run_id": run_id, "config": config.to_dict()}},
    )

    return run_generator(config, prompter)


if __name__ == "__main__":
    sys.exit(main())
