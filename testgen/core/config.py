"""
Configuration management for the Playwright test generator.

Handles environment variables, configuration files, defaults, and
configuration validation for all generator components.
"""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Dict, Any

import yaml


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARN", "ERROR"]
VALID_LOG_FORMATS = ["text", "json"]

# Value types accepted for each key of a configuration file
FILE_VALUE_TYPES = {
    "ci_mode": (bool,),
    "log_level": (str,),
    "log_format": (str,),
    "log_file": (str, type(None)),
    "output_dir": (str,),
    "file_extension": (str,),
    "template_dir": (str, type(None)),
    "strict_menus": (bool,),
    "separate_target_prompts": (bool,),
}


def _env_flag(name: str) -> Optional[bool]:
    """Read a boolean environment variable, None when unset."""
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Configuration class for the test generator with environment variable support."""

    # Environment detection
    ci_mode: bool = field(default=False)

    # Logging configuration
    log_level: str = field(default="WARN")
    log_format: str = field(default="text")
    log_file: Optional[Path] = field(default=None)

    # Output settings
    output_dir: Path = field(default_factory=lambda: Path("tests"))
    file_extension: str = field(default=".spec.ts")
    template_dir: Optional[Path] = field(default=None)

    # Collection behaviour
    strict_menus: bool = field(default=False)
    separate_target_prompts: bool = field(default=True)

    def __post_init__(self):
        """Post-initialization normalization and environment overrides."""
        if os.getenv("CI", "").lower() == "true" and self.ci_mode is False:
            self.ci_mode = True

        log_env = os.getenv("TESTGEN_LOG_LEVEL")
        if log_env:
            self.log_level = log_env

        # Normalize log level, falling back to the default on unknown values
        if self.log_level.upper() == "WARNING":
            self.log_level = "WARN"
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            self.log_level = "WARN"
        else:
            self.log_level = self.log_level.upper()

        format_env = os.getenv("TESTGEN_LOG_FORMAT")
        if format_env:
            self.log_format = format_env.lower()
        elif self.ci_mode and self.log_format == "text":
            self.log_format = "json"

        log_file_env = os.getenv("TESTGEN_LOG_FILE")
        if log_file_env:
            self.log_file = Path(log_file_env)

        output_env = os.getenv("TESTGEN_OUTPUT_DIR")
        if output_env:
            self.output_dir = Path(output_env)

        template_env = os.getenv("TESTGEN_TEMPLATE_DIR")
        if template_env:
            self.template_dir = Path(template_env)

        strict_env = _env_flag("TESTGEN_STRICT_MENUS")
        if strict_env is not None:
            self.strict_menus = strict_env

        separate_env = _env_flag("TESTGEN_SEPARATE_TARGET_PROMPTS")
        if separate_env is not None:
            self.separate_target_prompts = separate_env

        # Path-typed fields may arrive as strings from config files
        self.output_dir = Path(self.output_dir)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)
        if self.template_dir is not None:
            self.template_dir = Path(self.template_dir)

    @property
    def is_ci_mode(self) -> bool:
        """Check if running in CI environment."""
        return self.ci_mode

    def get_output_path(self, file_base_name: str, output_dir: Optional[Path] = None) -> Path:
        """Get the spec file path for a suite file base name."""
        directory = Path(output_dir) if output_dir is not None else self.output_dir
        return directory / f"{file_base_name}{self.file_extension}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for logging."""
        return {
            "ci_mode": self.ci_mode,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_file": str(self.log_file) if self.log_file else None,
            "output_dir": str(self.output_dir),
            "file_extension": self.file_extension,
            "template_dir": str(self.template_dir) if self.template_dir else None,
            "strict_menus": self.strict_menus,
            "separate_target_prompts": self.separate_target_prompts,
        }

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        ci = os.getenv("CI", "").lower() == "true"
        return cls(
            ci_mode=ci,
            log_format="json" if ci else "text",
        )

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Create configuration from a YAML or JSON file.

        Environment variables still take precedence over file values.

        Raises:
            ValidationError: If the file cannot be read, contains unknown keys
                or holds values of the wrong type
        """
        from .exceptions import ValidationError

        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ValidationError(
                f"Cannot read configuration file {path}: {e}",
                validation_type="config",
                violations=[str(e)],
            ) from e

        try:
            if path.suffix.lower() == ".json":
                data = json.loads(text) if text.strip() else {}
            else:
                data = yaml.safe_load(text) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValidationError(
                f"Cannot parse configuration file {path}: {e}",
                validation_type="config",
                violations=[str(e)],
            ) from e

        if not isinstance(data, dict):
            raise ValidationError(
                f"Configuration file {path} must contain a mapping",
                validation_type="config",
                violations=["top-level value is not a mapping"],
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ValidationError(
                f"Unknown configuration keys in {path}: {', '.join(unknown)}",
                validation_type="config",
                violations=[f"unknown key: {key}" for key in unknown],
            )

        invalid = sorted(
            key for key, value in data.items()
            if not isinstance(value, FILE_VALUE_TYPES[key])
        )
        if invalid:
            raise ValidationError(
                f"Invalid configuration values in {path}: {', '.join(invalid)}",
                validation_type="config",
                violations=[
                    f"{key}: expected {' or '.join(t.__name__ for t in FILE_VALUE_TYPES[key])}, "
                    f"got {type(data[key]).__name__}"
                    for key in invalid
                ],
            )

        return cls(**data)

    def validate(self) -> None:
        """Validate configuration and raise ValidationError if invalid."""
        from .exceptions import ValidationError

        errors = []

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level: {self.log_level}. Must be one of {VALID_LOG_LEVELS}"
            )

        if self.log_format not in VALID_LOG_FORMATS:
            errors.append(
                f"Invalid log format: {self.log_format}. Must be one of {VALID_LOG_FORMATS}"
            )

        if not self.file_extension.startswith("."):
            errors.append(
                f"File extension must start with '.': {self.file_extension}"
            )

        if self.output_dir.exists() and not self.output_dir.is_dir():
            errors.append(f"Output path is not a directory: {self.output_dir}")

        if self.template_dir is not None and not self.template_dir.is_dir():
            errors.append(f"Template directory does not exist: {self.template_dir}")

        if errors:
            message = "Configuration validation failed: " + "; ".join(errors)
            raise ValidationError(
                message,
                validation_type="config",
                violations=errors,
            )
