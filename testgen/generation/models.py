"""
Data models for collected test suites and generated spec files.

The Step Model is the intermediate representation shared by the collector,
the encoder, the code generator and the suite assembler.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ActionKind(Enum):
    """Kinds of test actions, in menu order."""

    CLICK = "click"
    FILL = "fill"
    VERIFY = "verify"
    NAVIGATE = "navigate"
    SCREENSHOT = "screenshot"
    CUSTOM = "custom"


class AssertionKind(Enum):
    """Assertion matchers available to verify steps, in menu order."""

    VISIBLE = "toBeVisible"
    HAS_TEXT = "toHaveText"
    ENABLED = "toBeEnabled"
    DISABLED = "toBeDisabled"
    HAS_URL = "toHaveURL"


class TestCategory(Enum):
    """Documentation-only suite category, in menu order."""

    __test__ = False

    FUNCTIONAL = "Functional"
    UI_VISUAL = "UI/Visual"
    FORM_VALIDATION = "Form Validation"
    NAVIGATION = "Navigation"
    API_INTEGRATION = "API Integration"
    ACCESSIBILITY = "Accessibility"


ACTION_DESCRIPTIONS: Dict[ActionKind, str] = {
    ActionKind.CLICK: "Click an element",
    ActionKind.FILL: "Fill a form field",
    ActionKind.VERIFY: "Assert element state",
    ActionKind.NAVIGATE: "Navigate to URL",
    ActionKind.SCREENSHOT: "Capture screenshot",
    ActionKind.CUSTOM: "Custom action",
}

CATEGORY_DESCRIPTIONS: Dict[TestCategory, str] = {
    TestCategory.FUNCTIONAL: "Functional (user workflows)",
    TestCategory.UI_VISUAL: "UI/Visual (component validation)",
    TestCategory.FORM_VALIDATION: "Form validation",
    TestCategory.NAVIGATION: "Navigation",
    TestCategory.API_INTEGRATION: "API integration",
    TestCategory.ACCESSIBILITY: "Accessibility",
}

# Step fields read by the code generator branch of each action kind
REQUIRED_FIELDS: Dict[ActionKind, Tuple[str, ...]] = {
    ActionKind.CLICK: ("target",),
    ActionKind.FILL: ("target", "fill_value"),
    ActionKind.VERIFY: ("target", "assertion_kind"),
    ActionKind.NAVIGATE: ("navigate_target",),
    ActionKind.SCREENSHOT: ("screenshot_name",),
    ActionKind.CUSTOM: ("custom_statement",),
}

ASSERTION_REQUIRED_FIELDS: Dict[AssertionKind, Tuple[str, ...]] = {
    AssertionKind.VISIBLE: (),
    AssertionKind.HAS_TEXT: ("assertion_expected",),
    AssertionKind.ENABLED: (),
    AssertionKind.DISABLED: (),
    AssertionKind.HAS_URL: ("assertion_expected",),
}


def required_fields(
    action_kind: ActionKind, assertion_kind: Optional[AssertionKind] = None
) -> Tuple[str, ...]:
    """Return the Step fields required by an action kind and assertion kind."""
    names = REQUIRED_FIELDS[action_kind]
    if action_kind is ActionKind.VERIFY and assertion_kind is not None:
        names = names + ASSERTION_REQUIRED_FIELDS[assertion_kind]
    return names


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class TargetDescriptor(BaseModel):
    """Role and accessible name used to locate an element."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: str = Field(..., description="ARIA role passed to getByRole")
    accessible_name: str = Field(
        "", description="Accessible name filter, empty for role-only matching"
    )

    @field_validator("role")
    def validate_role(cls, v):
        if not v or not v.strip():
            raise ValueError("Target role cannot be empty")
        return v.strip()

    @property
    def has_name(self) -> bool:
        return bool(self.accessible_name)


class Step(BaseModel):
    """One encoded test action with its kind-specific parameters."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    description: str = Field(..., description="Operator description of the step")
    action_kind: ActionKind = Field(..., description="Selects the generator branch")
    target: Optional[TargetDescriptor] = None
    fill_value: Optional[str] = None
    assertion_kind: Optional[AssertionKind] = None
    assertion_expected: Optional[str] = None
    navigate_target: Optional[str] = None
    screenshot_name: Optional[str] = None
    custom_statement: Optional[str] = None

    @field_validator("description")
    def validate_description(cls, v):
        if not v or not v.strip():
            raise ValueError("Step description cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_required_fields(self):
        missing = [
            name
            for name in required_fields(self.action_kind, self.assertion_kind)
            if _is_blank(getattr(self, name))
        ]
        if missing:
            raise ValueError(
                f"{self.action_kind.value} step is missing required fields: "
                + ", ".join(missing)
            )
        return self


class TestCase(BaseModel):
    """One named test scenario containing an ordered list of steps."""

    __test__ = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = Field(..., description="Title of the generated test block")
    objective: str = Field(..., description="Leading comment inside the test block")
    steps: Tuple[Step, ...] = Field(default_factory=tuple)

    @field_validator("title", "objective")
    def validate_not_empty(cls, v, info):
        if not v or not v.strip():
            raise ValueError(f"Test case {info.field_name} cannot be empty")
        return v.strip()


class Suite(BaseModel):
    """Top-level metadata of a generated spec file plus its test cases."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    feature_name: str = Field(..., description="Human label used in the header")
    file_base_name: str = Field(..., description="Output file name without extension")
    base_url: str = Field(..., description="Root address the suite navigates to")
    category: TestCategory = Field(TestCategory.FUNCTIONAL)
    describe_title: str = Field(..., description="Title of the describe block")
    initial_path: str = Field(..., description="Path appended to base_url in beforeEach")
    additional_setup: Optional[str] = None
    test_cases: Tuple[TestCase, ...] = Field(default_factory=tuple)

    @field_validator(
        "feature_name", "file_base_name", "base_url", "describe_title", "initial_path"
    )
    def validate_not_empty(cls, v, info):
        if not v or not v.strip():
            raise ValueError(f"Suite {info.field_name} cannot be empty")
        return v.strip()

    @field_validator("additional_setup")
    def normalize_additional_setup(cls, v):
        if v is None or not v.strip():
            return None
        return v

    @property
    def start_url(self) -> str:
        """URL the beforeEach hook navigates to."""
        return f"{self.base_url}{self.initial_path}"

    @property
    def step_count(self) -> int:
        return sum(len(test_case.steps) for test_case in self.test_cases)


@dataclass
class GeneratedSpecFile:
    """Represents a written spec file."""

    name: str
    file_path: str
    content: str
    suite_title: str
    test_count: int = 0
    step_count: int = 0
    generated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "file_path": self.file_path,
            "content_length": len(self.content),
            "suite_title": self.suite_title,
            "test_count": self.test_count,
            "step_count": self.step_count,
            "generated_at": self.generated_at,
        }
