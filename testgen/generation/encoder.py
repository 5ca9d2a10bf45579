"""
Step encoder that validates collected step drafts.

Turns the raw values the collector gathered for one step into a validated
``Step`` carrying only the fields its action kind uses.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import MissingFieldError
from .models import (
    ActionKind,
    AssertionKind,
    Step,
    TargetDescriptor,
    required_fields,
)

logger = logging.getLogger(__name__)


@dataclass
class StepDraft:
    """Mutable builder for one step while its fields are being collected."""

    description: str
    action_kind: ActionKind
    target_text: Optional[str] = None
    target_role: Optional[str] = None
    target_name: Optional[str] = None
    fill_value: Optional[str] = None
    assertion_kind: Optional[AssertionKind] = None
    assertion_expected: Optional[str] = None
    navigate_target: Optional[str] = None
    screenshot_name: Optional[str] = None
    custom_statement: Optional[str] = None


def _present(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


class StepEncoder:
    """Validates step drafts and normalizes target descriptors."""

    def __init__(self, separate_target_fields: bool = True):
        """Initialize the step encoder.

        Args:
            separate_target_fields: Read the target from ``target_role`` and
                ``target_name`` instead of splitting ``target_text``
        """
        self.separate_target_fields = separate_target_fields

    @property
    def target_field(self) -> str:
        """Draft field that carries the mandatory part of a target."""
        return "target_role" if self.separate_target_fields else "target_text"

    @staticmethod
    def parse_target(raw: str) -> TargetDescriptor:
        """Split a ``"role name"`` string at the first whitespace.

        ``"button Submit"`` gives role ``button`` and name ``Submit``;
        ``"textbox"`` gives an empty name, which matches by role only.
        """
        parts = raw.strip().split(None, 1)
        role = parts[0] if parts else ""
        name = parts[1].strip() if len(parts) > 1 else ""
        return TargetDescriptor(role=role, accessible_name=name)

    def encode(self, draft: StepDraft) -> Step:
        """Validate a draft and build the step.

        Args:
            draft: Raw values collected for the step

        Returns:
            Step with only the fields its action kind requires

        Raises:
            MissingFieldError: If a field required by the action kind is empty
        """
        kind = draft.action_kind
        values = {}

        for name in required_fields(kind, draft.assertion_kind):
            if name == "target":
                values["target"] = self._encode_target(draft)
            elif name == "assertion_kind":
                if draft.assertion_kind is None:
                    raise MissingFieldError("assertion_kind", kind.value)
                values["assertion_kind"] = draft.assertion_kind
            else:
                value = getattr(draft, name)
                if not _present(value):
                    logger.debug(
                        f"Step draft missing {name}",
                        extra={"metadata": {"field_name": name, "action_kind": kind.value}},
                    )
                    raise MissingFieldError(name, kind.value)
                values[name] = value.strip()

        step = Step(description=draft.description, action_kind=kind, **values)
        logger.debug(
            f"Encoded {kind.value} step: {step.description}",
            extra={"metadata": {"action_kind": kind.value, "fields": sorted(values)}},
        )
        return step

    def _encode_target(self, draft: StepDraft) -> TargetDescriptor:
        kind = draft.action_kind.value
        if self.separate_target_fields:
            if not _present(draft.target_role):
                raise MissingFieldError("target_role", kind)
            return TargetDescriptor(
                role=draft.target_role.strip(),
                accessible_name=(draft.target_name or "").strip(),
            )

        if not _present(draft.target_text):
            raise MissingFieldError("target_text", kind)
        return self.parse_target(draft.target_text)
