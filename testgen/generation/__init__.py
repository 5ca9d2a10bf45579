"""
Test generation components for creating Playwright TypeScript spec files.
"""

from .assembler import SuiteAssembler, SuiteWriter
from .encoder import StepDraft, StepEncoder
from .generator import CodeGenerator
from .models import (
    ActionKind,
    AssertionKind,
    GeneratedSpecFile,
    Step,
    Suite,
    TargetDescriptor,
    TestCase,
    TestCategory,
)

__all__ = [
    "SuiteAssembler",
    "SuiteWriter",
    "StepDraft",
    "StepEncoder",
    "CodeGenerator",
    "ActionKind",
    "AssertionKind",
    "GeneratedSpecFile",
    "Step",
    "Suite",
    "TargetDescriptor",
    "TestCase",
    "TestCategory",
]
