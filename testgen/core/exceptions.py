"""
Base exception classes for the Playwright test generator.

Provides a hierarchy of exceptions for the error types that can occur while
collecting a suite description and writing the generated spec file.
"""

from typing import Optional, Dict, Any


class TestGenError(Exception):
    """Base exception class for all test generator errors."""

    __test__ = False

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }


class ValidationError(TestGenError):
    """Raised when configuration or model validation fails."""

    def __init__(
        self,
        message: str,
        validation_type: Optional[str] = None,
        violations: Optional[list] = None,
    ):
        super().__init__(message, "VALIDATION_FAILED")
        self.validation_type = validation_type
        self.violations = violations or []
        self.context.update(
            {
                "validation_type": validation_type,
                "violations": violations,
            }
        )


class MissingFieldError(TestGenError):
    """Raised when a step is missing a field its action kind requires.

    The collector catches this and asks for ``field_name`` again; it never
    reaches the operator as a failure.
    """

    def __init__(self, field_name: str, action_kind: Optional[str] = None):
        super().__init__(
            f"Missing required field '{field_name}'", "MISSING_FIELD"
        )
        self.field_name = field_name
        self.action_kind = action_kind
        self.context.update(
            {
                "field_name": field_name,
                "action_kind": action_kind,
            }
        )


class FileOperationError(TestGenError):
    """Raised when file system operations fail."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message, "FILE_OPERATION_FAILED")
        self.file_path = file_path
        self.operation = operation
        self.context.update(
            {
                "file_path": file_path,
                "operation": operation,
            }
        )


class TemplateRenderError(TestGenError):
    """Raised when the suite template cannot be loaded or rendered."""

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
    ):
        super().__init__(message, "TEMPLATE_RENDER_FAILED")
        self.template_name = template_name
        self.context.update({"template_name": template_name})
