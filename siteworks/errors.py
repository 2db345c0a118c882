"""
Siteworks - Core Error Types

Defines the exception hierarchy for the siteworks runtime.
All exceptions inherit from SiteworksError for consistent error handling.

Read paths never raise for missing records: "not found" is represented
by a None result. Repository failures are not wrapped and propagate
to the caller unchanged.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError


class SiteworksError(Exception):
    """Base exception for all siteworks errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(SiteworksError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=500)


class ValidationError(SiteworksError):
    """Raised when a model fails its declared validation rules."""

    def __init__(self, message: str, details: dict[str, Any] | None = None, status_code: int = 400):
        super().__init__(message, details, status_code=status_code)

    @classmethod
    def from_pydantic(cls, model_name: str, error: PydanticValidationError) -> "ValidationError":
        """
        Build a ValidationError from a pydantic validation failure.

        Args:
            model_name: Name of the model that failed validation
            error: The pydantic error

        Returns:
            ValidationError with one entry per failing field
        """
        validation_errors = []
        for item in error.errors():
            field_path = " -> ".join(str(loc) for loc in item["loc"])
            validation_errors.append(
                {
                    "field": field_path,
                    "message": item["msg"],
                    "type": item["type"],
                }
            )

        return cls(
            f"Validation failed for {model_name}",
            details={"model": model_name, "validation_errors": validation_errors},
        )


class UniquenessError(ValidationError):
    """Raised when a value that must be unique is already taken."""

    def __init__(self, field: str, value: str, owner_id: str | None = None):
        message = f"The {field} field must be unique"
        details: dict[str, Any] = {"field": field, "value": value}
        if owner_id is not None:
            details["owner_id"] = owner_id
        super().__init__(message, details, status_code=409)
        self.field = field
        self.value = value
