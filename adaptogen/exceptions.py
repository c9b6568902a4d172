"""
Exception hierarchy for response normalization.

Every failure raised while turning a raw provider response into a
ContentFrame is a ParseError, so callers can branch on the concrete class
(or on ``kind``) instead of inspecting messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ParseErrorKind(Enum):
    """Classification of parse failures."""
    INVALID_JSON = "invalid_json"
    MISSING_FIELD = "missing_field"
    UNSUPPORTED_MODEL = "unsupported_model"
    OTHER = "other"


class ParseError(Exception):
    """Base exception for all parsing errors.

    Raised directly for translator-defined failures that none of the
    subclasses describe (internal consistency checks, unknown block types
    in strict mode, ...).
    """

    kind = ParseErrorKind.OTHER

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Parsing error: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary representation."""
        return {
            "error_type": self.__class__.__name__,
            "kind": self.kind.value,
            "message": self.message,
        }


class InvalidJSONError(ParseError):
    """The raw response is not syntactically valid JSON."""

    kind = ParseErrorKind.INVALID_JSON

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error

    def __str__(self) -> str:
        return f"Invalid JSON: {self.message}"


class MissingFieldError(ParseError):
    """A required field is absent or has the wrong type.

    Attributes:
        field: Name of the offending field
    """

    kind = ParseErrorKind.MISSING_FIELD

    def __init__(self, field: str):
        super().__init__(field)
        self.field = field

    def __str__(self) -> str:
        return f"Missing field: {self.field}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field
        return data


class UnsupportedModelError(ParseError):
    """No registered parser claims the model identifier.

    Attributes:
        model: The model identifier extracted from the response
    """

    kind = ParseErrorKind.UNSUPPORTED_MODEL

    def __init__(self, model: str):
        super().__init__(model)
        self.model = model

    def __str__(self) -> str:
        return f"Unsupported model: {self.model}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["model"] = self.model
        return data
