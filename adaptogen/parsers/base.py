"""
Base class for provider response parsers.

Defines the contract every provider-specific translator implements.
Each provider subclasses ModelResponseParser with its own parsing logic
and is then registered with a ParserRegistry.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, List

from adaptogen.exceptions import InvalidJSONError, MissingFieldError
from adaptogen.types import ContentFrame


def load_json(raw_response: str) -> Any:
    """Decode a raw response, raising InvalidJSONError for anything json cannot decode."""
    try:
        return json.loads(raw_response)
    except (ValueError, TypeError, RecursionError) as e:
        raise InvalidJSONError(str(e), original_error=e) from e


def require_str(data: Any, field: str) -> str:
    """Return ``data[field]`` if it is a string.

    Raises:
        MissingFieldError: If data is not an object, or the field is absent or not a string
    """
    value = data.get(field) if isinstance(data, dict) else None
    if not isinstance(value, str):
        raise MissingFieldError(field)
    return value


class ModelResponseParser(ABC):
    """Abstract base class for provider response translators.

    Implementations must be pure: ``parse`` may be called concurrently from
    several threads, so a parser must not mutate its own state while parsing.
    Configuration passed at construction time is fine as long as it is never
    changed afterwards.

    Failure semantics:
    - raise a ParseError subclass, never a bare exception, when a structurally
      required field is absent or malformed
    - never substitute a default for ``id`` or ``model``
    - content that cannot be recognized (e.g. an unknown nested block type)
      may be skipped
    """

    @property
    def name(self) -> str:
        """Parser name used in log output."""
        return self.__class__.__name__

    @abstractmethod
    def supported_models(self) -> List[str]:
        """
        Model identifiers this parser handles.

        Called on every dispatch attempt, so it must be cheap and deterministic.

        Returns:
            List of model identifier strings
        """
        pass

    def can_handle(self, model: str) -> bool:
        """
        Check whether this parser claims the given model identifier.

        Default implementation is an exact, case-sensitive membership test
        against supported_models(). Override for prefix or pattern matching.

        Args:
            model: Model identifier extracted from the response

        Returns:
            True if this parser should handle the response
        """
        return model in self.supported_models()

    @abstractmethod
    def parse(self, raw_response: str) -> ContentFrame:
        """
        Parse a complete raw response into a ContentFrame.

        Args:
            raw_response: Raw JSON response text from the provider

        Returns:
            The normalized frame

        Raises:
            ParseError: If the response cannot be normalized
        """
        pass

    def __repr__(self) -> str:
        return f"{self.name}(models={self.supported_models()!r})"
