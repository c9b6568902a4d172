"""
Parser registry.

Dispatches a raw response to the first registered parser that claims the
response's model identifier.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from adaptogen.exceptions import MissingFieldError, UnsupportedModelError
from adaptogen.parsers.base import ModelResponseParser, load_json
from adaptogen.types import ContentFrame

logger = logging.getLogger(__name__)


class ParserRegistry:
    """Ordered collection of response parsers.

    Parsers are checked in registration order and the first one whose
    ``can_handle`` accepts the model wins, so overlapping parsers are allowed
    and earlier registrations take priority. The scan is linear on purpose:
    a parser may claim models by prefix or pattern, which a dict lookup
    cannot express.

    Register every parser before sharing the registry between threads.
    After that the parser list is only read, and ``parse`` is safe to call
    concurrently as long as the registered parsers keep no mutable state of
    their own. Parser thread-safety is the parser author's responsibility.

    Example:
        >>> registry = ParserRegistry()
        >>> registry.register_parser(ClaudeResponseParser())
        >>> frame = registry.parse(raw_response)
    """

    def __init__(self, parsers: Optional[Iterable[ModelResponseParser]] = None):
        """Initialize registry.

        Args:
            parsers: Optional parsers to register, in priority order
        """
        self._parsers: List[ModelResponseParser] = []
        for parser in parsers or ():
            self.register_parser(parser)

    @property
    def parsers(self) -> Tuple[ModelResponseParser, ...]:
        """Registered parsers in priority order."""
        return tuple(self._parsers)

    def __len__(self) -> int:
        return len(self._parsers)

    def __iter__(self) -> Iterator[ModelResponseParser]:
        return iter(self.parsers)

    def register_parser(self, parser: ModelResponseParser) -> None:
        """Append a parser.

        No uniqueness check is made; several parsers may claim the same
        model and the one registered first is used.

        Args:
            parser: Parser implementing the ModelResponseParser contract

        Raises:
            TypeError: If parser does not implement the contract
        """
        if not isinstance(parser, ModelResponseParser):
            raise TypeError(
                f"Expected a ModelResponseParser, got {type(parser).__name__}"
            )

        self._parsers.append(parser)
        logger.debug(f"Registered parser {parser.name} for models {parser.supported_models()}")

    def supported_models(self) -> List[str]:
        """List declared model identifiers across all parsers.

        Returns:
            Model identifiers in registration order, without duplicates
        """
        seen: List[str] = []
        for parser in self._parsers:
            for model in parser.supported_models():
                if model not in seen:
                    seen.append(model)
        return seen

    def find_parser(self, model: str) -> Optional[ModelResponseParser]:
        """Return the first parser that can handle the model, or None."""
        for parser in self._parsers:
            if parser.can_handle(model):
                return parser
        return None

    @staticmethod
    def extract_model(raw_response: str) -> str:
        """Extract the top-level model identifier from a raw response.

        Args:
            raw_response: Raw JSON response text

        Returns:
            The model identifier

        Raises:
            InvalidJSONError: If the response is not valid JSON
            MissingFieldError: If ``model`` is absent or not a string
        """
        data = load_json(raw_response)

        model = data.get("model") if isinstance(data, dict) else None
        if not isinstance(model, str):
            raise MissingFieldError("model")
        return model

    def parse(self, raw_response: str) -> ContentFrame:
        """Parse a raw LLM response.

        1. Extract the model identifier from the response
        2. Find the first parser that can handle it
        3. Hand the complete original response to that parser

        The chosen parser's result or exception is passed through unchanged;
        no other parser is tried if it fails.

        Args:
            raw_response: Raw JSON response text

        Returns:
            The normalized ContentFrame

        Raises:
            InvalidJSONError: If the response is not valid JSON
            MissingFieldError: If ``model`` is missing, or the parser reports a missing field
            UnsupportedModelError: If no registered parser handles the model
            ParseError: Any other failure reported by the selected parser
        """
        model = self.extract_model(raw_response)

        parser = self.find_parser(model)
        if parser is None:
            logger.warning(f"No parser registered for model {model}")
            raise UnsupportedModelError(model)

        logger.debug(f"Dispatching model {model} to {parser.name}")
        return parser.parse(raw_response)
