"""
adaptogen: normalize LLM provider responses.

Translates the differently shaped JSON responses of LLM providers into one
ContentFrame model so downstream code never branches on the provider.

    >>> from adaptogen import create_default_registry
    >>> registry = create_default_registry()
    >>> frame = registry.parse(raw_response)
    >>> frame.blocks
"""

from __future__ import annotations

from adaptogen.types import (
    ContentBlock,
    ContentFrame,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolResultContent,
    ToolUseBlock,
    content_block_from_dict,
)
from adaptogen.exceptions import (
    InvalidJSONError,
    MissingFieldError,
    ParseError,
    ParseErrorKind,
    UnsupportedModelError,
)
from adaptogen.config import AdaptogenConfig
from adaptogen.parsers import (
    ClaudeResponseParser,
    ModelResponseParser,
    ParserRegistry,
    QwenResponseParser,
    create_default_registry,
)

__version__ = "0.1.0"


def parse(raw_response: str) -> ContentFrame:
    """Parse a raw response with a freshly built default registry."""
    return create_default_registry().parse(raw_response)


__all__ = [
    # Types
    "ContentBlock",
    "ContentFrame",
    "TextBlock",
    "ThinkingBlock",
    "ToolResultBlock",
    "ToolResultContent",
    "ToolUseBlock",
    "content_block_from_dict",
    # Exceptions
    "InvalidJSONError",
    "MissingFieldError",
    "ParseError",
    "ParseErrorKind",
    "UnsupportedModelError",
    # Config
    "AdaptogenConfig",
    # Parsers
    "ClaudeResponseParser",
    "ModelResponseParser",
    "ParserRegistry",
    "QwenResponseParser",
    "create_default_registry",
    "parse",
]
