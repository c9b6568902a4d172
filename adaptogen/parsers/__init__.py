"""
Response parser infrastructure.

Provides the parser contract, the dispatching registry and the bundled
provider parsers.
"""

from __future__ import annotations

from typing import Optional

from adaptogen.config import AdaptogenConfig
from adaptogen.parsers.base import ModelResponseParser, load_json, require_str
from adaptogen.parsers.anthropic import ClaudeResponseParser
from adaptogen.parsers.qwen import QwenResponseParser
from adaptogen.parsers.registry import ParserRegistry


def create_default_registry(config: Optional[AdaptogenConfig] = None) -> ParserRegistry:
    """Build a registry holding the bundled parsers.

    Args:
        config: Settings controlling parser strictness; defaults from environment

    Returns:
        ParserRegistry with the Qwen and Claude parsers registered, in that order
    """
    config = config or AdaptogenConfig.create_default()
    return ParserRegistry([
        QwenResponseParser(strict=config.strict_blocks),
        ClaudeResponseParser(strict=config.strict_blocks),
    ])


__all__ = [
    "ModelResponseParser",
    "ParserRegistry",
    "ClaudeResponseParser",
    "QwenResponseParser",
    "create_default_registry",
    "load_json",
    "require_str",
]
