"""
Anthropic/Claude response parser.

Claude messages carry an ordered ``content`` array of typed blocks:
{
    "id": "msg_...",
    "model": "claude-3-5-sonnet-20241022",
    "content": [
        {"type": "thinking", "thinking": "...", "signature": "..."},
        {"type": "text", "text": "..."},
        {"type": "tool_use", "id": "...", "name": "...", "input": {...}}
    ]
}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from adaptogen.exceptions import MissingFieldError, ParseError
from adaptogen.parsers.base import ModelResponseParser, load_json, require_str
from adaptogen.types import (
    ContentBlock,
    ContentFrame,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolResultContent,
    ToolUseBlock,
)

logger = logging.getLogger(__name__)


class ClaudeResponseParser(ModelResponseParser):
    """Parser for the Anthropic Messages response format.

    Handles the bare ``claude`` identifier and any dated ``claude-*`` model
    name. Blocks of an unknown type, or known blocks missing a field, are
    skipped unless the parser is strict.
    """

    MODEL_PREFIX = "claude-"

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Raise instead of skipping unrecognized or malformed blocks
        """
        self.strict = strict

    def supported_models(self) -> List[str]:
        return ["claude"]

    def can_handle(self, model: str) -> bool:
        return super().can_handle(model) or model.startswith(self.MODEL_PREFIX)

    def parse(self, raw_response: str) -> ContentFrame:
        data = load_json(raw_response)

        message_id = require_str(data, "id")
        model = require_str(data, "model")

        blocks: List[ContentBlock] = []
        content = data.get("content")
        if isinstance(content, list):
            for item in content:
                block = self._convert_block(item)
                if block is not None:
                    blocks.append(block)

        return ContentFrame(id=message_id, model=model, blocks=tuple(blocks))

    def _convert_block(self, item: Any) -> Optional[ContentBlock]:
        block_type = item.get("type") if isinstance(item, dict) else None

        try:
            if block_type == "text":
                return TextBlock(text=require_str(item, "text"))

            if block_type == "tool_use":
                if "input" not in item:
                    raise MissingFieldError("input")
                return ToolUseBlock(
                    id=require_str(item, "id"),
                    name=require_str(item, "name"),
                    input=item["input"],
                )

            if block_type == "tool_result":
                return ToolResultBlock(
                    tool_use_id=require_str(item, "tool_use_id"),
                    content=tuple(_tool_result_content(item.get("content"))),
                    is_error=_is_error_flag(item),
                )

            if block_type == "thinking":
                return ThinkingBlock(
                    thinking=_optional_str(item.get("thinking")),
                    signature=_optional_str(item.get("signature")),
                )

            if block_type == "redacted_thinking":
                # Reasoning withheld by the provider; keep its position only
                return ThinkingBlock()

        except MissingFieldError:
            if self.strict:
                raise
            logger.debug(f"Skipping malformed {block_type} block")
            return None

        if self.strict:
            raise ParseError(f"Unknown content block type: {block_type}")
        logger.debug(f"Skipping unsupported content block type: {block_type}")
        return None


def _tool_result_content(content: Any) -> List[ToolResultContent]:
    """Flatten tool result content, given as a string or a list of text blocks."""
    if isinstance(content, str):
        return [ToolResultContent(content=content)]

    results: List[ToolResultContent] = []
    if isinstance(content, list):
        for part in content:
            if isinstance(part, str):
                results.append(ToolResultContent(content=part))
            elif isinstance(part, dict):
                text = _first_str(part, ("text", "content"))
                if text is not None:
                    results.append(ToolResultContent(content=text))
    return results


def _is_error_flag(item: Dict[str, Any]) -> bool:
    """Read ``is_error``, which defaults to False only when the key is absent."""
    if "is_error" not in item:
        return False
    value = item["is_error"]
    if not isinstance(value, bool):
        raise MissingFieldError("is_error")
    return value


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _first_str(part: Dict[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = part.get(key)
        if isinstance(value, str):
            return value
    return None
