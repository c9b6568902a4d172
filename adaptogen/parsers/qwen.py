"""
Qwen (OpenAI-compatible chat completion) response parser.

Qwen responses follow the OpenAI chat completion shape. Reasoning is inlined
at the start of the message content as ``<think>...</think>``:
{
    "id": "...",
    "model": "qwen",
    "choices": [
        {
            "message": {
                "content": "<think>reasoning</think>answer",
                "tool_calls": [
                    {
                        "id": "...",
                        "function": {
                            "name": "...",
                            "arguments": "{...}"  # JSON string
                        }
                    }
                ]
            }
        }
    ]
}
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from adaptogen.exceptions import MissingFieldError
from adaptogen.parsers.base import ModelResponseParser, load_json, require_str
from adaptogen.types import ContentBlock, ContentFrame, TextBlock, ThinkingBlock, ToolUseBlock

logger = logging.getLogger(__name__)

THINK_OPEN = "<think>"
THINK_CLOSE = "</think>"


def split_thinking(content: str) -> List[ContentBlock]:
    """Split message content into an optional thinking block and a text block.

    A thinking block is produced only when the content starts with
    ``<think>`` and contains ``</think>``. The text block holds whatever
    follows the last ``</think>``, trimmed, and is dropped if empty.

    Args:
        content: Raw assistant message content

    Returns:
        Zero, one or two blocks in order
    """
    blocks: List[ContentBlock] = []

    thinking_end = content.find(THINK_CLOSE)
    if thinking_end != -1 and content.startswith(THINK_OPEN):
        thinking = content[len(THINK_OPEN):thinking_end].strip()
        blocks.append(ThinkingBlock(thinking=thinking))

    text = content.split(THINK_CLOSE)[-1].strip()
    if text:
        blocks.append(TextBlock(text=text))

    return blocks


def decode_arguments(arguments: Any) -> Any:
    """Decode tool call arguments sent as a JSON string.

    Arguments that are not valid JSON are preserved as ``{"raw": arguments}``.
    """
    if not isinstance(arguments, str):
        return arguments
    try:
        return json.loads(arguments)
    except (ValueError, RecursionError):
        logger.warning(f"Failed to parse tool arguments: {arguments}")
        return {"raw": arguments}


class QwenResponseParser(ModelResponseParser):
    """Parser for Qwen models served through OpenAI-compatible endpoints.

    Only the first choice is read. Malformed tool calls are skipped unless
    the parser is strict.
    """

    MODELS = (
        "qwen",
        "accounts/fireworks/models/qwen3-30b-a3b",
    )

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Raise instead of skipping malformed tool calls
        """
        self.strict = strict

    def supported_models(self) -> List[str]:
        return list(self.MODELS)

    def parse(self, raw_response: str) -> ContentFrame:
        data = load_json(raw_response)

        message_id = require_str(data, "id")
        model = require_str(data, "model")

        blocks: List[ContentBlock] = []
        message = _first_message(data)
        if message is not None:
            content = message.get("content")
            if isinstance(content, str):
                blocks.extend(split_thinking(content))

            tool_calls = message.get("tool_calls")
            if isinstance(tool_calls, list):
                for tool_call in tool_calls:
                    block = self._convert_tool_call(tool_call)
                    if block is not None:
                        blocks.append(block)

        return ContentFrame(id=message_id, model=model, blocks=tuple(blocks))

    def _convert_tool_call(self, tool_call: Any) -> Optional[ToolUseBlock]:
        try:
            function = tool_call.get("function") if isinstance(tool_call, dict) else None
            if not isinstance(function, dict):
                raise MissingFieldError("function")
            if "arguments" not in function:
                raise MissingFieldError("arguments")

            return ToolUseBlock(
                id=require_str(tool_call, "id"),
                name=require_str(function, "name"),
                input=decode_arguments(function["arguments"]),
            )
        except MissingFieldError as e:
            if self.strict:
                raise
            logger.debug(f"Skipping malformed tool call: {e}")
            return None


def _first_message(data: Any) -> Optional[dict]:
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    return message if isinstance(message, dict) else None
