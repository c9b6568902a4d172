"""
Test configuration and fixtures for adaptogen tests.
"""
import json
import os
import sys

import pytest

# Add parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from adaptogen.types import ContentFrame, TextBlock
from adaptogen.parsers.base import ModelResponseParser


class StubParser(ModelResponseParser):
    """Configurable parser recording every call it receives."""

    def __init__(self, models, label="stub", error=None):
        self.models = list(models)
        self.label = label
        self.error = error
        self.calls = []

    def supported_models(self):
        return list(self.models)

    def parse(self, raw_response):
        self.calls.append(raw_response)
        if self.error is not None:
            raise self.error
        data = json.loads(raw_response)
        return ContentFrame(
            id=data.get("id", "stub_id"),
            model=data["model"],
            blocks=(TextBlock(text=self.label),),
        )


@pytest.fixture
def stub_parser_factory():
    """Factory for StubParser instances."""
    return StubParser


@pytest.fixture
def claude_response():
    """Claude response carrying every supported block type."""
    return json.dumps({
        "id": "msg_01",
        "type": "message",
        "role": "assistant",
        "model": "claude-3-5-sonnet-20241022",
        "content": [
            {"type": "thinking", "thinking": "Check the weather tool.", "signature": "sig_abc"},
            {"type": "text", "text": "Let me look that up."},
            {"type": "tool_use", "id": "toolu_01", "name": "get_weather", "input": {"city": "Paris"}},
            {
                "type": "tool_result",
                "tool_use_id": "toolu_01",
                "content": [{"type": "text", "text": "18C and sunny"}],
                "is_error": False,
            },
        ],
        "stop_reason": "tool_use",
        "usage": {"input_tokens": 100, "output_tokens": 50},
    })


@pytest.fixture
def qwen_tool_call_response():
    """Fireworks-hosted Qwen response with reasoning and a tool call."""
    return json.dumps({
        "id": "example-id",
        "object": "chat.completion",
        "created": 1746977262,
        "model": "accounts/fireworks/models/qwen3-30b-a3b",
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": "<think>\nThe user wants the capital of France. Call search_capital.\n</think>\n\n",
                    "tool_calls": [
                        {
                            "index": 0,
                            "id": "call_Qi2Is8SYTdRWjAToAViVLGeE",
                            "type": "function",
                            "function": {
                                "name": "search_capital",
                                "arguments": "{\"country\": \"France\"}",
                            },
                        }
                    ],
                },
                "finish_reason": "tool_calls",
            }
        ],
        "usage": {"prompt_tokens": 172, "total_tokens": 290, "completion_tokens": 118},
    })
