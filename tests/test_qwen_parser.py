"""
Tests for adaptogen.parsers.qwen
"""
import json

import pytest

from adaptogen.exceptions import MissingFieldError
from adaptogen.parsers.qwen import QwenResponseParser, decode_arguments, split_thinking
from adaptogen.types import TextBlock, ThinkingBlock, ToolUseBlock


def make_response(message, model="qwen"):
    return json.dumps({"id": "q1", "model": model, "choices": [{"message": message}]})


class TestSplitThinking:
    """Splitting inline <think> reasoning from the answer."""

    def test_thinking_and_text(self):
        assert split_thinking("<think>reasoning</think>answer") == [
            ThinkingBlock(thinking="reasoning"),
            TextBlock(text="answer"),
        ]

    def test_whitespace_trimmed(self):
        assert split_thinking("<think>\n  plan  \n</think>\n\n  reply \n") == [
            ThinkingBlock(thinking="plan"),
            TextBlock(text="reply"),
        ]

    def test_thinking_only(self):
        assert split_thinking("<think>just thinking</think>\n\n") == [
            ThinkingBlock(thinking="just thinking"),
        ]

    def test_plain_text(self):
        assert split_thinking("Hello from Qwen!") == [TextBlock(text="Hello from Qwen!")]

    def test_close_tag_without_open_tag(self):
        assert split_thinking("prefix</think>answer") == [TextBlock(text="answer")]

    def test_unclosed_think_is_text(self):
        assert split_thinking("<think>never closed") == [TextBlock(text="<think>never closed")]

    def test_empty_content(self):
        assert split_thinking("   ") == []


class TestDecodeArguments:
    """Decoding tool call arguments."""

    def test_json_string(self):
        assert decode_arguments('{"country": "France"}') == {"country": "France"}

    def test_invalid_json_kept_raw(self):
        assert decode_arguments("country=France") == {"raw": "country=France"}

    def test_too_deeply_nested_kept_raw(self):
        arguments = "[" * 100000 + "]" * 100000
        assert decode_arguments(arguments) == {"raw": arguments}

    def test_already_decoded(self):
        assert decode_arguments({"a": 1}) == {"a": 1}


class TestQwenResponseParser:
    """Test suite for QwenResponseParser."""

    def test_supported_models(self):
        parser = QwenResponseParser()

        assert parser.can_handle("qwen")
        assert parser.can_handle("accounts/fireworks/models/qwen3-30b-a3b")
        assert not parser.can_handle("qwen3")

    def test_tool_call_response(self, qwen_tool_call_response):
        frame = QwenResponseParser().parse(qwen_tool_call_response)

        assert frame.id == "example-id"
        assert frame.model == "accounts/fireworks/models/qwen3-30b-a3b"
        assert frame.blocks == (
            ThinkingBlock(thinking="The user wants the capital of France. Call search_capital."),
            ToolUseBlock(
                id="call_Qi2Is8SYTdRWjAToAViVLGeE",
                name="search_capital",
                input={"country": "France"},
            ),
        )

    def test_only_first_choice_used(self):
        raw = json.dumps({
            "id": "q1",
            "model": "qwen",
            "choices": [
                {"message": {"content": "first"}},
                {"message": {"content": "second"}},
            ],
        })

        assert QwenResponseParser().parse(raw).blocks == (TextBlock(text="first"),)

    def test_null_content_with_tool_calls(self):
        raw = make_response({
            "content": None,
            "tool_calls": [{"id": "c1", "function": {"name": "f", "arguments": "{}"}}],
        })

        assert QwenResponseParser().parse(raw).blocks == (ToolUseBlock(id="c1", name="f", input={}),)

    def test_malformed_tool_call_skipped(self):
        raw = make_response({
            "content": "hi",
            "tool_calls": [
                {"id": "c1"},
                {"id": "c2", "function": {"arguments": "{}"}},
                {"id": "c3", "function": {"name": "ok", "arguments": "[1]"}},
            ],
        })

        frame = QwenResponseParser().parse(raw)

        assert frame.blocks == (TextBlock(text="hi"), ToolUseBlock(id="c3", name="ok", input=[1]))

    def test_strict_rejects_malformed_tool_call(self):
        raw = make_response({"tool_calls": [{"id": "c1", "function": {"arguments": "{}"}}]})

        with pytest.raises(MissingFieldError) as exc_info:
            QwenResponseParser(strict=True).parse(raw)

        assert exc_info.value.field == "name"

    @pytest.mark.parametrize("choices", [None, [], ["x"], [{"message": "x"}]])
    def test_missing_choices_yields_empty_frame(self, choices):
        raw = json.dumps({"id": "q1", "model": "qwen", "choices": choices})

        assert QwenResponseParser().parse(raw).blocks == ()

    def test_missing_id(self):
        raw = json.dumps({"model": "qwen", "choices": []})

        with pytest.raises(MissingFieldError) as exc_info:
            QwenResponseParser().parse(raw)

        assert exc_info.value.field == "id"
