"""
Tests for adaptogen.parsers.base.ModelResponseParser
"""
import pytest

from adaptogen.exceptions import InvalidJSONError, MissingFieldError, ParseError
from adaptogen.parsers.base import ModelResponseParser, load_json, require_str
from adaptogen.types import ContentFrame, TextBlock


class MockParser(ModelResponseParser):
    """Mock parser for testing."""

    def __init__(self, supported):
        self.supported = supported

    def supported_models(self):
        return list(self.supported)

    def parse(self, raw_response):
        if "mock" not in raw_response:
            raise ParseError("Expected mock in response")
        return ContentFrame(
            id="mock_id",
            model="mock_model",
            blocks=[TextBlock(text="Mocked response")],
        )


class PrefixParser(MockParser):
    """Parser overriding can_handle with prefix matching."""

    def can_handle(self, model):
        return model.startswith("gpt-")


class TestModelResponseParser:
    """Test suite for the parser contract."""

    def test_can_handle_exact_membership(self):
        parser = MockParser(["model1", "model2"])

        assert parser.can_handle("model1")
        assert parser.can_handle("model2")
        assert not parser.can_handle("model3")

    def test_can_handle_is_case_sensitive(self):
        parser = MockParser(["Model1"])

        assert parser.can_handle("Model1")
        assert not parser.can_handle("model1")
        assert not parser.can_handle("Model1-extra")

    def test_can_handle_override(self):
        parser = PrefixParser([])

        assert parser.can_handle("gpt-4o")
        assert not parser.can_handle("claude")

    def test_parse_success(self):
        frame = MockParser(["mock_model"]).parse("mock response data")

        assert frame.id == "mock_id"
        assert frame.model == "mock_model"
        assert len(frame.blocks) == 1

    def test_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            MockParser(["mock_model"]).parse("not containing expected keyword")

        assert exc_info.value.message == "Expected mock in response"

    def test_abstract_methods_required(self):
        class Incomplete(ModelResponseParser):
            def supported_models(self):
                return []

        with pytest.raises(TypeError):
            Incomplete()

    def test_name_and_repr(self):
        parser = MockParser(["a"])

        assert parser.name == "MockParser"
        assert repr(parser) == "MockParser(models=['a'])"


class TestHelpers:
    """Shared translator helpers."""

    def test_load_json(self):
        assert load_json('{"a": 1}') == {"a": 1}

    def test_load_json_invalid(self):
        with pytest.raises(InvalidJSONError) as exc_info:
            load_json("{broken")
        assert exc_info.value.original_error is not None

    def test_load_json_invalid_utf8(self):
        with pytest.raises(InvalidJSONError) as exc_info:
            load_json(b'{"model": "\xff"}')
        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)

    def test_load_json_too_deeply_nested(self):
        with pytest.raises(InvalidJSONError):
            load_json("[" * 100000 + "]" * 100000)

    def test_require_str(self):
        assert require_str({"id": "x"}, "id") == "x"

    @pytest.mark.parametrize("data", [{}, {"id": 3}, {"id": None}, ["id"]])
    def test_require_str_missing(self, data):
        with pytest.raises(MissingFieldError) as exc_info:
            require_str(data, "id")
        assert exc_info.value.field == "id"
