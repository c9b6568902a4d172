"""
Normalized response model.

Every provider response is translated into a ContentFrame holding an ordered
sequence of content blocks. The block variants form a closed set; each is a
frozen dataclass identified on the wire by its ``type`` tag:

    text, tool_use, tool_result, thinking

Encoding omits optional fields that are unset, so decoding the encoding of
any value yields an equal value.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from adaptogen.exceptions import InvalidJSONError, MissingFieldError, ParseError

TAG_FIELD = "type"


def _require(data: Dict[str, Any], name: str, expected: type = str) -> Any:
    value = data.get(name)
    if not isinstance(value, expected):
        raise MissingFieldError(name)
    return value


@dataclass(frozen=True)
class TextBlock:
    """Plain model output."""

    type: ClassVar[str] = "text"

    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {TAG_FIELD: self.type, "text": self.text}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TextBlock:
        return cls(text=_require(data, "text"))


@dataclass(frozen=True)
class ToolUseBlock:
    """A tool/function invocation requested by the model.

    Attributes:
        id: Identifier unique within the frame, echoed by the matching ToolResultBlock
        name: Name of the tool being called
        input: Arbitrary JSON value with the call arguments
    """

    type: ClassVar[str] = "tool_use"

    id: str
    name: str
    input: Any

    def to_dict(self) -> Dict[str, Any]:
        return {TAG_FIELD: self.type, "id": self.id, "name": self.name, "input": self.input}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ToolUseBlock:
        if "input" not in data:
            raise MissingFieldError("input")
        return cls(
            id=_require(data, "id"),
            name=_require(data, "name"),
            input=data["input"],
        )


@dataclass(frozen=True)
class ToolResultContent:
    """One chunk of tool output inside a ToolResultBlock."""

    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content}

    @classmethod
    def from_dict(cls, data: Any) -> ToolResultContent:
        if not isinstance(data, dict):
            raise MissingFieldError("content")
        return cls(content=_require(data, "content"))


@dataclass(frozen=True)
class ToolResultBlock:
    """Execution output for a prior ToolUseBlock.

    ``tool_use_id`` is expected to reference a ToolUseBlock emitted earlier;
    the reference is not checked here.
    """

    type: ClassVar[str] = "tool_result"

    tool_use_id: str
    content: Tuple[ToolResultContent, ...] = ()
    is_error: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", tuple(self.content))

    def to_dict(self) -> Dict[str, Any]:
        return {
            TAG_FIELD: self.type,
            "tool_use_id": self.tool_use_id,
            "content": [item.to_dict() for item in self.content],
            "is_error": self.is_error,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ToolResultBlock:
        return cls(
            tool_use_id=_require(data, "tool_use_id"),
            content=tuple(
                ToolResultContent.from_dict(item) for item in _require(data, "content", list)
            ),
            is_error=_require(data, "is_error", bool),
        )


@dataclass(frozen=True)
class ThinkingBlock:
    """Internal reasoning exposed by providers that support it."""

    type: ClassVar[str] = "thinking"

    thinking: Optional[str] = None
    signature: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {TAG_FIELD: self.type}

        if self.thinking is not None:
            result["thinking"] = self.thinking

        if self.signature is not None:
            result["signature"] = self.signature

        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ThinkingBlock:
        for name in ("thinking", "signature"):
            if data.get(name) is not None and not isinstance(data[name], str):
                raise MissingFieldError(name)
        return cls(thinking=data.get("thinking"), signature=data.get("signature"))


ContentBlock = Union[TextBlock, ToolUseBlock, ToolResultBlock, ThinkingBlock]

BLOCK_TYPES: Dict[str, type] = {
    TextBlock.type: TextBlock,
    ToolUseBlock.type: ToolUseBlock,
    ToolResultBlock.type: ToolResultBlock,
    ThinkingBlock.type: ThinkingBlock,
}


def content_block_from_dict(data: Any) -> ContentBlock:
    """Decode a content block from its generic JSON form.

    Args:
        data: Mapping carrying a ``type`` tag and the variant's fields

    Returns:
        The decoded block

    Raises:
        MissingFieldError: If the tag or a required field is absent or mistyped
        ParseError: If the tag names no known block type
    """
    if not isinstance(data, dict):
        raise ParseError("Content block must be a JSON object")

    tag = _require(data, TAG_FIELD)
    block_cls = BLOCK_TYPES.get(tag)
    if block_cls is None:
        raise ParseError(f"Unknown content block type: {tag}")

    return block_cls.from_dict(data)


@dataclass(frozen=True)
class ContentFrame:
    """The normalized representation of one model response.

    Attributes:
        id: Provider message identifier
        model: Model identifier reported by the provider
        blocks: Content blocks in response order (may be empty)
    """

    id: str
    model: str
    blocks: Tuple[ContentBlock, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))

    @property
    def text(self) -> str:
        """All text blocks joined with newlines."""
        return "\n".join(block.text for block in self.blocks if isinstance(block, TextBlock))

    @property
    def tool_uses(self) -> Tuple[ToolUseBlock, ...]:
        return tuple(block for block in self.blocks if isinstance(block, ToolUseBlock))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "model": self.model,
            "blocks": [block.to_dict() for block in self.blocks],
        }

    @classmethod
    def from_dict(cls, data: Any) -> ContentFrame:
        if not isinstance(data, dict):
            raise ParseError("Content frame must be a JSON object")

        blocks = data.get("blocks", [])
        if not isinstance(blocks, list):
            raise MissingFieldError("blocks")

        return cls(
            id=_require(data, "id"),
            model=_require(data, "model"),
            blocks=tuple(content_block_from_dict(block) for block in blocks),
        )

    def to_json(self, **kwargs: Any) -> str:
        """Serialize to a JSON string; keyword arguments go to ``json.dumps``."""
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls, raw: str) -> ContentFrame:
        try:
            data = json.loads(raw)
        except (ValueError, TypeError, RecursionError) as e:
            raise InvalidJSONError(str(e), original_error=e) from e
        return cls.from_dict(data)
