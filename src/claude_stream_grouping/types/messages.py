"""Message-level types for the stream transcript."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union


class MessageType(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    RESULT = "result"
    SUMMARY = "summary"
    THINKING = "thinking"
    TOOL_USE = "tool_use"
    FILE_HISTORY = "file-history-snapshot"
    QUEUE_OP = "queue-operation"


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_input_tokens: int = 0
    cache_creation_input_tokens: int = 0

    @property
    def total(self) -> int:
        return (self.input_tokens + self.output_tokens +
                self.cache_read_input_tokens + self.cache_creation_input_tokens)


@dataclass(frozen=True)
class TextItem:
    text: str = ""
    type: str = field(default="text", init=False)


@dataclass(frozen=True)
class ToolUseItem:
    id: str = ""
    name: str = ""
    input: dict = field(default_factory=dict)
    type: str = field(default="tool_use", init=False)


@dataclass(frozen=True)
class ToolResultItem:
    tool_use_id: str = ""
    content: Any = None  # str or list
    is_error: bool = False
    type: str = field(default="tool_result", init=False)


@dataclass(frozen=True)
class ThinkingItem:
    text: str = ""
    type: str = field(default="thinking", init=False)


@dataclass(frozen=True)
class UnknownItem:
    """Any content block the engine does not interpret (images, documents...)."""
    type: str
    data: dict = field(default_factory=dict)


ContentItem = Union[TextItem, ToolUseItem, ToolResultItem, ThinkingItem, UnknownItem]


@dataclass(frozen=True)
class StreamMessage:
    type: MessageType
    content: Union[str, tuple[ContentItem, ...], None] = None
    id: Optional[str] = None
    uuid: Optional[str] = None
    timestamp: Optional[datetime] = None
    role: str = ""
    model: str = ""
    parent_tool_use_id: Optional[str] = None
    is_sidechain: bool = False
    usage: Optional[TokenUsage] = None

    @property
    def items(self) -> tuple[ContentItem, ...]:
        """Content items, or an empty tuple for plain-text/missing content."""
        if isinstance(self.content, (list, tuple)):
            return tuple(self.content)
        return ()
