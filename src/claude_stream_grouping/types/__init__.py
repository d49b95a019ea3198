"""Type definitions for claude_stream_grouping."""

from claude_stream_grouping.types.messages import (
    ContentItem,
    MessageType,
    StreamMessage,
    TextItem,
    ThinkingItem,
    TokenUsage,
    ToolResultItem,
    ToolUseItem,
    UnknownItem,
)
from claude_stream_grouping.types.groups import (
    AggregatedGroup,
    GroupType,
    NormalGroup,
    RenderGroup,
    SubagentGroup,
    SubagentRenderGroup,
)

__all__ = [
    "ContentItem",
    "MessageType",
    "StreamMessage",
    "TextItem",
    "ThinkingItem",
    "TokenUsage",
    "ToolResultItem",
    "ToolUseItem",
    "UnknownItem",
    "AggregatedGroup",
    "GroupType",
    "NormalGroup",
    "RenderGroup",
    "SubagentGroup",
    "SubagentRenderGroup",
]
