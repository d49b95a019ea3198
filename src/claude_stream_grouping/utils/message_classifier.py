"""Classify stream messages for subagent grouping and aggregation."""

from dataclasses import dataclass
from typing import Optional

from claude_stream_grouping.config import DEFAULT_OPTIONS, GroupingOptions
from claude_stream_grouping.types.messages import (
    MessageType,
    StreamMessage,
    TextItem,
    ThinkingItem,
    ToolResultItem,
    ToolUseItem,
)

# Item kinds that never carry user-visible text
_TECHNICAL_ITEMS = (ToolUseItem, ToolResultItem, ThinkingItem)


@dataclass(frozen=True)
class TaskDetails:
    subagent_type: Optional[str] = None


def _task_items(msg: StreamMessage, options: GroupingOptions) -> list[ToolUseItem]:
    if msg.type != MessageType.ASSISTANT:
        return []
    if not isinstance(msg.content, (list, tuple)):
        return []
    return [
        item for item in msg.content
        if isinstance(item, ToolUseItem) and options.is_task_tool(item.name)
    ]


def has_task_invocation(msg: StreamMessage, options: GroupingOptions = DEFAULT_OPTIONS) -> bool:
    """Does this assistant message call the Task tool?"""
    return bool(_task_items(msg, options))


def extract_task_ids(msg: StreamMessage, options: GroupingOptions = DEFAULT_OPTIONS) -> list[str]:
    """Tool-use ids of every Task call in the message, in content order."""
    return [item.id for item in _task_items(msg, options) if item.id]


def extract_task_details(
    msg: StreamMessage,
    options: GroupingOptions = DEFAULT_OPTIONS,
) -> dict[str, TaskDetails]:
    """Map each Task call id to its details (currently the subagent type)."""
    details: dict[str, TaskDetails] = {}
    for item in _task_items(msg, options):
        if not item.id:
            continue
        subagent_type = None
        if isinstance(item.input, dict):
            value = item.input.get("subagent_type")
            if isinstance(value, str) and value:
                subagent_type = value
        details[item.id] = TaskDetails(subagent_type=subagent_type)
    return details


def is_subagent_message(msg: StreamMessage) -> bool:
    return bool(msg.parent_tool_use_id) or msg.is_sidechain is True


def get_parent_id(msg: StreamMessage) -> Optional[str]:
    return msg.parent_tool_use_id or None


def is_technical_message(msg: StreamMessage) -> bool:
    """True if the message carries no user-visible text.

    Thinking messages always qualify. Otherwise only assistant messages whose
    item content is made of tool calls, tool results, thinking blocks and
    blank text blocks. A plain-string payload is never technical.
    """
    if msg.type == MessageType.THINKING:
        return True
    if msg.type != MessageType.ASSISTANT:
        return False
    if not isinstance(msg.content, (list, tuple)):
        return False

    for item in msg.content:
        if isinstance(item, _TECHNICAL_ITEMS):
            continue
        if isinstance(item, TextItem):
            if not isinstance(item.text, str) or item.text.strip():
                return False
            continue
        return False
    return True


def get_subagent_message_role(msg: StreamMessage) -> str:
    """Display role for a message inside a subagent group.

    The prompt a subagent hands back is tagged `user` but is really the
    subagent's output, so text-bearing user messages show as assistant.
    """
    if msg.type == MessageType.USER and is_subagent_message(msg):
        if any(isinstance(item, TextItem) for item in msg.items):
            return MessageType.ASSISTANT.value
    return msg.type.value if isinstance(msg.type, MessageType) else str(msg.type)


def _has_payload(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def is_empty_tool_result_message(msg: StreamMessage) -> bool:
    """Content is only tool_result blocks and none of them has any payload."""
    items = msg.items
    if not items or not all(isinstance(item, ToolResultItem) for item in items):
        return False
    return not any(_has_payload(item.content) for item in items)
