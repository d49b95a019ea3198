"""Cheap structural comparison of messages and render groups.

Used by the render model to decide which rows actually changed. This is a
shallow approximation, not deep equality: tool results are compared by
tool_use_id only, since a given tool_use_id appears once per stream.
"""

from typing import Optional, Sequence

from claude_stream_grouping.types.groups import (
    AggregatedGroup,
    NormalGroup,
    RenderGroup,
    SubagentGroup,
    SubagentRenderGroup,
)
from claude_stream_grouping.types.messages import (
    StreamMessage,
    TextItem,
    ToolResultItem,
    ToolUseItem,
)


def _is_item_sequence(value) -> bool:
    return isinstance(value, (list, tuple))


def _is_item_equal(prev, next_) -> bool:
    if getattr(prev, "type", None) != getattr(next_, "type", None):
        return False
    if isinstance(prev, TextItem):
        return prev.text == next_.text
    if isinstance(prev, ToolUseItem):
        return prev.id == next_.id and prev.name == next_.name
    if isinstance(prev, ToolResultItem):
        return prev.tool_use_id == next_.tool_use_id
    return True


def _usage_tokens(msg: StreamMessage) -> tuple[Optional[int], Optional[int]]:
    if msg.usage is None:
        return None, None
    return msg.usage.input_tokens, msg.usage.output_tokens


def is_message_equal(prev: Optional[StreamMessage], next_: Optional[StreamMessage]) -> bool:
    if prev is next_:
        return True
    if prev is None or next_ is None:
        return False

    if prev.type != next_.type:
        return False
    if prev.id is not None and next_.id is not None and prev.id != next_.id:
        return False
    if (prev.timestamp is not None and next_.timestamp is not None
            and prev.timestamp != next_.timestamp):
        return False

    prev_content, next_content = prev.content, next_.content
    if _is_item_sequence(prev_content) and _is_item_sequence(next_content):
        if len(prev_content) != len(next_content):
            return False
        for prev_item, next_item in zip(prev_content, next_content):
            if not _is_item_equal(prev_item, next_item):
                return False
    elif _is_item_sequence(prev_content) or _is_item_sequence(next_content):
        return False
    elif prev_content != next_content:
        return False

    return _usage_tokens(prev) == _usage_tokens(next_)


def _are_messages_equal(
    prev: Sequence[StreamMessage],
    next_: Sequence[StreamMessage],
) -> bool:
    if len(prev) != len(next_):
        return False
    for prev_msg, next_msg in zip(prev, next_):
        if prev_msg is not next_msg and not is_message_equal(prev_msg, next_msg):
            return False
    return True


def _are_subagent_groups_equal(prev: SubagentGroup, next_: SubagentGroup) -> bool:
    if prev is next_:
        return True
    if prev.id != next_.id:
        return False
    if not is_message_equal(prev.task_message, next_.task_message):
        return False
    if not _are_messages_equal(prev.subagent_messages, next_.subagent_messages):
        return False
    # Nested groups are drawn inside this row
    if len(prev.nested) != len(next_.nested):
        return False
    return all(_are_subagent_groups_equal(p, n) for p, n in zip(prev.nested, next_.nested))


def is_group_equal(prev: Optional[RenderGroup], next_: Optional[RenderGroup]) -> bool:
    if prev is next_:
        return True
    if prev is None or next_ is None:
        return False
    if getattr(prev, "group_type", None) != getattr(next_, "group_type", None):
        return False

    if isinstance(prev, NormalGroup):
        return is_message_equal(prev.message, next_.message)

    if isinstance(prev, SubagentRenderGroup):
        prev_group, next_group = prev.group, next_.group
        if prev_group is None or next_group is None:
            return prev_group is next_group
        return _are_subagent_groups_equal(prev_group, next_group)

    if isinstance(prev, AggregatedGroup):
        return _are_messages_equal(prev.messages, next_.messages)

    return False


def is_equal(prev, next_) -> bool:
    """Compare two messages or two render groups."""
    if isinstance(prev, StreamMessage) or isinstance(next_, StreamMessage):
        if prev is not None and not isinstance(prev, StreamMessage):
            return False
        if next_ is not None and not isinstance(next_, StreamMessage):
            return False
        return is_message_equal(prev, next_)
    return is_group_equal(prev, next_)


def are_groups_equal(prev: Sequence[RenderGroup], next_: Sequence[RenderGroup]) -> bool:
    """Positional comparison of two whole render sequences."""
    if len(prev) != len(next_):
        return False
    return all(is_group_equal(p, n) for p, n in zip(prev, next_))
