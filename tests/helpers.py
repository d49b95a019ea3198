"""Shared test helpers: small builders for stream messages."""

from datetime import datetime, timedelta, timezone

from claude_stream_grouping.types.groups import (
    AggregatedGroup,
    NormalGroup,
    SubagentRenderGroup,
)
from claude_stream_grouping.types.messages import (
    MessageType,
    StreamMessage,
    TextItem,
    TokenUsage,
    ToolResultItem,
    ToolUseItem,
)

BASE_TIME = datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


def ts(seconds: int) -> datetime:
    return BASE_TIME + timedelta(seconds=seconds)


def make_user(text: str = "hello", **kwargs) -> StreamMessage:
    return StreamMessage(type=MessageType.USER, content=text, role="user", **kwargs)


def make_text(text: str = "Here is what I found.", **kwargs) -> StreamMessage:
    """Assistant message with visible text."""
    return StreamMessage(
        type=MessageType.ASSISTANT,
        content=(TextItem(text=text),),
        role="assistant",
        **kwargs,
    )


def make_task_call(*task_ids: str, subagent_type: str | None = "general-purpose",
                   name: str = "Task", **kwargs) -> StreamMessage:
    """Assistant message spawning one subagent per task id."""
    items = []
    for task_id in task_ids:
        tool_input = {"description": f"work for {task_id}", "prompt": "do it"}
        if subagent_type is not None:
            tool_input["subagent_type"] = subagent_type
        items.append(ToolUseItem(id=task_id, name=name, input=tool_input))
    return StreamMessage(
        type=MessageType.ASSISTANT,
        content=tuple(items),
        role="assistant",
        **kwargs,
    )


def make_tool_step(tool_id: str = "toolu_read", name: str = "Read", **kwargs) -> StreamMessage:
    """Assistant message with only a non-task tool call (technical)."""
    return StreamMessage(
        type=MessageType.ASSISTANT,
        content=(ToolUseItem(id=tool_id, name=name, input={"file_path": "/tmp/x"}),),
        role="assistant",
        **kwargs,
    )


def make_tool_result(tool_use_id: str = "toolu_read", content="file body",
                     msg_type: MessageType = MessageType.USER, **kwargs) -> StreamMessage:
    return StreamMessage(
        type=msg_type,
        content=(ToolResultItem(tool_use_id=tool_use_id, content=content),),
        **kwargs,
    )


def make_thinking(text: str = "", **kwargs) -> StreamMessage:
    return StreamMessage(type=MessageType.THINKING, content=text, **kwargs)


def make_child(parent_id: str, text: str = "subagent says hi", **kwargs) -> StreamMessage:
    """Assistant message emitted by the subagent started from parent_id."""
    return make_text(text, parent_tool_use_id=parent_id, **kwargs)


def make_usage(input_tokens: int = 10, output_tokens: int = 5) -> TokenUsage:
    return TokenUsage(input_tokens=input_tokens, output_tokens=output_tokens)


def covered_indices(messages, groups) -> list[int]:
    """Every stream index represented in a render sequence, with repeats.

    Nested groups contribute their members; their task message is already
    one of the owner's members.
    """
    position = {id(msg): i for i, msg in enumerate(messages)}
    indices: list[int] = []

    def walk_nested(sub):
        for inner in sub.nested:
            indices.extend(inner.member_indices)
            walk_nested(inner)

    task_starts: set[int] = set()
    for group in groups:
        if isinstance(group, NormalGroup):
            indices.append(group.index)
        elif isinstance(group, AggregatedGroup):
            indices.extend(position[id(msg)] for msg in group.messages)
        elif isinstance(group, SubagentRenderGroup):
            # One task message can own several parallel groups
            if group.group.start_index not in task_starts:
                task_starts.add(group.group.start_index)
                indices.append(group.group.start_index)
            indices.extend(group.group.member_indices)
            walk_nested(group.group)
    return indices
