"""Error types and the render-boundary structure check."""

from claude_stream_grouping.types.groups import (
    AggregatedGroup,
    NormalGroup,
    SubagentRenderGroup,
)


class MalformedMessage(ValueError):
    """A raw transcript record that cannot become a StreamMessage."""


class InvalidGroupStructure(ValueError):
    """A render group whose payload is missing or has the wrong shape."""


def validate_render_group(group) -> None:
    """Raise InvalidGroupStructure if a render group cannot be displayed.

    A Subagent entry needs a group, a task message and an ordered sequence
    of subagent messages. Normal entries need a message, Aggregated entries
    an ordered sequence.
    """
    if isinstance(group, SubagentRenderGroup):
        sub = group.group
        if sub is None:
            raise InvalidGroupStructure("subagent entry has no group")
        if getattr(sub, "task_message", None) is None:
            raise InvalidGroupStructure(f"subagent group {sub.id!r} has no task message")
        if not isinstance(getattr(sub, "subagent_messages", None), (list, tuple)):
            raise InvalidGroupStructure(
                f"subagent group {sub.id!r} has no ordered subagent messages"
            )
        return

    if isinstance(group, NormalGroup):
        if group.message is None:
            raise InvalidGroupStructure("normal entry has no message")
        return

    if isinstance(group, AggregatedGroup):
        if not isinstance(group.messages, (list, tuple)):
            raise InvalidGroupStructure("aggregated entry has no ordered messages")
        return

    raise InvalidGroupStructure(f"unknown render group: {type(group).__name__}")
