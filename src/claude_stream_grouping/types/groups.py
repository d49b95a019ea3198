"""Render group types produced by the grouping pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from claude_stream_grouping.types.messages import StreamMessage


class GroupType(str, Enum):
    NORMAL = "normal"
    SUBAGENT = "subagent"
    AGGREGATED = "aggregated"


@dataclass(frozen=True)
class SubagentGroup:
    """A task invocation together with the messages it spawned."""
    id: str  # tool_use id of the Task call
    task_message: "StreamMessage"
    subagent_messages: tuple["StreamMessage", ...]
    start_index: int
    end_index: int
    subagent_type: Optional[str] = None
    member_indices: tuple[int, ...] = ()
    # Groups whose task message is one of our own subagent messages
    nested: tuple["SubagentGroup", ...] = ()


@dataclass(frozen=True)
class NormalGroup:
    message: "StreamMessage"
    index: int
    group_type: GroupType = GroupType.NORMAL


@dataclass(frozen=True)
class SubagentRenderGroup:
    group: SubagentGroup
    group_type: GroupType = GroupType.SUBAGENT

    @property
    def index(self) -> int:
        return self.group.start_index


@dataclass(frozen=True)
class AggregatedGroup:
    messages: tuple["StreamMessage", ...]
    index: int  # stream index of the first member
    group_type: GroupType = GroupType.AGGREGATED


RenderGroup = Union[NormalGroup, SubagentRenderGroup, AggregatedGroup]
