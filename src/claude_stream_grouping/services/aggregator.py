"""Coalesce consecutive technical messages into aggregated render groups."""

from typing import NamedTuple, Optional, Sequence

from claude_stream_grouping.types.groups import (
    AggregatedGroup,
    NormalGroup,
    RenderGroup,
)
from claude_stream_grouping.types.messages import StreamMessage
from claude_stream_grouping.utils.message_classifier import is_technical_message


class _OpenRun(NamedTuple):
    messages: tuple[StreamMessage, ...]
    start_index: int

    def extend(self, msg: StreamMessage) -> "_OpenRun":
        return _OpenRun(self.messages + (msg,), self.start_index)

    def close(self) -> AggregatedGroup:
        return AggregatedGroup(messages=self.messages, index=self.start_index)


def aggregate_technical_runs(groups: Sequence[RenderGroup]) -> list[RenderGroup]:
    """Fold runs of technical Normal entries into Aggregated entries.

    - Subagent entry -> close the open run, pass the entry through
    - Normal technical entry -> extend the open run (or open one)
    - Normal visible entry -> close the open run, pass the entry through

    A run of one is still Aggregated. Runs never cross a Subagent entry.
    """
    result: list[RenderGroup] = []
    open_run: Optional[_OpenRun] = None

    for group in groups:
        if isinstance(group, NormalGroup) and is_technical_message(group.message):
            if open_run is None:
                open_run = _OpenRun((group.message,), group.index)
            else:
                open_run = open_run.extend(group.message)
            continue

        if open_run is not None:
            result.append(open_run.close())
            open_run = None
        result.append(group)

    if open_run is not None:
        result.append(open_run.close())

    return result
