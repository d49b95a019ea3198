"""Group a flat message stream into subagent groups and render entries."""

import dataclasses
import logging
from typing import Iterator, Sequence

from claude_stream_grouping.config import DEFAULT_OPTIONS, GroupingOptions
from claude_stream_grouping.services.aggregator import aggregate_technical_runs
from claude_stream_grouping.services.relationship_resolver import (
    TaskRelationships,
    resolve_task_relationships,
)
from claude_stream_grouping.types.groups import (
    NormalGroup,
    RenderGroup,
    SubagentGroup,
    SubagentRenderGroup,
)
from claude_stream_grouping.types.messages import StreamMessage
from claude_stream_grouping.utils.message_classifier import (
    get_parent_id,
    is_subagent_message,
)

logger = logging.getLogger(__name__)


def group_messages(
    messages: Sequence[StreamMessage],
    options: GroupingOptions = DEFAULT_OPTIONS,
) -> list[RenderGroup]:
    """Full pipeline: resolve tasks, build subagent groups, aggregate runs.

    Pure function of its input; call it again on every new snapshot.
    """
    intermediate = build_intermediate_groups(messages, options)
    if not options.aggregate_technical:
        return intermediate
    return aggregate_technical_runs(intermediate)


def build_subagent_groups(
    messages: Sequence[StreamMessage],
    relationships: TaskRelationships,
) -> dict[str, SubagentGroup]:
    """Collect, for every Task call, the later messages whose parent is that call.

    Parent linkage is the only membership test, so parallel subagents whose
    messages interleave still land in their own groups. Task calls with no
    children produce no group.
    """
    # parent id -> indices of its children, ascending
    children: dict[str, list[int]] = {}
    for index, msg in enumerate(messages):
        parent_id = get_parent_id(msg)
        if parent_id:
            children.setdefault(parent_id, []).append(index)

    groups: dict[str, SubagentGroup] = {}
    for task_id, origin in relationships.task_index.items():
        member_indices = tuple(i for i in children.get(task_id, ()) if i > origin.index)
        if not member_indices:
            continue
        groups[task_id] = SubagentGroup(
            id=task_id,
            task_message=origin.message,
            subagent_messages=tuple(messages[i] for i in member_indices),
            start_index=origin.index,
            end_index=member_indices[-1],
            subagent_type=relationships.task_types.get(task_id),
            member_indices=member_indices,
        )

    dangling = [pid for pid in children if pid not in groups]
    if dangling:
        logger.debug("%d parent id(s) matched no task group: %s", len(dangling), dangling)

    return _attach_nested(groups)


def _attach_nested(groups: dict[str, SubagentGroup]) -> dict[str, SubagentGroup]:
    """Hang groups started from inside another group's members onto that group."""
    if len(groups) < 2:
        return groups

    by_start: dict[int, list[str]] = {}
    for task_id, group in groups.items():
        by_start.setdefault(group.start_index, []).append(task_id)

    resolved: dict[str, SubagentGroup] = {}
    # Inner groups always start later than their owner, so build from the back
    for task_id in sorted(groups, key=lambda tid: groups[tid].start_index, reverse=True):
        group = groups[task_id]
        nested = tuple(
            resolved[inner_id]
            for i in group.member_indices
            for inner_id in by_start.get(i, ())
        )
        resolved[task_id] = dataclasses.replace(group, nested=nested) if nested else group

    return {task_id: resolved[task_id] for task_id in groups}


def build_intermediate_groups(
    messages: Sequence[StreamMessage],
    options: GroupingOptions = DEFAULT_OPTIONS,
) -> list[RenderGroup]:
    """Replace task calls with their subagent groups and hide grouped members.

    Every input message ends up exactly once: as a Normal entry, as the task
    message of a Subagent entry, or inside a group's subagent messages.
    """
    relationships = resolve_task_relationships(messages, options)
    groups = build_subagent_groups(messages, relationships)

    hidden: set[int] = set()
    for group in groups.values():
        hidden.update(group.member_indices)

    result: list[RenderGroup] = []
    emitted: set[str] = set()
    for index, msg in enumerate(messages):
        if index in hidden:
            continue

        task_ids = relationships.index_to_task_ids.get(index, ())
        # A duplicated task id belongs to the message that owns its group
        owned = [
            tid for tid in task_ids
            if tid in groups and groups[tid].start_index == index
        ]
        if not owned:
            result.append(NormalGroup(message=msg, index=index))
            continue

        for task_id in owned:
            if task_id in emitted:
                continue
            emitted.add(task_id)
            result.append(SubagentRenderGroup(group=groups[task_id]))

    return result


def should_hide_message(msg: StreamMessage, groups: Sequence[RenderGroup]) -> bool:
    """Is this a subagent message already shown inside one of the groups?"""
    if not is_subagent_message(msg):
        return False
    parent_id = get_parent_id(msg)
    if not parent_id:
        return False
    return any(group.id == parent_id for group in iter_subagent_groups(groups))


def iter_subagent_groups(groups: Sequence[RenderGroup]) -> Iterator[SubagentGroup]:
    """Yield every subagent group in render order, nested ones after their owner."""
    stack: list[SubagentGroup] = [
        g.group for g in reversed(groups) if isinstance(g, SubagentRenderGroup)
    ]
    while stack:
        group = stack.pop()
        yield group
        stack.extend(reversed(group.nested))
