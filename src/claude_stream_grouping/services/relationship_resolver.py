"""Index Task invocations across a flat message stream."""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, NamedTuple, Sequence

from claude_stream_grouping.config import DEFAULT_OPTIONS, GroupingOptions
from claude_stream_grouping.types.messages import StreamMessage
from claude_stream_grouping.utils.message_classifier import (
    extract_task_details,
    extract_task_ids,
)

logger = logging.getLogger(__name__)


class TaskOrigin(NamedTuple):
    message: StreamMessage
    index: int


@dataclass(frozen=True)
class TaskRelationships:
    # task id -> originating message, in first-seen order
    task_index: Mapping[str, TaskOrigin] = field(default_factory=dict)
    # message index -> task ids it carries
    index_to_task_ids: Mapping[int, tuple[str, ...]] = field(default_factory=dict)
    # task id -> subagent_type from the Task input
    task_types: Mapping[str, str] = field(default_factory=dict)


def resolve_task_relationships(
    messages: Sequence[StreamMessage],
    options: GroupingOptions = DEFAULT_OPTIONS,
) -> TaskRelationships:
    """Single forward pass recording where every Task call originates.

    A task id seen on two different messages keeps its first-seen position
    but maps to the later message.
    """
    task_index: dict[str, TaskOrigin] = {}
    index_to_task_ids: dict[int, tuple[str, ...]] = {}
    task_types: dict[str, str] = {}

    for index, msg in enumerate(messages):
        task_ids = extract_task_ids(msg, options)
        if not task_ids:
            continue

        index_to_task_ids[index] = tuple(task_ids)
        details = extract_task_details(msg, options)
        for task_id in task_ids:
            previous = task_index.get(task_id)
            if previous is not None and previous.index != index:
                logger.debug(
                    "Task id %s seen at index %d and again at %d, keeping the later",
                    task_id, previous.index, index,
                )
            task_index[task_id] = TaskOrigin(msg, index)
            detail = details.get(task_id)
            if detail is not None and detail.subagent_type:
                task_types[task_id] = detail.subagent_type

    return TaskRelationships(
        task_index=MappingProxyType(task_index),
        index_to_task_ids=MappingProxyType(index_to_task_ids),
        task_types=MappingProxyType(task_types),
    )
