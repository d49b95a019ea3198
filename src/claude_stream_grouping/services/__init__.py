"""Services for claude_stream_grouping."""

from claude_stream_grouping.services.aggregator import aggregate_technical_runs
from claude_stream_grouping.services.group_builder import (
    build_intermediate_groups,
    build_subagent_groups,
    group_messages,
    iter_subagent_groups,
    should_hide_message,
)
from claude_stream_grouping.services.jsonl_parser import (
    parse_stream_message,
    parse_transcript_file,
    stream_transcript_file,
)
from claude_stream_grouping.services.relationship_resolver import (
    TaskOrigin,
    TaskRelationships,
    resolve_task_relationships,
)

__all__ = [
    "aggregate_technical_runs",
    "build_intermediate_groups",
    "build_subagent_groups",
    "group_messages",
    "iter_subagent_groups",
    "should_hide_message",
    "parse_stream_message",
    "parse_transcript_file",
    "stream_transcript_file",
    "TaskOrigin",
    "TaskRelationships",
    "resolve_task_relationships",
]
