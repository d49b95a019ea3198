"""Group stream-json transcripts into subagent groups and technical runs."""

from claude_stream_grouping.config import GroupingOptions
from claude_stream_grouping.services.group_builder import group_messages
from claude_stream_grouping.utils.equality import (
    are_groups_equal,
    is_equal,
    is_group_equal,
    is_message_equal,
)

__all__ = [
    "GroupingOptions",
    "group_messages",
    "are_groups_equal",
    "is_equal",
    "is_group_equal",
    "is_message_equal",
]
