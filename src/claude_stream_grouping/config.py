"""Grouping options and their defaults."""

from dataclasses import dataclass

# Default values
DEFAULTS = {
    "grouping/taskToolName": "task",
    "grouping/aggregateTechnical": True,
    "advanced/debugLogging": False,
}


@dataclass(frozen=True)
class GroupingOptions:
    """Knobs the grouping pipeline accepts. Immutable, safe to share."""
    task_tool_name: str = DEFAULTS["grouping/taskToolName"]
    aggregate_technical: bool = DEFAULTS["grouping/aggregateTechnical"]

    def is_task_tool(self, name) -> bool:
        """Case-insensitive match against the task tool name."""
        return isinstance(name, str) and name.lower() == self.task_tool_name.lower()


DEFAULT_OPTIONS = GroupingOptions()
