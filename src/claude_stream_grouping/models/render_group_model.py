"""QAbstractListModel exposing render groups to the chat view."""

import logging

from PySide6.QtCore import QAbstractListModel, QModelIndex, Qt

from claude_stream_grouping.errors import InvalidGroupStructure, validate_render_group
from claude_stream_grouping.types import (
    AggregatedGroup,
    NormalGroup,
    RenderGroup,
    StreamMessage,
    SubagentGroup,
    SubagentRenderGroup,
    TextItem,
    ToolUseItem,
)
from claude_stream_grouping.utils.equality import is_group_equal
from claude_stream_grouping.utils.message_classifier import (
    get_subagent_message_role,
    is_empty_tool_result_message,
)

logger = logging.getLogger(__name__)


class RenderGroupModel(QAbstractListModel):
    """Exposes RenderGroups to QML, re-emitting only rows that changed."""

    GroupTypeRole = Qt.UserRole + 1
    GroupIndexRole = Qt.UserRole + 2
    IsValidRole = Qt.UserRole + 3
    ShouldRenderRole = Qt.UserRole + 4
    TextRole = Qt.UserRole + 5
    MessageCountRole = Qt.UserRole + 6
    ToolNamesRole = Qt.UserRole + 7
    TaskIdRole = Qt.UserRole + 8
    SubagentTypeRole = Qt.UserRole + 9
    MessagesRole = Qt.UserRole + 10
    TimestampRole = Qt.UserRole + 11

    def __init__(self, parent=None):
        super().__init__(parent)
        self._groups: list[RenderGroup] = []
        self._valid: list[bool] = []

    def roleNames(self):
        return {
            self.GroupTypeRole: b"groupType",
            self.GroupIndexRole: b"groupIndex",
            self.IsValidRole: b"isValid",
            self.ShouldRenderRole: b"shouldRender",
            self.TextRole: b"text",
            self.MessageCountRole: b"messageCount",
            self.ToolNamesRole: b"toolNames",
            self.TaskIdRole: b"taskId",
            self.SubagentTypeRole: b"subagentType",
            self.MessagesRole: b"messages",
            self.TimestampRole: b"timestamp",
        }

    def rowCount(self, parent=QModelIndex()):
        return len(self._groups)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid() or index.row() >= len(self._groups):
            return None

        row = index.row()
        group = self._groups[row]
        valid = self._valid[row]

        if role == self.GroupTypeRole:
            return group.group_type.value
        elif role == self.IsValidRole:
            return valid
        elif role == self.ShouldRenderRole:
            return valid and self._should_render(group)

        # Invalid rows render nothing
        if not valid:
            return None

        if role == self.GroupIndexRole:
            return group.index
        elif role == self.TextRole:
            if isinstance(group, NormalGroup):
                return _extract_text(group.message)
            return ""
        elif role == self.MessageCountRole:
            return len(_group_messages(group))
        elif role == self.ToolNamesRole:
            return [
                item.name
                for msg in _group_messages(group)
                for item in msg.items
                if isinstance(item, ToolUseItem)
            ]
        elif role == self.TaskIdRole:
            return group.group.id if isinstance(group, SubagentRenderGroup) else ""
        elif role == self.SubagentTypeRole:
            if isinstance(group, SubagentRenderGroup):
                return group.group.subagent_type or ""
            return ""
        elif role == self.MessagesRole:
            return self._format_messages(group)
        elif role == self.TimestampRole:
            messages = _group_messages(group)
            if not messages or messages[0].timestamp is None:
                return ""
            return messages[0].timestamp.isoformat()
        return None

    def set_groups(self, groups: list[RenderGroup]):
        """Replace the entire group list."""
        self.beginResetModel()
        self._groups = list(groups)
        self._valid = [_check_group(g) for g in self._groups]
        self.endResetModel()

    def update_groups(self, groups: list[RenderGroup]):
        """Apply a freshly computed group list, touching only what changed.

        Rows keep their identity while their kind and anchor index match;
        any other change falls back to a full reset.
        """
        new_groups = list(groups)
        if not self._groups or not new_groups:
            self.set_groups(new_groups)
            return

        common = min(len(self._groups), len(new_groups))
        for row in range(common):
            if _row_key(self._groups[row]) != _row_key(new_groups[row]):
                self.set_groups(new_groups)
                return

        for row in range(common):
            valid = _check_group(new_groups[row])
            old, was_valid = self._groups[row], self._valid[row]
            self._groups[row] = new_groups[row]
            self._valid[row] = valid
            if not valid and not was_valid:
                continue
            if valid and was_valid and is_group_equal(old, new_groups[row]):
                continue
            model_index = self.index(row, 0)
            self.dataChanged.emit(model_index, model_index, [])

        if len(new_groups) < len(self._groups):
            self.beginRemoveRows(QModelIndex(), len(new_groups), len(self._groups) - 1)
            del self._groups[len(new_groups):]
            del self._valid[len(new_groups):]
            self.endRemoveRows()
        elif len(new_groups) > len(self._groups):
            first = len(self._groups)
            self.beginInsertRows(QModelIndex(), first, len(new_groups) - 1)
            self._groups.extend(new_groups[first:])
            self._valid.extend(_check_group(g) for g in new_groups[first:])
            self.endInsertRows()

    @staticmethod
    def _should_render(group: RenderGroup) -> bool:
        """Tool-result-only messages with nothing in them would be empty bubbles."""
        if isinstance(group, NormalGroup):
            return not is_empty_tool_result_message(group.message)
        return True

    @staticmethod
    def _format_messages(group: RenderGroup) -> list[dict]:
        """Convert a group's messages to plain dicts for QML."""
        in_subagent = isinstance(group, SubagentRenderGroup)
        result = []
        for msg, depth in _group_entries(group):
            result.append({
                "depth": depth,
                "role": get_subagent_message_role(msg) if in_subagent else msg.type.value,
                "text": _extract_text(msg)[:500],
                "toolCount": sum(1 for item in msg.items if isinstance(item, ToolUseItem)),
            })
        return result


def _row_key(group: RenderGroup) -> tuple:
    return getattr(group, "group_type", None), _safe_index(group)


def _safe_index(group) -> int | None:
    try:
        return group.index
    except AttributeError:
        return None


def _check_group(group: RenderGroup) -> bool:
    try:
        validate_render_group(group)
    except InvalidGroupStructure as e:
        logger.warning("Invalid group structure, not rendering: %s", e)
        return False
    return True


def _group_messages(group: RenderGroup) -> list[StreamMessage]:
    return [msg for msg, _ in _group_entries(group)]


def _group_entries(group: RenderGroup) -> list[tuple[StreamMessage, int]]:
    """(message, depth) pairs in display order.

    Subagent groups lead with the task message. Each nested group's messages
    follow its own task message, one level deeper.
    """
    if isinstance(group, NormalGroup):
        return [(group.message, 0)]
    if isinstance(group, SubagentRenderGroup):
        entries = [(group.group.task_message, 0)]
        _collect_members(group.group, 0, entries)
        return entries
    if isinstance(group, AggregatedGroup):
        return [(msg, 0) for msg in group.messages]
    return []


def _collect_members(group: SubagentGroup, depth: int, out: list) -> None:
    inner_by_start: dict[int, list[SubagentGroup]] = {}
    for inner in group.nested:
        inner_by_start.setdefault(inner.start_index, []).append(inner)

    for position, msg in enumerate(group.subagent_messages):
        out.append((msg, depth))
        if position < len(group.member_indices):
            for inner in inner_by_start.get(group.member_indices[position], ()):
                _collect_members(inner, depth + 1, out)


def _extract_text(msg: StreamMessage) -> str:
    """Extract plain text from message content."""
    if isinstance(msg.content, str):
        return msg.content
    return "\n".join(
        item.text for item in msg.items
        if isinstance(item, TextItem) and item.text
    )
