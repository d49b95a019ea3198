"""Grouping settings wrapping QSettings."""

import logging

from PySide6.QtCore import QObject, Signal, Slot, QSettings

from claude_stream_grouping.config import DEFAULTS, GroupingOptions

logger = logging.getLogger(__name__)


class ConfigManager(QObject):
    """Persistent grouping settings with QML slot bindings."""

    settings_changed = Signal(str)  # key

    def __init__(self, settings: QSettings | None = None, parent=None):
        super().__init__(parent)
        self._settings = settings if settings is not None else QSettings()

    @Slot(str, result=str)
    def get_string(self, key: str) -> str:
        return str(self._settings.value(key, DEFAULTS.get(key, "")))

    @Slot(str, result=bool)
    def get_bool(self, key: str) -> bool:
        val = self._settings.value(key, DEFAULTS.get(key, False))
        if isinstance(val, bool):
            return val
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    @Slot(str, str)
    def set_string(self, key: str, value: str):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    @Slot(str, bool)
    def set_bool(self, key: str, value: bool):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    def grouping_options(self) -> GroupingOptions:
        """Snapshot the current settings as the options the pipeline takes."""
        task_tool_name = self.get_string("grouping/taskToolName").strip()
        if not task_tool_name:
            logger.warning("Empty task tool name in settings, using default")
            task_tool_name = DEFAULTS["grouping/taskToolName"]
        return GroupingOptions(
            task_tool_name=task_tool_name,
            aggregate_technical=self.get_bool("grouping/aggregateTechnical"),
        )

    def debug_logging(self) -> bool:
        return self.get_bool("advanced/debugLogging")
