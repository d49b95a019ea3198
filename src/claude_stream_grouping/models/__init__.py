"""Qt models for claude_stream_grouping."""

from claude_stream_grouping.models.render_group_model import RenderGroupModel

__all__ = ["RenderGroupModel"]
