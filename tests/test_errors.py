"""Tests for render-group structure validation."""

import pytest

from claude_stream_grouping.errors import InvalidGroupStructure, validate_render_group
from claude_stream_grouping.types.groups import (
    AggregatedGroup,
    NormalGroup,
    SubagentGroup,
    SubagentRenderGroup,
)

from helpers import make_child, make_task_call, make_text


def _subagent(**overrides) -> SubagentRenderGroup:
    fields = dict(
        id="toolu_a",
        task_message=make_task_call("toolu_a"),
        subagent_messages=(make_child("toolu_a"),),
        start_index=0,
        end_index=1,
    )
    fields.update(overrides)
    return SubagentRenderGroup(group=SubagentGroup(**fields))


def test_valid_groups_pass():
    validate_render_group(_subagent())
    validate_render_group(_subagent(subagent_messages=[make_child("toolu_a")]))
    validate_render_group(NormalGroup(make_text(), 0))
    validate_render_group(AggregatedGroup((make_text(),), 0))


def test_missing_group():
    with pytest.raises(InvalidGroupStructure, match="no group"):
        validate_render_group(SubagentRenderGroup(group=None))


def test_missing_task_message():
    with pytest.raises(InvalidGroupStructure, match="task message"):
        validate_render_group(_subagent(task_message=None))


@pytest.mark.parametrize("bad", [None, "not a sequence", {"a": 1}])
def test_subagent_messages_not_a_sequence(bad):
    with pytest.raises(InvalidGroupStructure, match="subagent messages"):
        validate_render_group(_subagent(subagent_messages=bad))


def test_normal_without_message():
    with pytest.raises(InvalidGroupStructure):
        validate_render_group(NormalGroup(None, 0))


def test_unknown_object():
    with pytest.raises(InvalidGroupStructure, match="unknown"):
        validate_render_group(object())


def test_is_a_value_error():
    assert issubclass(InvalidGroupStructure, ValueError)
