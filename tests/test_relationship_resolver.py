"""Tests for claude_stream_grouping.services.relationship_resolver."""

import pytest

from claude_stream_grouping.services.relationship_resolver import (
    TaskOrigin,
    resolve_task_relationships,
)

from helpers import make_task_call, make_text, make_tool_step, make_user


def test_empty_input():
    rel = resolve_task_relationships([])
    assert dict(rel.task_index) == {}
    assert dict(rel.index_to_task_ids) == {}
    assert dict(rel.task_types) == {}


def test_records_origin_and_index_lists():
    task_a = make_task_call("toolu_a", subagent_type="Explore")
    task_bc = make_task_call("toolu_b", "toolu_c", subagent_type=None)
    messages = [make_user(), task_a, make_tool_step(), task_bc]

    rel = resolve_task_relationships(messages)

    assert list(rel.task_index) == ["toolu_a", "toolu_b", "toolu_c"]
    assert rel.task_index["toolu_a"] == TaskOrigin(task_a, 1)
    assert rel.task_index["toolu_c"].message is task_bc
    assert rel.index_to_task_ids == {1: ("toolu_a",), 3: ("toolu_b", "toolu_c")}
    assert dict(rel.task_types) == {"toolu_a": "Explore"}


def test_duplicate_task_id_later_message_wins():
    first = make_task_call("toolu_dup", subagent_type="Explore")
    second = make_task_call("toolu_dup", subagent_type="Plan")
    rel = resolve_task_relationships([first, make_text(), second])

    assert rel.task_index["toolu_dup"] == TaskOrigin(second, 2)
    assert rel.task_types["toolu_dup"] == "Plan"
    # Both messages still report the id they carry
    assert rel.index_to_task_ids == {0: ("toolu_dup",), 2: ("toolu_dup",)}


def test_duplicate_keeps_first_seen_order():
    messages = [
        make_task_call("toolu_x"),
        make_task_call("toolu_y"),
        make_task_call("toolu_x"),
    ]
    rel = resolve_task_relationships(messages)
    assert list(rel.task_index) == ["toolu_x", "toolu_y"]


def test_result_is_read_only():
    rel = resolve_task_relationships([make_task_call("toolu_a")])
    with pytest.raises(TypeError):
        rel.task_index["toolu_b"] = None
