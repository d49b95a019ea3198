"""Entry point for `python -m claude_stream_grouping FILE.jsonl [--debug]`."""

import logging
import sys

USAGE = "usage: python -m claude_stream_grouping FILE.jsonl [--debug]"


def format_outline(groups) -> list[str]:
    """One line per render group, subagent members indented."""
    from claude_stream_grouping.types import (
        AggregatedGroup,
        NormalGroup,
        SubagentRenderGroup,
    )

    lines = []
    for group in groups:
        if isinstance(group, NormalGroup):
            lines.append(f"[{group.index}] {group.message.type.value}")
        elif isinstance(group, AggregatedGroup):
            lines.append(f"[{group.index}] {len(group.messages)} technical step(s)")
        elif isinstance(group, SubagentRenderGroup):
            lines.extend(_subagent_lines(group.group, ""))
    return lines


def _subagent_lines(sub, indent: str) -> list[str]:
    label = sub.subagent_type or "subagent"
    lines = [
        f"{indent}[{sub.start_index}-{sub.end_index}] {label} {sub.id}: "
        f"{len(sub.subagent_messages)} message(s)"
    ]
    inner_by_start = {}
    for inner in sub.nested:
        inner_by_start.setdefault(inner.start_index, []).append(inner)
    for i in sub.member_indices:
        lines.append(f"{indent}    [{i}]")
        for inner in inner_by_start.get(i, ()):
            lines.extend(_subagent_lines(inner, indent + "        "))
    return lines


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    debug = "--debug" in args
    paths = [a for a in args if a != "--debug"]
    if len(paths) != 1:
        print(USAGE, file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from claude_stream_grouping.services.group_builder import group_messages
    from claude_stream_grouping.services.jsonl_parser import parse_transcript_file

    messages = parse_transcript_file(paths[0])
    for line in format_outline(group_messages(messages)):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
