"""Streaming JSONL parser for stream-json transcripts."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

import orjson

from claude_stream_grouping.errors import MalformedMessage
from claude_stream_grouping.types.messages import (
    ContentItem,
    MessageType,
    StreamMessage,
    TextItem,
    ThinkingItem,
    TokenUsage,
    ToolResultItem,
    ToolUseItem,
    UnknownItem,
)

logger = logging.getLogger(__name__)

# Max size for a single JSONL line (10MB)
MAX_LINE_SIZE = 10 * 1024 * 1024


def parse_transcript_file(file_path: str | Path) -> list[StreamMessage]:
    """Parse an entire JSONL transcript into a list of StreamMessage objects."""
    return list(stream_transcript_file(file_path))


def stream_transcript_file(file_path: str | Path) -> Iterator[StreamMessage]:
    """Stream-parse a JSONL transcript, yielding StreamMessage objects.

    Malformed lines are logged and skipped.
    Lines exceeding MAX_LINE_SIZE are skipped with a warning.
    """
    path = Path(file_path)
    if not path.exists():
        logger.warning("Transcript file not found: %s", path)
        return

    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line_num, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue

            if len(line) > MAX_LINE_SIZE:
                logger.warning(
                    "Line %d in %s exceeds %dMB, skipping",
                    line_num, path.name, MAX_LINE_SIZE // (1024 * 1024),
                )
                continue

            msg = parse_stream_line(line)
            if msg is None:
                logger.debug("Skipping malformed line %d in %s", line_num, path.name)
                continue
            yield msg


def parse_stream_line(line: str | bytes) -> Optional[StreamMessage]:
    """Parse one JSONL line; None if it is not a usable message record."""
    try:
        raw = orjson.loads(line)
    except orjson.JSONDecodeError as e:
        logger.debug("Malformed JSON: %s", e)
        return None
    try:
        return parse_stream_message(raw)
    except MalformedMessage as e:
        logger.debug("Malformed message: %s", e)
        return None


def parse_stream_message(raw: dict) -> StreamMessage:
    """Build a StreamMessage from a decoded stream-json record.

    Raises MalformedMessage if the record is not a mapping. Everything else
    is tolerated: unknown types become SYSTEM, odd content becomes None.
    """
    if not isinstance(raw, dict):
        raise MalformedMessage(f"expected an object, got {type(raw).__name__}")

    type_str = raw.get("type", "")
    try:
        msg_type = MessageType(type_str)
    except ValueError:
        logger.debug("Unknown message type %r, treating as system", type_str)
        msg_type = MessageType.SYSTEM

    message = raw.get("message", {})
    if not isinstance(message, dict):
        message = {}

    # Thinking records carry their text at the top level
    if "content" in message:
        content = _parse_content(message.get("content"))
    else:
        content = _parse_content(raw.get("content"))

    raw_usage = raw.get("usage")
    if not isinstance(raw_usage, dict):
        raw_usage = message.get("usage")

    parent_id = raw.get("parent_tool_use_id")
    return StreamMessage(
        type=msg_type,
        content=content,
        id=_optional_str(raw.get("id")) or _optional_str(message.get("id")),
        uuid=_optional_str(raw.get("uuid")),
        timestamp=_parse_timestamp(raw.get("timestamp")),
        role=message.get("role", "") or "",
        model=message.get("model", "") or "",
        parent_tool_use_id=parent_id if isinstance(parent_id, str) and parent_id else None,
        is_sidechain=raw.get("isSidechain") is True,
        usage=_parse_usage(raw_usage),
    )


def _optional_str(value) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _parse_content(content) -> str | tuple[ContentItem, ...] | None:
    if isinstance(content, str):
        return content
    if not isinstance(content, list):
        return None

    items: list[ContentItem] = []
    for block in content:
        if isinstance(block, str):
            items.append(TextItem(text=block))
            continue
        if not isinstance(block, dict):
            continue
        items.append(_parse_item(block))
    return tuple(items)


def _parse_item(block: dict) -> ContentItem:
    block_type = block.get("type", "")
    if block_type == "text":
        return TextItem(text=block.get("text") or "")
    if block_type == "tool_use":
        tool_input = block.get("input")
        return ToolUseItem(
            id=block.get("id") or "",
            name=block.get("name") or "",
            input=tool_input if isinstance(tool_input, dict) else {},
        )
    if block_type == "tool_result":
        return ToolResultItem(
            tool_use_id=block.get("tool_use_id") or "",
            content=block.get("content"),
            is_error=block.get("is_error", False) is True,
        )
    if block_type == "thinking":
        return ThinkingItem(text=block.get("thinking") or block.get("text") or "")
    return UnknownItem(type=str(block_type), data=block)


def _parse_usage(raw_usage) -> Optional[TokenUsage]:
    if not isinstance(raw_usage, dict):
        return None
    return TokenUsage(
        input_tokens=raw_usage.get("input_tokens") or 0,
        output_tokens=raw_usage.get("output_tokens") or 0,
        cache_read_input_tokens=raw_usage.get("cache_read_input_tokens") or 0,
        cache_creation_input_tokens=raw_usage.get("cache_creation_input_tokens") or 0,
    )


def _parse_timestamp(ts_value) -> Optional[datetime]:
    """Parse a timestamp from various formats. Missing or garbled -> None."""
    if isinstance(ts_value, bool):
        return None
    if isinstance(ts_value, (int, float)):
        try:
            return datetime.fromtimestamp(
                ts_value / 1000 if ts_value > 1e12 else ts_value, tz=timezone.utc
            )
        except (ValueError, OSError, OverflowError):
            return None
    if isinstance(ts_value, str) and ts_value:
        try:
            # ISO 8601 format: "2026-02-13T12:00:00.000Z"
            parsed = datetime.fromisoformat(ts_value.replace("Z", "+00:00"))
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
        try:
            return datetime.fromtimestamp(float(ts_value), tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            pass
    return None
