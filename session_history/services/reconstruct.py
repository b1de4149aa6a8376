"""
Message reconstruction (second pass).

Turns one decoded record into zero or one ChatMessage, attaching tool
results collected by the first pass (see correlation.py).

Records that never become messages:
- system / result / file-history-snapshot bookkeeping, and unknown types
- user records made only of tool_result blocks (relays carrying results back
  to the model, with nothing the user wrote)
- records with no text and no tool_use (nothing to display)

Missing uuid/timestamp fall back to a synthesized id and the current time.
Both come from a FallbackSource so tests can make them deterministic;
production output for such records is not reproducible.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime, timedelta

import attrs

from session_history.schemas.messages import (
    ChatMessage,
    MessageBlock,
    TextBlock,
    ThinkingBlock,
    ToolCallInfo,
    ToolResultEntry,
    ToolUseBlock,
)
from session_history.schemas.records import (
    DISPLAYABLE_RECORD_TYPES,
    IGNORED_RECORD_TYPES,
    ContentBlock,
    RawRecord,
    TextContent,
    ThinkingContent,
    ToolResultContent,
    ToolUseContent,
)
from session_history.services.correlation import tool_result_entry

__all__ = [
    'FallbackSource',
    'current_time_ms',
    'extract_text_content',
    'is_tool_result_relay',
    'parse_record',
    'parse_timestamp_ms',
    'reconstruct_message',
    'synthesize_message_id',
]

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MILLISECOND = timedelta(milliseconds=1)


# ==============================================================================
# Fallback Sources
# ==============================================================================


def current_time_ms() -> int:
    """Wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def synthesize_message_id(timestamp_ms: int) -> str:
    """Id for a record without uuid. Unique in practice, not reproducible."""
    return f'sdk-{timestamp_ms}-{uuid.uuid4().hex[:12]}'


@attrs.define(frozen=True)
class FallbackSource:
    """Clock and id factory used when a record lacks timestamp or uuid."""

    clock: Callable[[], int] = current_time_ms
    id_factory: Callable[[int], str] = synthesize_message_id


DEFAULT_FALLBACKS = FallbackSource()


# ==============================================================================
# Field Extraction
# ==============================================================================


def parse_timestamp_ms(value: str | None) -> int | None:
    """
    Parse an ISO-8601 timestamp into epoch milliseconds.

    Timestamps without an offset are read as UTC.

    Returns:
        Epoch milliseconds, or None if missing or unparseable
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return (parsed - _EPOCH) // _MILLISECOND


def extract_text_content(content: str | Sequence[ContentBlock] | None) -> str:
    """Plain string content verbatim, else text blocks joined by newlines."""
    if content is None:
        return ''
    if isinstance(content, str):
        return content
    return '\n'.join(block.text for block in content if isinstance(block, TextContent) and block.text is not None)


def is_tool_result_relay(record: RawRecord) -> bool:
    """True for a user record whose content blocks are all tool_result."""
    if record.type != 'user':
        return False
    blocks = record.content_blocks
    return len(blocks) > 0 and all(isinstance(block, ToolResultContent) for block in blocks)


def _build_tool_calls(
    blocks: Sequence[ContentBlock], tool_results: Mapping[str, ToolResultEntry]
) -> list[ToolCallInfo] | None:
    tool_calls = []
    seen_ids: set[str] = set()

    for block in blocks:
        if not isinstance(block, ToolUseContent) or not block.id or not block.name:
            continue
        if block.id in seen_ids:
            continue
        seen_ids.add(block.id)

        entry = tool_results.get(block.id)
        tool_calls.append(
            ToolCallInfo(
                id=block.id,
                name=block.name,
                input=block.input if block.input is not None else {},
                status='error' if entry is not None and entry.is_error else 'completed',
                result=entry.content if entry is not None else None,
            )
        )

    return tool_calls or None


def _map_content_blocks(blocks: Sequence[ContentBlock]) -> list[MessageBlock] | None:
    mapped: list[MessageBlock] = []
    seen_tool_ids: set[str] = set()

    for block in blocks:
        match block:
            case TextContent(text=str(text)) if text:
                mapped.append(TextBlock(content=text))
            case ThinkingContent(thinking=str(thinking)) if thinking:
                mapped.append(ThinkingBlock(content=thinking))
            case ToolUseContent(id=str(tool_id)) if tool_id and tool_id not in seen_tool_ids:
                seen_tool_ids.add(tool_id)
                mapped.append(ToolUseBlock(tool_id=tool_id))
            # tool_result blocks surface through tool_calls instead

    return mapped or None


# ==============================================================================
# Reconstruction
# ==============================================================================


def reconstruct_message(
    record: RawRecord,
    tool_results: Mapping[str, ToolResultEntry],
    fallbacks: FallbackSource = DEFAULT_FALLBACKS,
) -> ChatMessage | None:
    """
    Convert one record into a ChatMessage.

    Args:
        record: Decoded transcript record
        tool_results: Session-wide results from collect_tool_results()
        fallbacks: Source of ids/timestamps for records missing them

    Returns:
        ChatMessage, or None if the record is not displayed
    """
    if record.type in IGNORED_RECORD_TYPES or record.type not in DISPLAYABLE_RECORD_TYPES:
        return None
    if is_tool_result_relay(record):
        return None

    blocks = record.content_blocks
    text_content = extract_text_content(record.content)
    has_tool_use = any(isinstance(block, ToolUseContent) for block in blocks)
    if not text_content and not has_tool_use:
        return None

    timestamp_ms = parse_timestamp_ms(record.timestamp)
    if timestamp_ms is None:
        timestamp_ms = fallbacks.clock()
        logger.debug('Record %s has no usable timestamp (%r), using current time', record.uuid, record.timestamp)

    is_assistant = record.type == 'assistant'
    return ChatMessage(
        id=record.uuid or fallbacks.id_factory(timestamp_ms),
        role=record.type,
        content=text_content,
        timestamp_ms=timestamp_ms,
        tool_calls=_build_tool_calls(blocks, tool_results) if is_assistant else None,
        content_blocks=_map_content_blocks(blocks) if is_assistant else None,
    )


def parse_record(record: RawRecord, fallbacks: FallbackSource = DEFAULT_FALLBACKS) -> ChatMessage | None:
    """
    Convert a single record without a session-wide result map.

    Only tool_result blocks inside the same record are correlated. Use
    SessionHistoryService.load_messages() for full cross-record matching.
    """
    local_results = {
        block.tool_use_id: tool_result_entry(block)
        for block in record.content_blocks
        if isinstance(block, ToolResultContent) and block.tool_use_id
    }
    return reconstruct_message(record, local_results, fallbacks)
