"""
Tool result collection (first pass).

A tool_result usually arrives in a later user record than the assistant
record holding its tool_use, sometimes many records later. Scanning every
record before reconstructing any message lets each invocation find its
result no matter where it was logged.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from session_history.schemas.messages import ToolResultEntry
from session_history.schemas.records import RawRecord, ToolResultContent
from session_history.schemas.types import JsonValue

__all__ = ['collect_tool_results', 'normalize_result_content', 'tool_result_entry']

logger = logging.getLogger(__name__)


def normalize_result_content(value: JsonValue) -> str:
    """
    Normalize a tool_result payload to a display string.

    Strings pass through unchanged. Any other JSON value is serialized
    compactly; a missing payload becomes the empty string.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ''
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def tool_result_entry(block: ToolResultContent) -> ToolResultEntry:
    return ToolResultEntry(content=normalize_result_content(block.content), is_error=block.is_error)


def collect_tool_results(records: Iterable[RawRecord]) -> dict[str, ToolResultEntry]:
    """
    Map every tool invocation id to its logged result.

    Scans all records regardless of type. If the same id is answered more
    than once, the last occurrence in file order wins.

    Args:
        records: Decoded records in file order

    Returns:
        Dict mapping tool_use id to its ToolResultEntry
    """
    results: dict[str, ToolResultEntry] = {}

    for record in records:
        for block in record.content_blocks:
            if not isinstance(block, ToolResultContent) or not block.tool_use_id:
                continue
            if block.tool_use_id in results:
                logger.debug('Duplicate tool_result for %s, keeping the later one', block.tool_use_id)
            results[block.tool_use_id] = tool_result_entry(block)

    return results
