"""Builders for transcript records used across tests."""

from __future__ import annotations

import json
from typing import Any

# Clock value used by deterministic fallbacks
FIXED_NOW_MS = 1_700_000_000_000


def text(value: str) -> dict[str, Any]:
    return {'type': 'text', 'text': value}


def thinking(value: str) -> dict[str, Any]:
    return {'type': 'thinking', 'thinking': value, 'signature': 'sig'}


def tool_use(tool_id: str, name: str, tool_input: Any = None) -> dict[str, Any]:
    block: dict[str, Any] = {'type': 'tool_use', 'id': tool_id, 'name': name}
    if tool_input is not None:
        block['input'] = tool_input
    return block


def tool_result(tool_use_id: str, content: Any = None, is_error: Any = None) -> dict[str, Any]:
    block: dict[str, Any] = {'type': 'tool_result', 'tool_use_id': tool_use_id}
    if content is not None:
        block['content'] = content
    if is_error is not None:
        block['is_error'] = is_error
    return block


def record(
    record_type: str,
    content: Any = None,
    uuid: str | None = None,
    timestamp: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    data: dict[str, Any] = {'type': record_type, **extra}
    if uuid is not None:
        data['uuid'] = uuid
    if timestamp is not None:
        data['timestamp'] = timestamp
    if content is not None:
        data['message'] = {'role': record_type, 'content': content}
    return data


def user(content: Any, uuid: str | None = None, timestamp: str | None = None, **extra: Any) -> dict[str, Any]:
    return record('user', content, uuid, timestamp, **extra)


def assistant(content: Any, uuid: str | None = None, timestamp: str | None = None, **extra: Any) -> dict[str, Any]:
    return record('assistant', content, uuid, timestamp, **extra)


def jsonl(*lines: object) -> str:
    """Join records into JSONL text. Strings are written verbatim (raw lines)."""
    return '\n'.join(line if isinstance(line, str) else json.dumps(line) for line in lines) + '\n'
