"""
Services for reconstructing conversation history from session logs.

Each module is one pipeline stage; history.py wires them together.
"""

from __future__ import annotations

from session_history.services.assembler import sort_chronologically
from session_history.services.correlation import collect_tool_results, normalize_result_content
from session_history.services.decoder import (
    DecodeResult,
    RecordDecodeResult,
    decode_lines,
    decode_records,
    decode_session,
)
from session_history.services.history import (
    SessionHistoryService,
    load_messages_from_text,
    load_session_messages,
    read_session_records,
)
from session_history.services.reader import read_session_text, session_exists
from session_history.services.reconstruct import (
    FallbackSource,
    is_tool_result_relay,
    parse_record,
    parse_timestamp_ms,
    reconstruct_message,
)
from session_history.services.subagent import extract_final_result

__all__ = [
    'DecodeResult',
    'FallbackSource',
    'RecordDecodeResult',
    'SessionHistoryService',
    'collect_tool_results',
    'decode_lines',
    'decode_records',
    'decode_session',
    'extract_final_result',
    'is_tool_result_relay',
    'load_messages_from_text',
    'load_session_messages',
    'normalize_result_content',
    'parse_record',
    'parse_timestamp_ms',
    'read_session_records',
    'read_session_text',
    'reconstruct_message',
    'session_exists',
    'sort_chronologically',
]
