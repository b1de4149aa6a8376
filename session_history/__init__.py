"""
session-history: conversation history from agent session transcripts.

Reconstructs an ordered, display-ready list of chat messages from the
append-only JSONL log an agent engine writes per session, pairing every
tool invocation with its result.

    from session_history import load_session_messages

    messages = load_session_messages('/path/to/project', session_id)
"""

from __future__ import annotations

from session_history.paths import encode_project_path, get_projects_path, get_session_path
from session_history.schemas.messages import ChatMessage, ToolCallInfo
from session_history.services.history import SessionHistoryService, load_session_messages, read_session_records
from session_history.services.reconstruct import FallbackSource, parse_record
from session_history.services.reader import session_exists
from session_history.services.subagent import extract_final_result

__all__ = [
    'ChatMessage',
    'FallbackSource',
    'SessionHistoryService',
    'ToolCallInfo',
    'encode_project_path',
    'extract_final_result',
    'get_projects_path',
    'get_session_path',
    'load_session_messages',
    'parse_record',
    'read_session_records',
    'session_exists',
]
