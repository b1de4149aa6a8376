"""
Schema models for session transcripts.

- records: tolerant wire models for decoded JSONL lines
- messages: frozen output models for the display layer
"""

from __future__ import annotations

from session_history.schemas.messages import (
    ChatMessage,
    MessageBlock,
    MessageRole,
    TextBlock,
    ThinkingBlock,
    ToolCallInfo,
    ToolCallStatus,
    ToolResultEntry,
    ToolUseBlock,
)
from session_history.schemas.records import (
    DISPLAYABLE_RECORD_TYPES,
    IGNORED_RECORD_TYPES,
    ContentBlock,
    RawRecord,
    RecordMessage,
    TextContent,
    ThinkingContent,
    ToolResultContent,
    ToolUseContent,
    UnknownContent,
)

__all__ = [
    'DISPLAYABLE_RECORD_TYPES',
    'IGNORED_RECORD_TYPES',
    'ChatMessage',
    'ContentBlock',
    'MessageBlock',
    'MessageRole',
    'RawRecord',
    'RecordMessage',
    'TextBlock',
    'TextContent',
    'ThinkingBlock',
    'ThinkingContent',
    'ToolCallInfo',
    'ToolCallStatus',
    'ToolResultContent',
    'ToolResultEntry',
    'ToolUseBlock',
    'ToolUseContent',
    'UnknownContent',
]
