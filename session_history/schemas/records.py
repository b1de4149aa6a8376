"""
Pydantic models for session transcript JSONL records (wire schema).

Each physical line of a session log is one JSON object. The engine that
writes these logs is external and its output cannot be assumed well-formed,
so unlike an archival schema these models never reject a record:

- Unknown keys are kept (PermissiveModel, extra='allow')
- Every modeled field is optional
- A field holding the wrong JSON type degrades to None (see OptionalStr)
- Unknown content block types validate as UnknownContent

Record types observed in session logs:
- user: human turns, and tool_result relay turns sent back to the model
- assistant: model turns with text, thinking and tool_use blocks
- system / result / file-history-snapshot: bookkeeping, never displayed

Message content is either a plain string or a list of content blocks:

    {"type": "text", "text": "..."}
    {"type": "thinking", "thinking": "..."}
    {"type": "tool_use", "id": "toolu_...", "name": "Read", "input": {...}}
    {"type": "tool_result", "tool_use_id": "toolu_...", "content": ..., "is_error": true}
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Any, Literal

import pydantic

from session_history.schemas.types import JsonValue, OptionalNumber, OptionalStr, PermissiveModel

__all__ = [
    'DISPLAYABLE_RECORD_TYPES',
    'IGNORED_RECORD_TYPES',
    'ContentBlock',
    'RawRecord',
    'RecordMessage',
    'TextContent',
    'ThinkingContent',
    'ToolResultContent',
    'ToolUseContent',
    'UnknownContent',
]

# Only these record types ever become chat messages
DISPLAYABLE_RECORD_TYPES = frozenset({'user', 'assistant'})

# Bookkeeping records present in every log, always discarded
IGNORED_RECORD_TYPES = frozenset({'system', 'result', 'file-history-snapshot'})


# ==============================================================================
# Content Blocks (Discriminated Union with Fallback)
# ==============================================================================


def _error_flag(value: object) -> bool:
    # Only a JSON boolean true marks a failed tool call
    return value is True


class TextContent(PermissiveModel):
    """Text content block from user or assistant messages."""

    type: Literal['text']
    text: OptionalStr = None


class ThinkingContent(PermissiveModel):
    """Thinking (model-internal reasoning) block from assistant messages."""

    type: Literal['thinking']
    thinking: OptionalStr = None


class ToolUseContent(PermissiveModel):
    """Tool invocation block from assistant messages."""

    type: Literal['tool_use']
    id: OptionalStr = None
    name: OptionalStr = None
    input: JsonValue = None  # Opaque, schema depends on the tool


class ToolResultContent(PermissiveModel):
    """Tool result block, usually relayed back in a later user record."""

    type: Literal['tool_result']
    tool_use_id: OptionalStr = None
    content: JsonValue = None  # String, list of blocks, or any JSON value
    is_error: Annotated[bool, pydantic.BeforeValidator(_error_flag)] = False


class UnknownContent(PermissiveModel):
    """Any other block (image, document, future types).

    Carried through so relay detection sees it, but never displayed.
    """

    type: OptionalStr = None


_KNOWN_BLOCK_TYPES = frozenset({'text', 'thinking', 'tool_use', 'tool_result'})


def _block_tag(value: Any) -> str:
    if isinstance(value, dict):
        block_type = value.get('type')
    else:
        block_type = getattr(value, 'type', None)
    if isinstance(block_type, str) and block_type in _KNOWN_BLOCK_TYPES:
        return block_type
    return 'unknown'


ContentBlock = Annotated[
    Annotated[TextContent, pydantic.Tag('text')]
    | Annotated[ThinkingContent, pydantic.Tag('thinking')]
    | Annotated[ToolUseContent, pydantic.Tag('tool_use')]
    | Annotated[ToolResultContent, pydantic.Tag('tool_result')]
    | Annotated[UnknownContent, pydantic.Tag('unknown')],
    pydantic.Discriminator(_block_tag),
]


# ==============================================================================
# Message Structure
# ==============================================================================


def _content_or_none(value: object) -> object:
    """Keep string or list content; anything else is treated as absent."""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        # Non-object list elements still count as (unknown) blocks
        return [item if isinstance(item, dict) else {'value': item} for item in value]
    return None


def _object_or_none(value: object) -> object:
    return value if isinstance(value, dict) else None


class RecordMessage(PermissiveModel):
    """The message body of a user or assistant record."""

    role: OptionalStr = None
    content: Annotated[
        str | list[ContentBlock] | None,
        pydantic.BeforeValidator(_content_or_none),
    ] = None


# ==============================================================================
# Record
# ==============================================================================


class RawRecord(PermissiveModel):
    """One decoded transcript line."""

    type: OptionalStr = None
    parentUuid: OptionalStr = None
    sessionId: OptionalStr = None
    uuid: OptionalStr = None
    timestamp: OptionalStr = None  # ISO-8601
    message: Annotated[RecordMessage | None, pydantic.BeforeValidator(_object_or_none)] = None
    # result records only
    subtype: OptionalStr = None
    duration_ms: OptionalNumber = None
    duration_api_ms: OptionalNumber = None
    result: OptionalStr = None

    @property
    def content(self) -> str | Sequence[ContentBlock] | None:
        """Message content: plain text, content blocks, or None when absent."""
        if self.message is None:
            return None
        return self.message.content

    @property
    def content_blocks(self) -> Sequence[ContentBlock]:
        """Content blocks, or an empty sequence for string/missing content."""
        content = self.content
        if content is None or isinstance(content, str):
            return ()
        return content
