"""
Output models consumed by the conversation display layer.

All models are frozen: a ChatMessage is built once during reconstruction and
never mutated afterwards. Serialization uses camelCase keys via to_wire():

    {
      "id": "u1",
      "role": "assistant",
      "content": "Searching...",
      "timestampMs": 1705312860000,
      "toolCalls": [{"id": "t1", "name": "WebSearch", "input": {...},
                     "status": "completed", "result": "Found 10 results"}],
      "contentBlocks": [{"type": "text", "content": "Searching..."},
                        {"type": "tool_use", "toolId": "t1"}]
    }
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Literal

import pydantic

from session_history.schemas.types import BaseStrictModel, CamelStrictModel, JsonValue

__all__ = [
    'ChatMessage',
    'MessageBlock',
    'MessageRole',
    'TextBlock',
    'ThinkingBlock',
    'ToolCallInfo',
    'ToolCallStatus',
    'ToolResultEntry',
    'ToolUseBlock',
]

MessageRole = Literal['user', 'assistant']

# No pending state: a transcript only ever contains finished tool calls
ToolCallStatus = Literal['completed', 'error']


class ToolResultEntry(BaseStrictModel):
    """Correlated tool result, keyed by invocation id."""

    content: str
    is_error: bool = False


class ToolCallInfo(CamelStrictModel):
    """A tool invocation paired with its result (if one was logged)."""

    id: str
    name: str
    input: JsonValue = pydantic.Field(default_factory=dict)
    status: ToolCallStatus = 'completed'
    result: str | None = None


# ==============================================================================
# Display Content Blocks
# ==============================================================================


class TextBlock(CamelStrictModel):
    type: Literal['text'] = 'text'
    content: str


class ThinkingBlock(CamelStrictModel):
    type: Literal['thinking'] = 'thinking'
    content: str


class ToolUseBlock(CamelStrictModel):
    """Reference to a ToolCallInfo in the same message (by id only)."""

    type: Literal['tool_use'] = 'tool_use'
    tool_id: str


MessageBlock = Annotated[TextBlock | ThinkingBlock | ToolUseBlock, pydantic.Field(discriminator='type')]


# ==============================================================================
# Chat Message
# ==============================================================================


class ChatMessage(CamelStrictModel):
    """One display-ready conversation message."""

    id: str
    role: MessageRole
    content: str
    timestamp_ms: int
    tool_calls: Sequence[ToolCallInfo] | None = None
    content_blocks: Sequence[MessageBlock] | None = None
