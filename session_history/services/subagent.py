"""
Final result extraction from subagent JSONL output.

A subagent run streams the same record format as a session log. Its answer
is the last assistant text block; runs that end without one may still
report a top-level `result` string on their final result record.
"""

from __future__ import annotations

from session_history.schemas.records import TextContent
from session_history.services.decoder import decode_records

__all__ = ['extract_final_result']


def extract_final_result(text: str) -> str | None:
    """
    Extract the final textual result of a subagent run.

    Args:
        text: JSONL output of the subagent

    Returns:
        Last non-blank assistant text (stripped), else the last non-blank
        `result` string (stripped), else None
    """
    last_assistant_text: str | None = None
    last_result_text: str | None = None

    for record in decode_records(text):
        if record.result and record.result.strip():
            last_result_text = record.result.strip()

        if record.message is None or record.message.role != 'assistant':
            continue

        for block in record.content_blocks:
            if isinstance(block, TextContent) and block.text and block.text.strip():
                last_assistant_text = block.text.strip()

    return last_assistant_text if last_assistant_text is not None else last_result_text
