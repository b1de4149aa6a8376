"""Chronological assembly of reconstructed messages."""

from __future__ import annotations

from collections.abc import Iterable

from session_history.schemas.messages import ChatMessage

__all__ = ['sort_chronologically']


def sort_chronologically(messages: Iterable[ChatMessage]) -> list[ChatMessage]:
    """
    Order messages by timestamp, oldest first.

    A session log interleaves a request turn with the turns answering it;
    readers need plain top-to-bottom causal order. sorted() is stable, so
    messages sharing a timestamp keep their file order.
    """
    return sorted(messages, key=lambda message: message.timestamp_ms)
