"""
Session history service - transcript log to ordered chat messages.

Pipeline (each stage feeds the next, nothing flows back):

    get_session_path     project + session id -> log location
    read_session_text    log location -> text (None if absent)
    decode_records       text -> records (bad lines dropped)
    collect_tool_results records -> {tool_use id: result}    (pass 1)
    reconstruct_message  record + results -> message | None  (pass 2)
    sort_chronologically messages -> timestamp order (stable)

The service is stateless between calls. The result map and record lists
live only for the duration of one load, so different sessions can be loaded
concurrently from different threads.
"""

from __future__ import annotations

import logging
from pathlib import Path

from session_history.exceptions import SessionNotFoundError
from session_history.paths import get_projects_path, get_session_path
from session_history.schemas.messages import ChatMessage
from session_history.schemas.records import RawRecord
from session_history.services.assembler import sort_chronologically
from session_history.services.correlation import collect_tool_results
from session_history.services.decoder import decode_records
from session_history.services.reader import read_session_text, session_exists
from session_history.services.reconstruct import DEFAULT_FALLBACKS, FallbackSource, reconstruct_message

__all__ = [
    'SessionHistoryService',
    'load_messages_from_text',
    'load_session_messages',
    'read_session_records',
]

logger = logging.getLogger(__name__)


def load_messages_from_text(text: str, fallbacks: FallbackSource = DEFAULT_FALLBACKS) -> list[ChatMessage]:
    """
    Reconstruct ordered messages from in-memory JSONL content.

    Args:
        text: Full session log content
        fallbacks: Source of ids/timestamps for records missing them

    Returns:
        Display-ready messages sorted by timestamp
    """
    records = decode_records(text)

    # First pass: results may be logged long after their tool_use
    tool_results = collect_tool_results(records)

    # Second pass: build messages with results attached
    messages = []
    for record in records:
        message = reconstruct_message(record, tool_results, fallbacks)
        if message is not None:
            messages.append(message)

    logger.debug(
        'Reconstructed %d messages from %d records (%d tool results)',
        len(messages),
        len(records),
        len(tool_results),
    )
    return sort_chronologically(messages)


class SessionHistoryService:
    """
    Service for loading conversation history from session logs.

    Read-only with respect to the logs. An absent log is an empty history,
    never an error.
    """

    def __init__(self, projects_root: Path | None = None, fallbacks: FallbackSource | None = None) -> None:
        """
        Initialize history service.

        Args:
            projects_root: Override for the configured projects directory
            fallbacks: Clock/id source for records without timestamp/uuid
        """
        self.projects_root = projects_root if projects_root is not None else get_projects_path()
        self.fallbacks = fallbacks or DEFAULT_FALLBACKS

    def session_path(self, project_path: Path | str, session_id: str) -> Path:
        """Resolve the log location for a project's session."""
        return get_session_path(project_path, session_id, self.projects_root)

    def exists(self, project_path: Path | str, session_id: str) -> bool:
        """Check whether the session log exists."""
        return session_exists(project_path, session_id, self.projects_root)

    def require_session_path(self, project_path: Path | str, session_id: str) -> Path:
        """
        Resolve the log location, insisting that it exists.

        Raises:
            SessionNotFoundError: If there is no log for this session
        """
        session_path = self.session_path(project_path, session_id)
        if not self.exists(project_path, session_id):
            raise SessionNotFoundError(session_id, session_path)
        return session_path

    def read_records(self, project_path: Path | str, session_id: str) -> list[RawRecord]:
        """Decoded records in file order (empty if the log is absent)."""
        text = read_session_text(self.session_path(project_path, session_id))
        if text is None:
            return []
        return decode_records(text)

    def load_messages(self, project_path: Path | str, session_id: str) -> list[ChatMessage]:
        """
        Load a session's conversation as ordered chat messages.

        Args:
            project_path: The project's filesystem path
            session_id: Session identifier

        Returns:
            Messages sorted by timestamp (empty if the log is absent)
        """
        session_path = self.session_path(project_path, session_id)
        text = read_session_text(session_path)
        if text is None:
            return []

        logger.debug('Loading session %s from %s', session_id, session_path)
        return load_messages_from_text(text, self.fallbacks)


def load_session_messages(
    project_path: Path | str, session_id: str, projects_root: Path | None = None
) -> list[ChatMessage]:
    """Load a session's ordered chat messages (see SessionHistoryService)."""
    return SessionHistoryService(projects_root).load_messages(project_path, session_id)


def read_session_records(
    project_path: Path | str, session_id: str, projects_root: Path | None = None
) -> list[RawRecord]:
    """Decoded records of a session log, in file order."""
    return SessionHistoryService(projects_root).read_records(project_path, session_id)
