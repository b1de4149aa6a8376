"""
Shared exceptions for session-history.

The reconstruction engine itself never raises for bad or missing input: an
absent log is an empty history and malformed lines are dropped. These
exceptions exist for callers that need to tell "no log" apart from "empty
log", such as the CLI.

Exception Hierarchy:
    SessionHistoryError (base)
    └── SessionNotFoundError (no log file for project + session)
"""

from __future__ import annotations

from pathlib import Path


class SessionHistoryError(Exception):
    """Base exception for all session-history errors."""


class SessionNotFoundError(SessionHistoryError):
    """Raised when a session log does not exist at its resolved location."""

    def __init__(self, session_id: str, session_path: Path) -> None:
        self.session_id = session_id
        self.session_path = session_path
        super().__init__(f'Session not found: {session_id}\nSearched: {session_path}')
