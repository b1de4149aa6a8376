"""
Session log reader.

A missing session log is a normal state (new conversation, log not yet
flushed), so reading never raises: callers get None and decide what an
absent history means for them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from session_history.paths import get_session_path

__all__ = ['read_session_text', 'session_exists']

logger = logging.getLogger(__name__)


def read_session_text(path: Path) -> str | None:
    """
    Read the full text of a session log.

    Undecodable bytes (e.g. a write torn mid-character) are replaced rather
    than failing the whole read; the affected line simply fails to decode.

    Args:
        path: Physical location of the JSONL log

    Returns:
        File content, or None if the file is missing or cannot be opened
    """
    try:
        return path.read_text(encoding='utf-8', errors='replace')
    except FileNotFoundError:
        logger.debug('No session log at %s', path)
        return None
    except (OSError, ValueError) as e:  # ValueError: embedded NUL in path
        logger.debug('Cannot read session log %s: %s', path, e)
        return None


def session_exists(project_path: Path | str, session_id: str, projects_root: Path | None = None) -> bool:
    """Check whether a session log exists for a project."""
    try:
        return get_session_path(project_path, session_id, projects_root).is_file()
    except (OSError, ValueError):
        return False
