"""
Path resolution for session transcript logs.

Session logs live at:

    <projects_root>/<encoded_project_path>/<session_id>.jsonl

The project directory name is the URL-safe base64 encoding of the project's
absolute path with '=' padding stripped:

- `+` -> `-`
- `/` -> `_`
- trailing `=` removed

Unlike a character-substitution scheme this encoding is reversible, and it
is stable across processes: the same absolute path always maps to the same
directory, so history lookups for a project survive restarts.
"""

from __future__ import annotations

import base64
import os
from pathlib import Path

from session_history.config import settings

__all__ = ['encode_project_path', 'get_projects_path', 'get_session_path']

SESSION_FILE_SUFFIX = '.jsonl'


def encode_project_path(path: Path | str) -> str:
    """
    Encode a project path into its session directory name.

    The path is made absolute and normalized first (without resolving
    symlinks), so relative spellings of the same directory agree.

    Args:
        path: Filesystem path of the project

    Returns:
        Padding-free URL-safe base64 of the absolute path

    Examples:
        >>> encode_project_path('/Users/me/vault')
        'L1VzZXJzL21lL3ZhdWx0'
    """
    absolute_path = os.path.abspath(os.fspath(path))
    # fsencode restores the raw bytes of undecodable names (surrogate escapes)
    encoded = base64.urlsafe_b64encode(os.fsencode(absolute_path)).decode('ascii')
    return encoded.rstrip('=')


def get_projects_path() -> Path:
    """Root directory holding one subdirectory per encoded project."""
    return settings.PROJECTS_DIR


def get_session_path(project_path: Path | str, session_id: str, projects_root: Path | None = None) -> Path:
    """
    Full path to a session's JSONL log.

    Args:
        project_path: The project's filesystem path
        session_id: Session identifier, used verbatim as the file stem
        projects_root: Override for the configured projects directory

    Returns:
        Path of the session log (which may not exist)
    """
    root = projects_root if projects_root is not None else get_projects_path()
    return root / encode_project_path(project_path) / f'{session_id}{SESSION_FILE_SUFFIX}'
