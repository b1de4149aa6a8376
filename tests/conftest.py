"""Shared fixtures for session-history tests."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from pathlib import Path

import pytest
from session_builders import FIXED_NOW_MS, jsonl

from session_history.paths import get_session_path
from session_history.services.reconstruct import FallbackSource


@pytest.fixture
def projects_root(tmp_path: Path) -> Path:
    root = tmp_path / 'projects'
    root.mkdir()
    return root


@pytest.fixture
def project_path(tmp_path: Path) -> Path:
    return tmp_path / 'vault'


@pytest.fixture
def write_session(projects_root: Path, project_path: Path) -> Callable[..., Path]:
    """Write JSONL lines as a session log for project_path under projects_root."""

    def _write(session_id: str, *lines: object) -> Path:
        session_path = get_session_path(project_path, session_id, projects_root)
        session_path.parent.mkdir(parents=True, exist_ok=True)
        session_path.write_text(jsonl(*lines), encoding='utf-8')
        return session_path

    return _write


@pytest.fixture
def fixed_fallbacks() -> FallbackSource:
    """Deterministic clock and sequential ids for records missing timestamp/uuid."""
    counter = itertools.count(1)
    return FallbackSource(
        clock=lambda: FIXED_NOW_MS,
        id_factory=lambda timestamp_ms: f'generated-{timestamp_ms}-{next(counter)}',
    )
