"""Command-line interface for session-history."""

from __future__ import annotations

from session_history.cli.main import app, main

__all__ = ['app', 'main']
