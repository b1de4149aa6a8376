"""Configuration for session-history."""

from __future__ import annotations

from session_history.config.base import HistorySettings, LogLevel, get_settings, lazy_settings, settings

__all__ = ['HistorySettings', 'LogLevel', 'get_settings', 'lazy_settings', 'settings']
