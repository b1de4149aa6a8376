"""
Base configuration for session-history.

Shared settings and helper functions for the library, CLI and MCP server.
"""

from __future__ import annotations

import os
import pathlib
from typing import Literal, TypeVar

import lazy_object_proxy
import pydantic
import pydantic_settings

T = TypeVar('T', bound='HistorySettings')

LogLevel = Literal['DEBUG', 'INFO', 'WARNING', 'ERROR']


def _default_projects_dir() -> pathlib.Path:
    return pathlib.Path.home() / '.claude' / 'projects'


class HistorySettings(pydantic_settings.BaseSettings):
    """Configuration shared by all session-history entry points."""

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix='SESSION_HISTORY_',
        env_file_encoding='utf-8',
        case_sensitive=True,  # Fail fast on misconfiguration
        extra='forbid',  # Reject unknown keys in .env files
    )

    # Root holding one directory per encoded project path
    PROJECTS_DIR: pathlib.Path = pydantic.Field(default_factory=_default_projects_dir)

    # Default CLI log level (--verbose overrides to DEBUG)
    LOG_LEVEL: LogLevel = 'WARNING'

    @pydantic.field_validator('PROJECTS_DIR')
    @classmethod
    def expand_projects_dir(cls, v: pathlib.Path) -> pathlib.Path:
        """Expand ~ so env values like '~/.claude/projects' work."""
        return v.expanduser()


def get_settings(settings_class: type[T] = HistorySettings, env_file: str | None = None) -> T:
    """
    Factory for creating settings with dynamic .env file loading.

    LOAD_ENV_FILE environment variable specifies custom .env file path.
    When unset, loads from environment variables only.

    Args:
        settings_class: Settings class to instantiate
        env_file: Optional path to .env file (overrides LOAD_ENV_FILE)

    Returns:
        Settings instance

    Raises:
        FileNotFoundError: If specified .env file doesn't exist
    """
    env_file_path = env_file or os.getenv('LOAD_ENV_FILE')

    if not env_file_path:
        return settings_class()  # No .env file, load from environment only

    resolved_path = pathlib.Path(env_file_path).resolve()
    if not resolved_path.exists():
        raise FileNotFoundError(f'Environment file not found: {resolved_path}')

    return settings_class(_env_file=resolved_path)


def lazy_settings(settings_class: type[T]) -> T:
    """
    Lazy settings - defers instantiation until first access.

    Args:
        settings_class: Settings class to instantiate

    Returns:
        Proxy that instantiates settings on first access
    """
    return lazy_object_proxy.Proxy(lambda: get_settings(settings_class))


# Module-level singleton (lazy-loaded)
settings = lazy_settings(HistorySettings)
