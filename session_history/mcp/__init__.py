"""MCP server entry point for session-history."""

from __future__ import annotations

from session_history.mcp.server import main, server

__all__ = ['main', 'server']
