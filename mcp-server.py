#!/usr/bin/env -S uv run
"""
Session History MCP Server.

Exposes reconstructed conversation history of agent sessions as MCP tools.

Setup:
    claude mcp add --transport stdio session-history -- uv run "$REPO_ROOT/mcp-server.py"
"""

from __future__ import annotations

from session_history.mcp.server import main

if __name__ == '__main__':
    main()
