"""
Session History MCP Server.

Exposes reconstructed conversation history of agent sessions as MCP tools.

Setup:
    claude mcp add --scope user session-history -- uvx --from git+<repo-url> session-history-mcp

Example:
    # Load the conversation of a session in a project
    load_session_history(project_path='/Users/me/vault', session_id='abc123...')
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from session_history.mcp.utils import DualLogger
from session_history.schemas.messages import ChatMessage
from session_history.services.history import SessionHistoryService

# ==============================================================================
# Server Setup
# ==============================================================================

server = FastMCP('session-history')


def _service(projects_root: str | None) -> SessionHistoryService:
    return SessionHistoryService(Path(projects_root) if projects_root else None)


# ==============================================================================
# Tools
# ==============================================================================


@server.tool()
async def load_session_history(
    project_path: str,
    session_id: str,
    projects_root: str | None = None,
    ctx: Context[Any, Any, Any] | None = None,
) -> list[ChatMessage]:
    """
    Load the conversation history of a session.

    Messages are ordered oldest first, with every tool call paired with its
    logged result. A session without a log yields an empty list.

    Args:
        project_path: Project directory the session belongs to
        session_id: Session ID
        projects_root: Override for the session projects directory

    Returns:
        Chat messages sorted by timestamp

    Examples:
        messages = await load_session_history('/Users/me/vault', 'abc123')
        # Returns: [ChatMessage(role='user', content='Hello', ...), ...]
    """
    service = _service(projects_root)
    session_path = service.session_path(project_path, session_id)
    logger = DualLogger(ctx) if ctx is not None else None

    if not service.exists(project_path, session_id):
        if logger is not None:
            await logger.warning(f'No session log at {session_path}')
        return []

    messages = service.load_messages(project_path, session_id)

    if logger is not None:
        await logger.info(f'Loaded {len(messages)} messages from {session_path}')

    return messages


@server.tool()
async def session_log_exists(
    project_path: str,
    session_id: str,
    projects_root: str | None = None,
) -> bool:
    """
    Check whether a session has a log on disk.

    Args:
        project_path: Project directory the session belongs to
        session_id: Session ID
        projects_root: Override for the session projects directory

    Returns:
        True if the session log exists
    """
    return _service(projects_root).exists(project_path, session_id)


# ==============================================================================
# Server Entry Point
# ==============================================================================


def main() -> None:
    """Run the MCP server."""
    server.run()


if __name__ == '__main__':
    main()
