"""Shared utilities for MCP servers."""

from __future__ import annotations

# Standard Library
import sys
from datetime import UTC, datetime
from typing import Any

# Third-Party Libraries
from mcp.server.fastmcp import Context


class DualLogger:
    """Logs messages to both stderr and MCP client context.

    stdout is reserved for the stdio transport.
    """

    def __init__(self, ctx: Context[Any, Any, Any]) -> None:
        self.ctx = ctx

    def _timestamp(self) -> str:
        return datetime.now(UTC).strftime('%Y-%m-%d %H:%M:%S')

    def _echo(self, level: str, message: str) -> None:
        print(f'[{self._timestamp()}] [{level}] {message}', file=sys.stderr)

    async def info(self, message: str) -> None:
        self._echo('INFO', message)
        await self.ctx.info(message)

    async def warning(self, message: str) -> None:
        self._echo('WARNING', message)
        await self.ctx.warning(message)
