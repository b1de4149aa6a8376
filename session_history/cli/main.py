#!/usr/bin/env python3
"""
Command-line interface for session-history.

Provides commands to locate session logs and print the conversation
reconstructed from them.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import typer

from session_history.cli.logger import configure_logging
from session_history.exceptions import SessionHistoryError
from session_history.schemas.messages import ChatMessage, ToolCallInfo
from session_history.services.history import SessionHistoryService
from session_history.services.reader import read_session_text
from session_history.services.subagent import extract_final_result

app = typer.Typer(
    name='session-history',
    help='Show conversation history reconstructed from agent session logs',
    add_completion=False,
)

RESULT_PREVIEW_CHARS = 200


def _format_timestamp(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000, UTC).strftime('%Y-%m-%d %H:%M:%S')


def _preview(text: str) -> str:
    """Single-line preview of a tool result."""
    flat = ' '.join(text.split())
    if len(flat) <= RESULT_PREVIEW_CHARS:
        return flat
    return flat[: RESULT_PREVIEW_CHARS - 3] + '...'


def _echo_tool_call(tool_call: ToolCallInfo) -> None:
    color = typer.colors.RED if tool_call.status == 'error' else typer.colors.CYAN
    typer.secho(f'  -> {tool_call.name} [{tool_call.status}]', fg=color)
    if tool_call.result:
        typer.echo(f'     {_preview(tool_call.result)}')


def _echo_message(message: ChatMessage) -> None:
    role_color = typer.colors.GREEN if message.role == 'user' else typer.colors.BLUE
    typer.secho(f'[{_format_timestamp(message.timestamp_ms)}] {message.role}', fg=role_color, bold=True)
    if message.content:
        typer.echo(message.content)
    for tool_call in message.tool_calls or ():
        _echo_tool_call(tool_call)
    typer.echo()


@app.command()
def show(
    project: Path = typer.Argument(..., help='Project directory the session belongs to'),
    session_id: str = typer.Argument(..., help='Session ID'),
    projects_root: Path | None = typer.Option(
        None, '--projects-root', help='Session projects directory (default: ~/.claude/projects)'
    ),
    as_json: bool = typer.Option(False, '--json', help='Print messages as JSON'),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """Print the conversation of a session, oldest message first."""
    configure_logging(verbose)

    try:
        service = SessionHistoryService(projects_root)
        service.require_session_path(project, session_id)
        messages = service.load_messages(project, session_id)
    except SessionHistoryError as e:
        typer.secho(f'Error: {e}', fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps([message.to_wire() for message in messages], indent=2, ensure_ascii=False))
        return

    if not messages:
        typer.secho('No messages in session log', fg=typer.colors.YELLOW)
        return

    for message in messages:
        _echo_message(message)


@app.command()
def path(
    project: Path = typer.Argument(..., help='Project directory the session belongs to'),
    session_id: str = typer.Argument(..., help='Session ID'),
    projects_root: Path | None = typer.Option(
        None, '--projects-root', help='Session projects directory (default: ~/.claude/projects)'
    ),
) -> None:
    """Print where the log for a session is stored."""
    typer.echo(SessionHistoryService(projects_root).session_path(project, session_id))


@app.command('subagent-result')
def subagent_result(
    output_file: Path = typer.Argument(..., help='JSONL output of a subagent run'),
) -> None:
    """Print the final answer from a subagent's JSONL output."""
    text = read_session_text(output_file)
    if text is None:
        typer.secho(f'Error: Cannot read {output_file}', fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    result = extract_final_result(text)
    if result is None:
        typer.secho('No result found', fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(1)

    typer.echo(result)


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == '__main__':
    main()
