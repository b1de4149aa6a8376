"""End-to-end tests: session log on disk to ordered chat messages."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from session_builders import FIXED_NOW_MS, assistant, jsonl, record, text, thinking, tool_result, tool_use, user

from session_history import load_session_messages, read_session_records
from session_history.exceptions import SessionNotFoundError
from session_history.schemas.messages import ToolCallInfo
from session_history.services.history import SessionHistoryService, load_messages_from_text
from session_history.services.reconstruct import FallbackSource

T0 = '2024-01-15T10:00:00Z'
T1 = '2024-01-15T10:01:00Z'
T2 = '2024-01-15T10:02:00Z'
T3 = '2024-01-15T10:03:00Z'


@pytest.fixture
def service(projects_root: Path, fixed_fallbacks: FallbackSource) -> SessionHistoryService:
    return SessionHistoryService(projects_root, fixed_fallbacks)


# ==============================================================================
# Example scenarios
# ==============================================================================


def test_simple_conversation(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    write_session(
        's1',
        user('Hello', uuid='u1', timestamp=T0),
        assistant([text('Hi!')], uuid='a1', timestamp=T1),
    )

    messages = service.load_messages(project_path, 's1')

    assert [(m.role, m.content) for m in messages] == [('user', 'Hello'), ('assistant', 'Hi!')]
    assert [m.id for m in messages] == ['u1', 'a1']


def test_tool_result_in_later_record_is_correlated(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    write_session(
        's1',
        assistant([tool_use('t1', 'WebSearch', {'query': 'x'})], uuid='a1', timestamp=T0),
        user([tool_result('t1', 'Found 10 results')], uuid='u1', timestamp=T1),
    )

    messages = service.load_messages(project_path, 's1')

    assert len(messages) == 1
    assert messages[0].tool_calls == [
        ToolCallInfo(id='t1', name='WebSearch', input={'query': 'x'}, status='completed', result='Found 10 results')
    ]


def test_invalid_line_between_valid_records(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    write_session(
        's1',
        user('Hello', uuid='u1', timestamp=T0),
        'this is { not json',
        assistant([text('Hi!')], uuid='a1', timestamp=T1),
    )

    messages = service.load_messages(project_path, 's1')

    assert [m.id for m in messages] == ['u1', 'a1']


def test_error_flag_sets_error_status(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    write_session(
        's1',
        assistant([tool_use('t1', 'Bash', {'command': 'false'})], uuid='a1', timestamp=T0),
        user([tool_result('t1', 'exit code 1', is_error=True)], uuid='u1', timestamp=T1),
    )

    (message,) = service.load_messages(project_path, 's1')

    assert message.tool_calls is not None
    assert message.tool_calls[0].status == 'error'
    assert message.tool_calls[0].result == 'exit code 1'


def test_equal_timestamps_keep_file_order(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    write_session(
        's1',
        user('A', uuid='A', timestamp=T0),
        assistant([text('B')], uuid='B', timestamp=T0),
    )

    assert [m.id for m in service.load_messages(project_path, 's1')] == ['A', 'B']


# ==============================================================================
# Ordering and correlation properties
# ==============================================================================


def test_messages_sorted_by_timestamp(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    write_session(
        's1',
        assistant([text('third')], uuid='c', timestamp=T2),
        user('first', uuid='a', timestamp=T0),
        user('fourth', uuid='d', timestamp=T3),
        assistant([text('second')], uuid='b', timestamp=T1),
        user('also second', uuid='b2', timestamp=T1),
    )

    messages = service.load_messages(project_path, 's1')

    assert [m.id for m in messages] == ['a', 'b', 'b2', 'c', 'd']
    timestamps = [m.timestamp_ms for m in messages]
    assert timestamps == sorted(timestamps)


def test_result_logged_before_its_tool_use_still_correlates(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    write_session(
        's1',
        user([text('context'), tool_result('t1', 'early result')], uuid='u1', timestamp=T0),
        assistant([tool_use('t1', 'Read')], uuid='a1', timestamp=T1),
    )

    messages = service.load_messages(project_path, 's1')

    assert messages[1].tool_calls is not None
    assert messages[1].tool_calls[0].result == 'early result'


def test_result_many_records_later_correlates(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    filler = [user(f'note {i}', uuid=f'n{i}', timestamp=T1) for i in range(50)]
    write_session(
        's1',
        assistant([text('Starting'), tool_use('t1', 'Task', {'prompt': 'go'})], uuid='a1', timestamp=T0),
        *filler,
        record('system', 'compacting'),
        user([tool_result('t1', [{'type': 'text', 'text': 'agent done'}])], uuid='u-late', timestamp=T3),
    )

    messages = service.load_messages(project_path, 's1')

    assert len(messages) == 51
    assert messages[0].tool_calls is not None
    assert messages[0].tool_calls[0].result == '[{"type":"text","text":"agent done"}]'


def test_bookkeeping_records_are_discarded(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    write_session(
        's1',
        {'type': 'file-history-snapshot', 'messageId': 'm1', 'snapshot': {}},
        user('Hello', uuid='u1', timestamp=T0),
        record('system', 'Compacted', uuid='s1', timestamp=T1),
        assistant([thinking('hmm'), text('Hi')], uuid='a1', timestamp=T2),
        {'type': 'result', 'subtype': 'success', 'duration_ms': 1200, 'duration_api_ms': 900, 'result': 'Hi'},
    )

    messages = service.load_messages(project_path, 's1')

    assert [m.id for m in messages] == ['u1', 'a1']


@pytest.mark.parametrize('position', range(4))
def test_single_invalid_line_never_changes_valid_messages(
    position: int, write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    lines: list[object] = [
        user('Hello', uuid='u1', timestamp=T0),
        assistant([text('Hi'), tool_use('t1', 'Read')], uuid='a1', timestamp=T1),
        user([tool_result('t1', 'contents')], uuid='u2', timestamp=T2),
    ]
    write_session('clean', *lines)
    lines.insert(position, '{"type": "user", "message": {"content": "trunc')
    write_session('corrupt', *lines)

    clean = service.load_messages(project_path, 'clean')
    corrupt = service.load_messages(project_path, 'corrupt')

    assert corrupt == clean


def test_reconstruction_is_deterministic(
    write_session: Callable[..., Path], projects_root: Path, project_path: Path
) -> None:
    write_session(
        's1',
        user('Hello', uuid='u1', timestamp=T0),
        assistant([thinking('hmm'), text('Hi'), tool_use('t1', 'Read', {'file_path': '/a'})], uuid='a1', timestamp=T1),
        user([tool_result('t1', {'lines': 3})], uuid='u2', timestamp=T2),
    )

    first = load_session_messages(project_path, 's1', projects_root)
    second = load_session_messages(project_path, 's1', projects_root)

    assert [m.to_wire() for m in first] == [m.to_wire() for m in second]


def test_records_missing_timestamp_use_injected_clock(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    write_session(
        's1',
        user('no timestamp'),
        user('old', uuid='u-old', timestamp=T0),
    )

    messages = service.load_messages(project_path, 's1')

    # The injected clock (2023-11-14) is earlier than T0, so the undated record sorts first
    assert [m.content for m in messages] == ['no timestamp', 'old']
    assert messages[0].timestamp_ms == FIXED_NOW_MS
    assert messages[0].id.startswith('generated-')


# ==============================================================================
# Absent and empty logs
# ==============================================================================


def test_absent_log_is_empty_history(service: SessionHistoryService, project_path: Path) -> None:
    assert service.load_messages(project_path, 'never-written') == []
    assert service.read_records(project_path, 'never-written') == []
    assert not service.exists(project_path, 'never-written')


def test_empty_log_is_empty_history(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    write_session('s1')

    assert service.load_messages(project_path, 's1') == []


def test_require_session_path(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path
) -> None:
    session_path = write_session('s1', user('Hello', uuid='u1', timestamp=T0))

    assert service.require_session_path(project_path, 's1') == session_path
    with pytest.raises(SessionNotFoundError) as exc_info:
        service.require_session_path(project_path, 'missing')
    assert exc_info.value.session_id == 'missing'


def test_undecodable_project_path_is_empty_history(service: SessionHistoryService) -> None:
    project_path = '/tmp/vault-\udcff'

    assert service.load_messages(project_path, 's1') == []
    assert service.read_records(project_path, 's1') == []
    assert not service.exists(project_path, 's1')


def test_undecodable_project_path_loads_its_log(service: SessionHistoryService) -> None:
    project_path = '/tmp/vault-\udcff'
    session_path = service.session_path(project_path, 's1')
    session_path.parent.mkdir(parents=True)
    session_path.write_text(jsonl(user('Hello', uuid='u1', timestamp=T0)), encoding='utf-8')

    assert service.exists(project_path, 's1')
    assert [m.id for m in service.load_messages(project_path, 's1')] == ['u1']


def test_sessions_are_isolated_per_project(
    write_session: Callable[..., Path], service: SessionHistoryService, project_path: Path, tmp_path: Path
) -> None:
    write_session('s1', user('Hello', uuid='u1', timestamp=T0))

    assert service.load_messages(tmp_path / 'another-vault', 's1') == []


def test_read_session_records(
    write_session: Callable[..., Path], projects_root: Path, project_path: Path
) -> None:
    write_session(
        's1',
        {'type': 'file-history-snapshot'},
        user('Hello', uuid='u1', timestamp=T0),
        'garbage',
    )

    records = read_session_records(project_path, 's1', projects_root)

    assert [r.type for r in records] == ['file-history-snapshot', 'user']


def test_load_messages_from_text(fixed_fallbacks: FallbackSource) -> None:
    text_content = jsonl(
        assistant([text('Hi')], uuid='a1', timestamp=T1),
        user('Hello', uuid='u1', timestamp=T0),
    )

    messages = load_messages_from_text(text_content, fixed_fallbacks)

    assert [m.id for m in messages] == ['u1', 'a1']
