#!/usr/bin/env -S uv run
"""
Report session logs with lines that cannot be decoded or validated.

History loading skips such lines silently. This script lists them,
per session file, so torn writes can be spotted before someone wonders why
part of a conversation is missing.
"""

import sys
from pathlib import Path

from session_history.paths import get_projects_path
from session_history.services.decoder import decode_session
from session_history.services.reader import read_session_text


def main() -> None:
    print('=' * 80)
    print('Session Log Corruption Check')
    print('=' * 80)
    print()

    projects_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else get_projects_path()

    if not projects_dir.exists():
        print(f'Directory not found: {projects_dir}')
        sys.exit(1)

    all_files = sorted(projects_dir.glob('*/*.jsonl'))

    print(f'Found {len(all_files)} session files')
    print()

    corrupted_files = []
    unreadable_files = []
    total_records = 0

    for jsonl_file in all_files:
        text = read_session_text(jsonl_file)
        if text is None:
            unreadable_files.append(jsonl_file)
            continue

        result = decode_session(text)
        total_records += len(result.records)

        if result.skipped_lines:
            corrupted_files.append((jsonl_file, result.skipped_lines))
            print(f'✗ CORRUPTED: {jsonl_file.name}')
            print(f'  Project: {jsonl_file.parent.name}')
            print(f'  Skipped lines: {", ".join(map(str, result.skipped_lines[:20]))}')
            print()

    print()
    print('SUMMARY')
    print('-' * 80)
    print(f'Total files checked: {len(all_files)}')
    print(f'Unreadable files: {len(unreadable_files)}')
    print(f'Files with skipped lines: {len(corrupted_files)}')
    print(f'Total decoded records: {total_records:,}')
    print()

    if corrupted_files or unreadable_files:
        for file in unreadable_files:
            print(f'  Unreadable: {file}')
        print('✗ Found corrupted files!')
        sys.exit(1)

    print('✓ All session files decode cleanly!')


if __name__ == '__main__':
    main()
