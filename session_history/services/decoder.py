"""
Line decoder - JSONL text to records, one line at a time.

Every line is decoded independently. A single truncated or corrupted write
(e.g. the writer killed mid-flush) loses that line only; the rest of a long
conversation still loads.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import pydantic

from session_history.schemas.records import RawRecord

__all__ = ['DecodeResult', 'RecordDecodeResult', 'decode_lines', 'decode_records', 'decode_session']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodeResult:
    """Decoded JSON values in file order, plus the lines that failed."""

    values: list[Any] = field(default_factory=list)
    skipped_lines: list[int] = field(default_factory=list)  # 1-based line numbers
    value_lines: list[int] = field(default_factory=list)  # line number of each value


@dataclass(frozen=True)
class RecordDecodeResult:
    """Validated records in file order, plus the lines that produced none."""

    records: list[RawRecord] = field(default_factory=list)
    skipped_lines: list[int] = field(default_factory=list)  # undecodable or failed validation


def decode_lines(text: str) -> DecodeResult:
    """
    Parse each non-blank line of JSONL text as an independent JSON value.

    Lines are split on '\\n' only: JSON strings may legally contain raw
    U+2028/U+2029, which str.splitlines() would treat as line breaks.

    Args:
        text: Full log content

    Returns:
        DecodeResult with successfully parsed values in physical order
    """
    result = DecodeResult()

    for line_num, line in enumerate(text.split('\n'), 1):
        line = line.strip()
        if not line:
            continue

        try:
            value = json.loads(line)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.debug('Skipping undecodable line %d: %s', line_num, e)
            result.skipped_lines.append(line_num)
            continue

        result.values.append(value)
        result.value_lines.append(line_num)

    return result


def decode_session(text: str) -> RecordDecodeResult:
    """
    Decode JSONL text into transcript records, keeping diagnostics.

    JSON values that are not objects cannot carry a record type and are
    discarded silently. Lines that fail to decode or to validate are
    reported in skipped_lines.
    """
    decoded = decode_lines(text)
    result = RecordDecodeResult(skipped_lines=list(decoded.skipped_lines))

    for line_num, value in zip(decoded.value_lines, decoded.values, strict=True):
        if not isinstance(value, dict):
            continue
        try:
            result.records.append(RawRecord.model_validate(value))
        except pydantic.ValidationError as e:
            logger.debug('Skipping unusable record on line %d: %s', line_num, e)
            result.skipped_lines.append(line_num)

    result.skipped_lines.sort()
    return result


def decode_records(text: str) -> list[RawRecord]:
    """Decode JSONL text into transcript records (see decode_session)."""
    return decode_session(text).records
