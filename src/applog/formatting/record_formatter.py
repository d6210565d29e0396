"""
Module: record_formatter.py
Location: src/applog/formatting/
Version: 0.1.0

Builds the text of a single log record.

Wire format:
    [<timestamp>]<col>[<col>[<type>]<col>]<message><row>
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from email.utils import format_datetime
from typing import Iterable


DEFAULT_COLUMN_CODES = (9,)   # TAB
DEFAULT_ROW_CODES = (10,)     # LF


def chars_from_codes(codes: Iterable[int]) -> str:
    """
    Concatenate the characters for each numeric code.
    [13, 10] -> "\\r\\n"
    """
    chars = []
    for code in codes:
        try:
            chars.append(chr(int(code)))
        except (OverflowError, ValueError) as e:
            raise ValueError(f"Invalid character code: {code!r}") from e
    return "".join(chars)


def parse_char_codes(text: str) -> list[int]:
    """Parse a "+"-joined code list such as "13+10"."""
    codes = []
    for token in str(text).split("+"):
        token = token.strip()
        if not token:
            continue
        try:
            codes.append(int(token))
        except ValueError as e:
            raise ValueError(f"Invalid character code: {token!r}") from e
    return codes


def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return format_datetime(moment)


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class Delimiters:
    column: str = "\t"
    row: str = "\n"

    @classmethod
    def from_codes(
        cls,
        column_codes: Iterable[int] = DEFAULT_COLUMN_CODES,
        row_codes: Iterable[int] = DEFAULT_ROW_CODES,
    ) -> "Delimiters":
        return cls(
            column=chars_from_codes(column_codes),
            row=chars_from_codes(row_codes),
        )


@dataclass
class LogRecord:
    message: str
    log_type: str = "developer"
    timestamp: datetime = field(default_factory=_now)
    # Captured when the record is built, right before formatting.


def format_record(
    record: LogRecord,
    delimiters: Delimiters = Delimiters(),
    include_type: bool = True,
) -> str:
    col = delimiters.column
    parts = [f"[{format_timestamp(record.timestamp)}]", col]
    if include_type:
        parts.extend([col, f"[{record.log_type}]", col])
    parts.append(record.message)
    parts.append(delimiters.row)
    return "".join(parts)
