from datetime import datetime, timezone

import pytest

from src.applog.formatting.record_formatter import (
    Delimiters,
    LogRecord,
    chars_from_codes,
    format_record,
    format_timestamp,
    parse_char_codes,
)

T = datetime(2026, 10, 19, 10, 15, 0, tzinfo=timezone.utc)


def test_timestamp_is_rfc2822() -> None:
    assert format_timestamp(T) == "Mon, 19 Oct 2026 10:15:00 +0000"


def test_record_layout_with_type() -> None:
    text = format_record(LogRecord("hi", "developer", T), Delimiters(), include_type=True)
    assert text == f"[{format_timestamp(T)}]\t\t[developer]\thi\n"


def test_record_layout_without_type() -> None:
    text = format_record(LogRecord("hi", "developer", T), Delimiters(), include_type=False)
    assert text == "[Mon, 19 Oct 2026 10:15:00 +0000]\thi\n"


def test_custom_delimiters() -> None:
    delims = Delimiters.from_codes([124], [13, 10])
    text = format_record(LogRecord("x", "error", T), delims, include_type=True)
    assert text == "[Mon, 19 Oct 2026 10:15:00 +0000]||[error]|x\r\n"


def test_chars_from_codes() -> None:
    assert chars_from_codes([13, 10]) == "\r\n"
    assert chars_from_codes([]) == ""
    with pytest.raises(ValueError):
        chars_from_codes([-1])


def test_parse_char_codes() -> None:
    assert parse_char_codes("13+10") == [13, 10]
    assert parse_char_codes(" 9 ") == [9]
    with pytest.raises(ValueError):
        parse_char_codes("13+lf")


def test_naive_timestamp_gets_local_zone() -> None:
    stamp = format_timestamp(datetime(2026, 1, 2, 3, 4, 5))
    assert stamp.startswith("Fri, 02 Jan 2026 03:04:05 ")
    assert not stamp.endswith("-0000")
