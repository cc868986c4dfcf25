"""Unit tests for the client error buffer."""

import pytest

from adsdash.schemas.error_log import ErrorLogEntry
from adsdash.services.error_log_service import MAX_LIST, MAX_LOGS, ErrorLogBuffer


def _entry(i: int) -> ErrorLogEntry:
    return ErrorLogEntry(message=f"error {i}")


def test_records_most_recent_first() -> None:
    buffer = ErrorLogBuffer()
    for i in range(3):
        buffer.record(_entry(i))

    assert [e.message for e in buffer.list(10)] == ["error 2", "error 1", "error 0"]


def test_overflow_evicts_oldest() -> None:
    buffer = ErrorLogBuffer()
    for i in range(MAX_LOGS + 1):
        buffer.record(_entry(i))

    assert MAX_LOGS == 1000
    assert len(buffer) == 1000

    newest = buffer.list(1)[0]
    assert newest.message == "error 1000"

    # Read the tail through a buffer with a wider list cap
    wide = ErrorLogBuffer(max_list=MAX_LOGS)
    for i in range(MAX_LOGS + 1):
        wide.record(_entry(i))
    messages = [e.message for e in wide.list(MAX_LOGS)]
    assert messages[-1] == "error 1"
    assert "error 0" not in messages


def test_list_is_hard_capped() -> None:
    buffer = ErrorLogBuffer()
    for i in range(MAX_LOGS):
        buffer.record(_entry(i))

    assert MAX_LIST == 100
    assert len(buffer.list(250)) == 100
    assert len(buffer.list(100)) == 100
    assert len(buffer.list(7)) == 7


def test_list_on_small_buffer_returns_what_exists() -> None:
    buffer = ErrorLogBuffer()
    buffer.record(_entry(0))

    assert len(buffer.list(50)) == 1
    assert buffer.list(0) == []


def test_clear() -> None:
    buffer = ErrorLogBuffer()
    buffer.record(_entry(0))

    buffer.clear()

    assert len(buffer) == 0


@pytest.mark.parametrize("kwargs", [{"max_entries": 0}, {"max_list": 0}])
def test_invalid_constructor_args(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        ErrorLogBuffer(**kwargs)


def test_entry_accepts_camel_case_and_defaults_timestamp() -> None:
    entry = ErrorLogEntry.model_validate(
        {"message": "boom", "userAgent": "Mozilla/5.0", "accountId": "123-456-7890"}
    )

    assert entry.user_agent == "Mozilla/5.0"
    assert entry.account_id == "123-456-7890"
    assert entry.timestamp.tzinfo is not None
