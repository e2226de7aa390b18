"""Tests for the mock query error types."""

from __future__ import annotations

from querymock.core.errors import (
    BaseError,
    EmptyQueryQueueError,
    InvalidQueryResultError,
    is_error_like,
)


def test_is_error_like_accepts_exceptions_only() -> None:
    assert is_error_like(ValueError("bad"))
    assert is_error_like(BaseError("wrapped"))
    assert not is_error_like("bad")
    assert not is_error_like({"message": "bad"})
    assert not is_error_like(ValueError)


def test_base_error_keeps_original_payload() -> None:
    payload = {"code": 42}

    error = BaseError(payload)

    assert error.original is payload
    assert str(error) == "{'code': 42}"


def test_base_error_without_payload_uses_default_message() -> None:
    assert str(BaseError()) == "Mock query failed"


def test_native_errors_are_distinguishable() -> None:
    empty = EmptyQueryQueueError()
    invalid = InvalidQueryResultError("junk")

    assert isinstance(empty, BaseError)
    assert isinstance(invalid, BaseError)
    assert not isinstance(empty, InvalidQueryResultError)
    assert str(empty) == "No query results are queued. Unexpected query attempted"
    assert str(invalid) == "Invalid query result was queued. Unable to complete mock query"
    assert invalid.original == "junk"
