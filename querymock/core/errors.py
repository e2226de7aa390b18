"""Error types raised or queued by mock result queues."""

from __future__ import annotations

from typing import Any


def is_error_like(value: Any) -> bool:
    """Return ``True`` when *value* can be raised as-is."""

    return isinstance(value, BaseException)


class BaseError(Exception):
    """Generic wrapper for failure payloads that are not exceptions.

    The wrapped payload is kept on ``original`` so tests can assert on the
    exact value that was scripted.
    """

    default_message = "Mock query failed"

    def __init__(self, original: Any = None, message: str | None = None) -> None:
        self.original = original
        if message is None:
            message = str(original) if original is not None else self.default_message
        super().__init__(message)


class InvalidQueryResultError(BaseError):
    """A dequeued entry is neither a success nor a failure outcome."""

    default_message = "Invalid query result was queued. Unable to complete mock query"

    def __init__(self, entry: Any = None) -> None:
        super().__init__(entry, self.default_message)


class EmptyQueryQueueError(BaseError):
    """No outcome is queued anywhere in the chain and no fallback is set."""

    default_message = "No query results are queued. Unexpected query attempted"

    def __init__(self, queue_name: str | None = None) -> None:
        message = self.default_message
        if queue_name:
            message = f"{message} (queue '{queue_name}')"
        super().__init__(None, message)
        self.queue_name = queue_name
