"""Scripted result queue for mocking an asynchronous data-access layer.

Tests load a ``ResultQueue`` with outcomes in the order the code under test
will ask for them, then hand the queue (or an executor built on it) to that
code. Every ``query`` call consumes the oldest outcome:

    queue = ResultQueue()
    queue.queue_success({"id": 1}).queue_failure("connection reset")

    assert await queue.query() == {"id": 1}
    with pytest.raises(BaseError):
        await queue.query()

When a queue runs dry it asks its parent queue, then its fallback, and
finally raises ``EmptyQueryQueueError``. Structural problems
(``EmptyQueryQueueError``, ``InvalidQueryResultError``) are raised directly
from ``query``; scripted failures are raised only when the returned
awaitable is awaited.
"""

from __future__ import annotations

import inspect
import logging
import weakref
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from querymock.core.errors import (
    BaseError,
    EmptyQueryQueueError,
    InvalidQueryResultError,
    is_error_like,
)
from querymock.core.observability import QueueObservationSink

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Success:
    content: Any = None
    was_created: bool | None = None
    affected_rows: Any = None


@dataclass(slots=True, frozen=True)
class Failure:
    error: BaseException


Outcome = Success | Failure


async def _resolved(value: Any) -> Any:
    return value


async def _rejected(error: BaseException) -> Any:
    raise error


class ResultQueue:
    """FIFO queue of scripted query outcomes with optional parent delegation."""

    def __init__(
        self,
        *,
        parent: ResultQueue | None = None,
        stop_propagation: bool = False,
        created_default: bool | None = None,
        fallback_fn: Callable[[], Any] | None = None,
        name: str = "default",
        observer: QueueObservationSink | None = None,
    ) -> None:
        self._pending: deque[Outcome] = deque()
        self._parent_ref: weakref.ref[ResultQueue] | None = (
            weakref.ref(parent) if parent is not None else None
        )
        self.stop_propagation = stop_propagation
        self.created_default = created_default
        self.fallback_fn = fallback_fn
        self.name = name
        self.observer = observer

    def __repr__(self) -> str:
        return f"ResultQueue(name={self.name!r}, pending={len(self._pending)})"

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def parent(self) -> ResultQueue | None:
        """The parent queue, or ``None`` if unset or already collected."""

        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, value: ResultQueue | None) -> None:
        self._parent_ref = weakref.ref(value) if value is not None else None

    # -- enqueue -----------------------------------------------------------

    def queue_success(
        self,
        content: Any = None,
        *,
        was_created: bool | None = None,
        affected_rows: Any = None,
    ) -> ResultQueue:
        """Queue *content* as the result of a future query."""

        self._pending.append(
            Success(content=content, was_created=was_created, affected_rows=affected_rows)
        )
        LOGGER.debug("Queued success on %s (%d pending)", self.name, len(self._pending))
        self._emit("result_queued", {"pending": len(self._pending)})
        return self

    queue_result = queue_success

    def queue_failure(self, error: Any = None, *, convert_non_errors: bool = True) -> ResultQueue:
        """Queue a failure; the matching query's awaitable raises *error*.

        Payloads that are not exceptions are wrapped in ``BaseError`` with the
        payload kept on ``original``. Exceptions are queued untouched.
        """

        if not is_error_like(error):
            if not convert_non_errors:
                LOGGER.warning(
                    "convert_non_errors=False ignored for non-exception payload %r on %s; wrapping in BaseError",
                    error,
                    self.name,
                )
            error = BaseError(error)

        self._pending.append(Failure(error=error))
        LOGGER.debug("Queued failure %r on %s (%d pending)", error, self.name, len(self._pending))
        self._emit(
            "failure_queued",
            {"pending": len(self._pending), "error_type": type(error).__name__},
        )
        return self

    queue_error = queue_failure

    def clear_queue(self, *, propagate_clear: bool = False) -> ResultQueue:
        """Drop every pending outcome, and the parents' too with *propagate_clear*."""

        dropped = len(self._pending)
        self._pending.clear()
        LOGGER.debug("Cleared %d pending outcome(s) on %s", dropped, self.name)
        self._emit("queue_cleared", {"dropped": dropped, "propagate": propagate_clear})

        parent = self.parent
        if propagate_clear and parent is not None:
            parent.clear_queue(propagate_clear=propagate_clear)
        return self

    # -- consume -----------------------------------------------------------

    def query(
        self,
        *,
        fallback_fn: Callable[[], Any] | None = None,
        include_created: bool = False,
        include_affected_rows: bool = False,
        stop_propagation: bool = False,
    ) -> Awaitable[Any]:
        """Consume the next outcome and return an awaitable for its result.

        Successes resolve to the bare content, to ``(content, created)`` with
        *include_created*, or to ``(content, affected_rows)`` with
        *include_affected_rows*. Failures raise their error when awaited.

        Raises:
            InvalidQueryResultError: the dequeued entry is not an outcome.
            EmptyQueryQueueError: nothing is queued here or in any parent and
                no fallback is available.
        """

        if self._pending:
            outcome = self._pending.popleft()
            return self._settle(
                outcome,
                include_created=include_created,
                include_affected_rows=include_affected_rows,
            )

        parent = self.parent
        if not stop_propagation and not self.stop_propagation and parent is not None:
            LOGGER.debug("Queue %s is empty; delegating to %s", self.name, parent.name)
            self._emit("query_delegated", {"parent": parent.name})
            return parent.query(
                fallback_fn=fallback_fn,
                include_created=include_created,
                include_affected_rows=include_affected_rows,
                stop_propagation=stop_propagation,
            )

        fallback = fallback_fn if fallback_fn is not None else self.fallback_fn
        if fallback is not None:
            LOGGER.debug("Queue %s is empty; invoking fallback %r", self.name, fallback)
            self._emit("fallback_invoked", {})
            result = fallback()
            if inspect.isawaitable(result):
                return result
            return _resolved(result)

        self._emit("queue_exhausted", {})
        raise EmptyQueryQueueError(self.name)

    def _settle(
        self,
        outcome: Any,
        *,
        include_created: bool,
        include_affected_rows: bool,
    ) -> Awaitable[Any]:
        if isinstance(outcome, Failure):
            LOGGER.debug("Consumed failure %r from %s", outcome.error, self.name)
            self._emit(
                "failure_consumed",
                {"pending": len(self._pending), "error_type": type(outcome.error).__name__},
            )
            return _rejected(outcome.error)

        if not isinstance(outcome, Success):
            raise InvalidQueryResultError(outcome)

        LOGGER.debug("Consumed success from %s (%d pending)", self.name, len(self._pending))
        self._emit("result_consumed", {"pending": len(self._pending)})

        if include_created:
            created = True
            if self.created_default is not None:
                created = bool(self.created_default)
            if outcome.was_created is not None:
                created = bool(outcome.was_created)
            return _resolved((outcome.content, created))

        if include_affected_rows:
            rows = outcome.affected_rows if isinstance(outcome.affected_rows, (list, tuple)) else []
            return _resolved((outcome.content, rows))

        return _resolved(outcome.content)

    def _emit(self, event: str, payload: dict[str, Any]) -> None:
        if self.observer is None:
            return
        try:
            self.observer.log_event(self.name, event, payload)
        except Exception:
            LOGGER.exception("Observer failed to record %s event for %s", event, self.name)
