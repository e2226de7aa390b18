"""Asynchronous SQL executor stub driven by a ``ResultQueue``.

The executor never parses SQL. Each ``run`` call records the statement and
returns whatever outcome the backing queue has scripted next, so tests can
steer the calling code down success, failure or fallback paths.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from querymock.core.result_queue import ResultQueue


@dataclass(slots=True)
class QueuedSQLExecutor:
    """Async executor that answers every statement from a result queue."""

    queue: ResultQueue = field(default_factory=ResultQueue)
    statements: list[str] = field(default_factory=list)

    async def run(self, statement: str, **query_options: Any) -> Any:
        """Record *statement* and return the next queued outcome.

        ``query_options`` are passed through to ``ResultQueue.query``
        (``include_created``, ``include_affected_rows``, ``fallback_fn``,
        ``stop_propagation``).
        """

        self.statements.append(statement)
        return await self.queue.query(**query_options)

    def prime(self, rows: Any, **result_options: Any) -> QueuedSQLExecutor:
        """Queue *rows* as the result of a future ``run`` call."""

        self.queue.queue_success(rows, **result_options)
        return self

    def prime_failure(self, error: Any, **failure_options: Any) -> QueuedSQLExecutor:
        """Queue *error* so a future ``run`` call raises it."""

        self.queue.queue_failure(error, **failure_options)
        return self
