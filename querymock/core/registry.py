"""Build named, parent-linked result queues from settings."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from querymock.core.config import QueueSettings, Settings
from querymock.core.observability import JSONLQueueLogger, QueueObservationSink
from querymock.core.result_queue import ResultQueue


@dataclass(slots=True)
class QueueRegistry:
    """Owns every configured queue; queues only hold weak parent links."""

    queues: dict[str, ResultQueue] = field(default_factory=dict)
    observer: QueueObservationSink | None = None

    def get(self, name: str) -> ResultQueue:
        try:
            return self.queues[name]
        except KeyError:
            raise KeyError(f"Unknown queue '{name}'") from None

    def clear_all(self) -> None:
        for queue in self.queues.values():
            queue.clear_queue()


def build_queues(
    settings: Settings,
    fallbacks: dict[str, Callable[[], Any]] | None = None,
    observer: QueueObservationSink | None = None,
) -> QueueRegistry:
    """Create the queues described by *settings* and link them to their parents."""

    fallbacks = fallbacks or {}
    unknown = set(fallbacks) - set(settings.queues)
    if unknown:
        raise ValueError(f"Fallbacks given for unknown queue(s): {', '.join(sorted(unknown))}")

    if observer is None and settings.logs_dir:
        observer = JSONLQueueLogger(base_dir=_resolve_logs_dir(settings.logs_dir))

    _check_parents(settings.queues)

    registry = QueueRegistry(observer=observer)
    for name, queue_settings in settings.queues.items():
        registry.queues[name] = ResultQueue(
            stop_propagation=queue_settings.stop_propagation,
            created_default=queue_settings.created_default,
            fallback_fn=fallbacks.get(name),
            name=name,
            observer=observer,
        )

    for name, queue_settings in settings.queues.items():
        if queue_settings.parent is not None:
            registry.queues[name].parent = registry.queues[queue_settings.parent]

    return registry


def _check_parents(queues: dict[str, QueueSettings]) -> None:
    for name, queue_settings in queues.items():
        if queue_settings.parent is not None and queue_settings.parent not in queues:
            raise ValueError(f"Queue '{name}' names unknown parent '{queue_settings.parent}'")

    for name in queues:
        seen = [name]
        current = queues[name].parent
        while current is not None:
            if current in seen:
                chain = " -> ".join([*seen, current])
                raise ValueError(f"Queue parents form a cycle: {chain}")
            seen.append(current)
            current = queues[current].parent


def _resolve_logs_dir(raw: str) -> Path:
    path = Path(raw).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path
