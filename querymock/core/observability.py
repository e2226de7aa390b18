"""Event sinks that record what a result queue did during a test run."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


class QueueObservationSink(Protocol):
    """Receives lifecycle events emitted by ``ResultQueue``."""

    def log_event(self, queue_name: str, event: str, payload: dict[str, Any]) -> None:  # pragma: no cover - interface
        ...


def _build_event(event: str, payload: dict[str, Any], now: datetime) -> dict[str, Any]:
    enriched = {key: value for key, value in payload.items() if value is not None}
    enriched.setdefault("event", event)
    enriched.setdefault("timestamp", now.isoformat(timespec="milliseconds").replace("+00:00", "Z"))
    return enriched


@dataclass(slots=True)
class JSONLQueueLogger(QueueObservationSink):
    """Appends queue events to one JSONL file per queue under *base_dir*.

    A queue's file is named after the first event written for it
    (``<UTC slug>-<queue name>.jsonl``) and reused for the lifetime of the
    logger. The directory is recreated if it disappears between events.
    """

    base_dir: Path
    _files: dict[str, Path] = field(init=False, default_factory=dict)

    def log_event(self, queue_name: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        now = datetime.now(UTC)
        target = self.path_for(queue_name, now)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as handle:
            json.dump(_build_event(event, payload, now), handle, ensure_ascii=False, default=str)
            handle.write("\n")

    def path_for(self, queue_name: str, now: datetime | None = None) -> Path:
        """Return the log file used for *queue_name*."""

        target = self._files.get(queue_name)
        if target is None:
            stamp = (now or datetime.now(UTC)).strftime("%Y%m%dT%H%M%S%f")[:-3]
            safe_name = _UNSAFE_NAME_CHARS.sub("-", queue_name.strip()) or "queue"
            target = self.base_dir.expanduser() / f"{stamp}-{safe_name}.jsonl"
            self._files[queue_name] = target
        return target


@dataclass(slots=True)
class RecordingQueueSink(QueueObservationSink):
    """Keeps events in memory; handy for asserting on queue behavior."""

    events: list[dict[str, Any]] = field(default_factory=list)

    def log_event(self, queue_name: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        record = _build_event(event, payload, datetime.now(UTC))
        record["queue"] = queue_name
        self.events.append(record)

    def names(self) -> list[str]:
        return [entry["event"] for entry in self.events]
