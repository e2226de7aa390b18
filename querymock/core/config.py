"""Load result-queue layouts from YAML configuration files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass(slots=True)
class QueueSettings:
    name: str
    parent: str | None = None
    stop_propagation: bool = False
    created_default: bool | None = None


@dataclass(slots=True)
class Settings:
    queues: dict[str, QueueSettings] = field(default_factory=dict)
    logs_dir: str | None = None


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _as_bool(queue: str, key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Queue '{queue}' option '{key}' must be true or false, got {value!r}")
    return value


def _parse_queue(name: str, values: dict[str, Any] | None) -> QueueSettings:
    values = values or {}
    if not isinstance(values, dict):
        raise ValueError(f"Queue '{name}' must be a mapping, got {type(values).__name__}")

    parent = values.get("parent")
    created_default = values.get("created_default")
    return QueueSettings(
        name=str(name),
        parent=str(parent) if parent else None,
        stop_propagation=_as_bool(name, "stop_propagation", values.get("stop_propagation", False)),
        created_default=(
            _as_bool(name, "created_default", created_default) if created_default is not None else None
        ),
    )


def load_settings(path: str | Path) -> Settings:
    """Read queue definitions from *path*."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Queue configuration not found at '{config_path}'")
    raw = _load_yaml(config_path)

    queues_raw = raw.get("queues") or {}
    if not isinstance(queues_raw, dict):
        raise ValueError("'queues' must be a mapping of queue name to options")

    queues = {str(name): _parse_queue(name, values) for name, values in queues_raw.items()}

    logs_dir = raw.get("logs_dir")
    return Settings(queues=queues, logs_dir=str(logs_dir) if logs_dir else None)
