"""Tests for loading queue layouts from YAML."""

from __future__ import annotations

from pathlib import Path

import pytest

from querymock.core.config import load_settings


def test_load_settings_parses_queues(tmp_path: Path) -> None:
    config_path = tmp_path / "queues.yaml"
    config_path.write_text(
        """
logs_dir: logs/queries
queues:
  root:
    created_default: false
  users:
    parent: root
    stop_propagation: true
  orders: {}
        """,
        encoding="utf-8",
    )

    settings = load_settings(config_path)

    assert settings.logs_dir == "logs/queries"
    assert set(settings.queues) == {"root", "users", "orders"}
    assert settings.queues["root"].created_default is False
    assert settings.queues["root"].parent is None
    assert settings.queues["users"].parent == "root"
    assert settings.queues["users"].stop_propagation is True
    assert settings.queues["orders"].created_default is None


def test_load_settings_handles_empty_file(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")

    settings = load_settings(config_path)

    assert settings.queues == {}
    assert settings.logs_dir is None


def test_load_settings_rejects_non_mapping_queue(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("queues:\n  root: [1, 2]\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Queue 'root' must be a mapping"):
        load_settings(config_path)


def test_load_settings_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml")


@pytest.mark.parametrize("option", ["stop_propagation", "created_default"])
def test_load_settings_rejects_quoted_booleans(tmp_path: Path, option: str) -> None:
    config_path = tmp_path / "quoted.yaml"
    config_path.write_text(f'queues:\n  root:\n    {option}: "false"\n', encoding="utf-8")

    with pytest.raises(ValueError, match=f"option '{option}' must be true or false"):
        load_settings(config_path)
