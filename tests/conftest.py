"""Shared pytest fixtures and test helpers for datype tests."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from datype.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep a developer's datype.toml and DATYPE_* env vars out of tests."""
    for name in list(os.environ):
        if name.startswith("DATYPE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def write_doc(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write a document into tmp_path; dicts/lists are JSON-encoded, strings written raw."""

    def _write(name: str, content: Any) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
