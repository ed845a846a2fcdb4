"""Pytest configuration and fixtures for classdep tests."""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from classdep_cli.loader import build_graph
from classdep_cli.models import EntityGraph


SAMPLE_ENTITIES = {
    "App.Core.IRepository": {"kind": "Interface", "methods": ["Add", "Find"]},
    "App.Core.Repository": {
        "kind": "InterfaceImplementingClass",
        "fields": ["items"],
        "methods": ["Add", "Find"],
        "summary": "In-memory store for entities.",
    },
    "App.Core.Entity": {"kind": "AbstractClass", "fields": ["Id"]},
    "App.Services.OrderService": {
        "kind": "Class",
        "fields": ["repository", "logger"],
        "methods": ["PlaceOrder", "Cancel", "Total"],
        "summary": "Coordinates \"order\" placement\r\nand cancellation.",
    },
    "App.Services.Widget": {"kind": "Class"},
    "App.Ui.Widget": {"kind": "Class"},
    "App.Ui.Status": {"kind": "Enum", "fields": ["Open", "Closed"]},
    "Program": {"kind": "Class", "methods": ["Main"]},
}

SAMPLE_REFERENCES = {
    "App.Core.Repository": ["App.Core.IRepository", "App.Core.Entity", "System.String"],
    "App.Services.OrderService": ["App.Core.Repository", "App.Core.Repository", "App.Ui.Status"],
    "App.Ui.Widget": ["App.Services.OrderService", "App.Ui.Widget"],
    "Program": ["App.Services.OrderService", "App.Ui.Widget"],
}


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_graph() -> EntityGraph:
    """Linked graph of a small layered application."""
    return build_graph(SAMPLE_ENTITIES, SAMPLE_REFERENCES)


@pytest.fixture
def sample_analysis_file(temp_dir: Path) -> Path:
    """Analysis JSON written the way the external analyzer emits it."""
    path = temp_dir / "analysis.json"
    path.write_text(
        json.dumps({"entities": SAMPLE_ENTITIES, "references": SAMPLE_REFERENCES}, indent=2),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch) -> Path:
    """Point state and config files at a temporary directory."""
    home = temp_dir / "home"
    monkeypatch.setattr("classdep_cli.config.BASE_DIR", home)
    monkeypatch.setattr("classdep_cli.config.STATE_FILE", home / "state.json")
    monkeypatch.setattr("classdep_cli.config.CONFIG_FILE", home / "config.toml")
    return home
