"""Shared test fixtures for claude_stream_grouping."""

import os
import sys
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def qapp():
    """Create a QGuiApplication for tests that need Qt."""
    os.environ["QT_QPA_PLATFORM"] = "offscreen"
    from PySide6.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication(sys.argv or ["test"])
    yield app


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def subagents_stream_path(fixtures_dir) -> Path:
    return fixtures_dir / "stream_with_subagents.jsonl"


@pytest.fixture
def malformed_stream_path(fixtures_dir) -> Path:
    return fixtures_dir / "malformed_stream.jsonl"
