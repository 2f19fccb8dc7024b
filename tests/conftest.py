"""Shared pytest fixtures for PomoTask tests."""

import os
import sys
import tempfile

# Keep settings, sounds and the database out of the real home directory
# and let Qt run without a display.  Must happen before pomotask imports.
os.environ.setdefault("POMOTASK_HOME", tempfile.mkdtemp(prefix="pomotask-tests-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from pomotask.database.db import configure_engine, init_db
from pomotask.tasks.store import TaskStore
from pomotask.timer.attributor import SessionAttributor
from pomotask.timer.engine import TimerEngine

from helpers import run_now


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def engine(qapp):
    """Fresh TimerEngine with the default 25/5/15 × 4 config."""
    return TimerEngine(parent=None)


@pytest.fixture
def store(qapp):
    return TaskStore()


@pytest.fixture
def attributor(engine, store):
    """SessionAttributor that runs store jobs synchronously."""
    return SessionAttributor(engine, store, dispatch=run_now)
