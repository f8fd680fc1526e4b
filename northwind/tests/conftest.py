"""Shared test fixtures and utilities."""

import logging
import os
import pytest
from datetime import datetime
from dotenv import load_dotenv

from ..db.session import SessionManager
from ..repositories import Repositories
from ..seed import seed_database

# Load test environment variables
load_dotenv('.env.test')

@pytest.fixture
def database_url(tmp_path):
    """Store URL for one test: TEST_DATABASE_URL, else a throwaway SQLite file."""
    return os.getenv('TEST_DATABASE_URL') or f"sqlite:///{tmp_path / 'northwind.db'}"

@pytest.fixture
def session_manager(database_url):
    """Session manager over a freshly created schema."""
    manager = SessionManager(database_url)
    manager.create_schema(drop=True)
    yield manager
    manager.dispose()

@pytest.fixture
def repositories(session_manager):
    """Every repository bound to the test store."""
    return Repositories(session_manager)

@pytest.fixture
def now():
    """Reference time the seeded order dates are relative to."""
    return datetime.now().replace(microsecond=0)

@pytest.fixture
def seeded(session_manager, repositories, now):
    """Repositories over a store loaded with the canonical dataset."""
    with session_manager.transaction() as session:
        seed_database(session, now=now)
    return repositories

@pytest.fixture
def restore_logging():
    """Put back root logging handlers replaced by the CLI's setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
