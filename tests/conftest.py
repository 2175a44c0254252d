"""Shared pytest fixtures."""

from datetime import UTC, datetime

import pytest
import pytest_asyncio

from myauth.config import Config
from myauth.core.core import Core
from myauth.core.modules.role.models import UserRole
from myauth.core.modules.user.models import User


@pytest.fixture
def config(tmp_path):
    """Config backed by a throwaway SQLite file."""
    return Config(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'myauth.db'}",
        admin_emails=["admin@example.com", "boss@example.com"],
        bootstrap_admin_email="admin@example.com",
        maintenance_on_request=False,
    )


@pytest_asyncio.fixture
async def core(config):
    """Core with tables created but services not started (no admin bootstrapped)."""
    core = Core(config)
    await core.create_tables()
    yield core
    await core.engine.dispose()


@pytest.fixture
def mock_user():
    """Create a mock user for testing."""
    return User(
        id="87654321-4321-8765-4321-876543218765",
        email="testuser@example.com",
        role=UserRole.USER,
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
        updated_at=datetime(2024, 1, 1, tzinfo=UTC),
    )
