"""Tests for best-effort maintenance tasks."""

import pytest

from myauth.app import App


@pytest.mark.asyncio
async def test_sweep_failure_does_not_stop_bootstrap(config, monkeypatch):
    app = App(config)
    core = app._core
    await core.create_tables()

    async def broken_sweep():
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(core.services.session, "sweep_expired", broken_sweep)

    await app.run_maintenance()

    assert await core.services.user.count_admins() == 1
    await core.engine.dispose()


@pytest.mark.asyncio
async def test_bootstrap_failure_is_swallowed(config, monkeypatch):
    app = App(config)
    core = app._core
    await core.create_tables()

    async def broken_bootstrap():
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(core.services.user, "bootstrap_first_admin", broken_bootstrap)

    await app.run_maintenance()

    assert await core.services.user.count_admins() == 0
    await core.engine.dispose()


@pytest.mark.asyncio
async def test_complete_login_grants_allowlisted_admin(config):
    app = App(config)
    await app._core.create_tables()

    result = await app.complete_login("Boss@Example.com")

    assert result.user.email == "boss@example.com"
    assert result.user.role == "admin"
    assert (await app.get_current_user(result.token)).id == result.user.id
    await app._core.engine.dispose()
