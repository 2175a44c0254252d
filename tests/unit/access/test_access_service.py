"""Tests for the authorization gate."""

import pytest
from sqlalchemy import update

from myauth.core.modules.role.models import UserRole
from myauth.core.modules.session.models import AuthToken
from myauth.core.modules.user.models import UserRecord
from myauth.errors import AccessDeniedError, AuthenticationError


async def login(core, email, role=None):
    user_id = await core.services.user.upsert_user(email)
    if role is not None:
        async with core.session_factory() as db:
            await db.execute(update(UserRecord).where(UserRecord.id == user_id).values(role=role.value))
            await db.commit()
    return await core.services.session.create_session(user_id)


class TestAuthorize:
    @pytest.mark.asyncio
    async def test_no_token(self, core):
        with pytest.raises(AuthenticationError, match="Authentication required"):
            await core.services.access.authorize(None, UserRole.USER)

    @pytest.mark.asyncio
    async def test_empty_token(self, core):
        with pytest.raises(AuthenticationError, match="Authentication required"):
            await core.services.access.authorize(AuthToken(""), UserRole.USER)

    @pytest.mark.asyncio
    async def test_unknown_token(self, core):
        with pytest.raises(AuthenticationError, match="Invalid or expired session"):
            await core.services.access.authorize(AuthToken("nope"), UserRole.USER)

    @pytest.mark.asyncio
    async def test_user_denied_admin_route(self, core):
        token = await login(core, "someone@example.com")
        with pytest.raises(AccessDeniedError, match="Insufficient permissions"):
            await core.services.access.authorize(token, UserRole.ADMIN)

    @pytest.mark.asyncio
    async def test_moderator_allowed_user_route(self, core):
        token = await login(core, "mod@example.com", UserRole.MODERATOR)
        user = await core.services.access.authorize(token, UserRole.USER)
        assert user.role is UserRole.MODERATOR

    @pytest.mark.asyncio
    async def test_moderator_denied_admin_route(self, core):
        token = await login(core, "mod@example.com", UserRole.MODERATOR)
        with pytest.raises(AccessDeniedError):
            await core.services.access.ensure_admin(token)

    @pytest.mark.asyncio
    async def test_admin_allowed_admin_route(self, core):
        token = await login(core, "admin@example.com")
        user = await core.services.access.authorize(token, UserRole.ADMIN)
        assert user.email == "admin@example.com"
        assert user.role is UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_default_requirement_is_user(self, core):
        token = await login(core, "someone@example.com")
        user = await core.services.access.authorize(token)
        assert user.role is UserRole.USER

    @pytest.mark.asyncio
    async def test_each_call_rereads_storage(self, core):
        token = await login(core, "someone@example.com")
        await core.services.access.ensure_authenticated(token)

        await core.services.session.delete_session(token)

        with pytest.raises(AuthenticationError, match="Invalid or expired session"):
            await core.services.access.ensure_authenticated(token)
