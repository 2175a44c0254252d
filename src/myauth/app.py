from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from pydantic import BaseModel

from myauth.config import Config
from myauth.core.core import Core
from myauth.core.modules.session.models import AuthToken, SessionView
from myauth.core.modules.user.models import User, UserView
from myauth.errors import ValidationError

logger = structlog.get_logger(__name__)


class LoginResult(BaseModel):
    """Outcome of a successful sign-in: the new session token and its user."""

    token: AuthToken
    user: User


class App:
    """Facade for all application operations, validates permissions before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def complete_login(self, email: str) -> LoginResult:
        """Sign in a user whose email the issuer has verified.

        Upserts the user (granting admin to allowlisted emails) and opens a session.
        """
        user_id = await self._core.services.user.upsert_user(email)
        token = await self._core.services.session.create_session(user_id)
        user = await self._core.services.user.get_user(user_id)
        return LoginResult(token=token, user=user)

    async def logout(self, auth_token: AuthToken | None) -> None:
        """Invalidate the session if a token was presented."""
        if auth_token:
            await self._core.services.session.delete_session(auth_token)

    async def get_current_user(self, auth_token: AuthToken | None) -> UserView:
        """Get current authenticated user profile."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return UserView.from_domain(current_user)

    async def get_my_sessions(self, auth_token: AuthToken | None) -> list[SessionView]:
        """Get unexpired sessions of the current user."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        sessions = await self._core.services.session.list_user_sessions(current_user.id)
        return [SessionView.from_domain(session) for session in sessions]

    async def get_all_users(self, auth_token: AuthToken | None) -> list[UserView]:
        """Get all users (admin only)."""
        await self._core.services.access.ensure_admin(auth_token)
        users = await self._core.services.user.list_users()
        return [UserView.from_domain(user) for user in users]

    async def deactivate_user(self, auth_token: AuthToken | None, user_id: str) -> UserView:
        """Disable a user and drop their sessions (admin only, cannot deactivate self)."""
        current_user = await self._core.services.access.ensure_admin(auth_token)
        if user_id == current_user.id:
            raise ValidationError("Cannot deactivate yourself")

        user = await self._core.services.user.set_user_active(user_id, False)
        await self._core.services.session.delete_user_sessions(user_id)
        return UserView.from_domain(user)

    async def run_maintenance(self) -> None:
        """Sweep expired sessions and bootstrap the first admin.

        Runs after responses are sent; failures are logged and dropped.
        """
        try:
            await self._core.services.session.sweep_expired()
        except Exception:
            logger.exception("session_sweep_failed")
        try:
            await self._core.services.user.bootstrap_first_admin()
        except Exception:
            logger.exception("admin_bootstrap_failed")
