from datetime import datetime
from uuid import uuid4

import structlog
from sqlalchemy import delete, select, update

from myauth.core.core import Service
from myauth.core.db import transaction
from myauth.core.modules.session.models import AuthToken, Session, SessionRecord, session_from_record
from myauth.core.modules.user.models import User, UserRecord, user_from_record
from myauth.utils import days_from_now, now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Service for managing user sessions."""

    async def create_session(self, user_id: str) -> AuthToken:
        """Store a new session for the user and return its token."""
        auth_token = AuthToken(str(uuid4()))
        async with transaction(self.session_factory) as db:
            db.add(
                SessionRecord(
                    user_id=user_id,
                    token=auth_token,
                    expires_at=days_from_now(self.core.config.session_ttl_days),
                    created_at=now(),
                )
            )
        logger.debug("session_created", user_id=user_id)
        return auth_token

    async def resolve_session(self, auth_token: AuthToken) -> User | None:
        """Get the active user owning an unexpired session, refreshing their last_login.

        Expired rows that have not been swept yet are ignored here.
        """
        timestamp = now()
        async with self.session_factory() as db:
            stmt = (
                select(UserRecord)
                .join(SessionRecord, SessionRecord.user_id == UserRecord.id)
                .where(
                    SessionRecord.token == auth_token,
                    SessionRecord.expires_at > timestamp,
                    UserRecord.is_active.is_(True),
                )
            )
            record = (await db.execute(stmt)).scalar_one_or_none()
        if record is None:
            return None
        user = user_from_record(record)
        await self._touch_last_login(user.id, timestamp)
        return user

    async def _touch_last_login(self, user_id: str, timestamp: datetime) -> None:
        """Record the login time. Failures are logged and dropped: last_login is informational."""
        try:
            async with transaction(self.session_factory) as db:
                await db.execute(update(UserRecord).where(UserRecord.id == user_id).values(last_login=timestamp))
        except Exception:
            logger.exception("last_login_update_failed", user_id=user_id)

    async def list_user_sessions(self, user_id: str) -> list[Session]:
        """Get unexpired sessions of a user, newest first."""
        async with self.session_factory() as db:
            stmt = (
                select(SessionRecord)
                .where(SessionRecord.user_id == user_id, SessionRecord.expires_at > now())
                .order_by(SessionRecord.created_at.desc())
            )
            return [session_from_record(record) for record in (await db.execute(stmt)).scalars()]

    async def delete_session(self, auth_token: AuthToken) -> None:
        """Delete a session. Unknown tokens are ignored."""
        async with transaction(self.session_factory) as db:
            await db.execute(delete(SessionRecord).where(SessionRecord.token == auth_token))

    async def delete_user_sessions(self, user_id: str) -> int:
        async with transaction(self.session_factory) as db:
            result = await db.execute(delete(SessionRecord).where(SessionRecord.user_id == user_id))
            deleted = result.rowcount
        return deleted

    async def sweep_expired(self) -> int:
        """Delete all expired sessions and return how many were removed."""
        async with transaction(self.session_factory) as db:
            result = await db.execute(delete(SessionRecord).where(SessionRecord.expires_at <= now()))
            deleted = result.rowcount
        if deleted:
            logger.info("expired_sessions_swept", count=deleted)
        return deleted
