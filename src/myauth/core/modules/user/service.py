from typing import Any

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.dialects import postgresql, sqlite

from myauth.core.core import Service
from myauth.core.db import transaction
from myauth.core.modules.role.models import UserRole
from myauth.core.modules.user.models import User, UserRecord, user_from_record
from myauth.core.modules.user.validators import normalize_email
from myauth.errors import NotFoundError, PersistenceError
from myauth.utils import new_id, now

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Manages user records, the admin allowlist, and first-admin bootstrap."""

    def is_privileged_email(self, email: str) -> bool:
        """Check email against the configured admin allowlist (case-insensitive)."""
        candidate = email.strip().lower()
        return any(candidate == allowed.strip().lower() for allowed in self.core.config.admin_emails)

    async def upsert_user(self, email: str) -> str:
        """Create or refresh the user for a verified email and return its id.

        Allowlisted emails are granted admin; an existing user's role is never lowered.
        """
        normalized = normalize_email(email)
        role = UserRole.ADMIN if self.is_privileged_email(normalized) else UserRole.USER
        user_id = await self._upsert(normalized, role)
        logger.info("user_upserted", user_id=user_id, email=normalized, role=role.value)
        return user_id

    async def bootstrap_first_admin(self) -> None:
        """Create the fallback admin when no admin user exists. No-op otherwise."""
        if await self.count_admins() > 0:
            return
        email = normalize_email(self.core.config.bootstrap_admin_email)
        # Two concurrent bootstraps both reach here; the upsert keyed by email keeps it to one row
        user_id = await self._upsert(email, UserRole.ADMIN)
        logger.info("first_admin_created", user_id=user_id, email=email)

    async def count_admins(self) -> int:
        async with self.session_factory() as db:
            stmt = select(func.count()).select_from(UserRecord).where(UserRecord.role == UserRole.ADMIN.value)
            return (await db.execute(stmt)).scalar_one()

    async def get_user(self, user_id: str) -> User:
        """Get user by ID."""
        async with self.session_factory() as db:
            record = await db.get(UserRecord, user_id)
        if record is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user_from_record(record)

    async def list_users(self) -> list[User]:
        """Get all users, newest first."""
        async with self.session_factory() as db:
            records = (await db.execute(select(UserRecord).order_by(UserRecord.created_at.desc()))).scalars()
            return [user_from_record(record) for record in records]

    async def set_user_active(self, user_id: str, is_active: bool) -> User:
        """Enable or disable a user. Sessions of inactive users stop resolving."""
        async with transaction(self.session_factory) as db:
            stmt = (
                update(UserRecord)
                .where(UserRecord.id == user_id)
                .values(is_active=is_active, updated_at=now())
                .returning(UserRecord.id)
            )
            if (await db.execute(stmt)).scalar_one_or_none() is None:
                raise NotFoundError(f"User '{user_id}' not found")
        logger.info("user_active_changed", user_id=user_id, is_active=is_active)
        return await self.get_user(user_id)

    async def _upsert(self, email: str, role: UserRole) -> str:
        timestamp = now()
        insert = postgresql.insert if self.core.engine.dialect.name == "postgresql" else sqlite.insert
        stmt = insert(UserRecord).values(
            id=new_id(), email=email, role=role.value, is_active=True, created_at=timestamp, updated_at=timestamp
        )
        on_conflict: dict[str, Any] = {"updated_at": timestamp}
        if role is UserRole.ADMIN:
            on_conflict["role"] = UserRole.ADMIN.value
        stmt = stmt.on_conflict_do_update(index_elements=[UserRecord.email], set_=on_conflict).returning(UserRecord.id)

        async with transaction(self.session_factory) as db:
            user_id = (await db.execute(stmt)).scalar_one_or_none()
            if user_id is None:
                raise PersistenceError(f"Unable to upsert user: {email}")
        return user_id

    async def on_start(self) -> None:
        """Make sure a fresh database has an admin."""
        await self.bootstrap_first_admin()
        logger.debug("user_service_started", admin_emails=len(self.core.config.admin_emails))
