"""Session management models."""

from datetime import datetime
from typing import NewType

from pydantic import BaseModel, Field
from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from myauth.core.db import Base
from myauth.utils import ensure_utc, new_id, now

AuthToken = NewType("AuthToken", str)


class SessionRecord(Base):
    """Row in the `user_sessions` table."""

    __tablename__ = "user_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    token: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=now)


class Session(BaseModel):
    """User authentication session.

    Valid while the current time is before expires_at and the owning user is active.
    """

    id: str
    user_id: str
    token: AuthToken
    expires_at: datetime
    created_at: datetime


def session_from_record(record: SessionRecord) -> Session:
    return Session(
        id=record.id,
        user_id=record.user_id,
        token=AuthToken(record.token),
        expires_at=ensure_utc(record.expires_at),
        created_at=ensure_utc(record.created_at),
    )


class SessionView(BaseModel):
    """Session information (API representation)."""

    id: str = Field(..., description="Session ID")
    token: str = Field(..., description="Session token")
    expires_at: datetime = Field(..., description="Expiry time")
    created_at: datetime = Field(..., description="Creation time")

    @classmethod
    def from_domain(cls, session: Session) -> "SessionView":
        return cls(id=session.id, token=session.token, expires_at=session.expires_at, created_at=session.created_at)
