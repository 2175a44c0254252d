from datetime import datetime

from pydantic import BaseModel, Field
from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from myauth.core.db import Base
from myauth.core.modules.role.models import UserRole, parse_role
from myauth.utils import ensure_utc, new_id, now


class UserRecord(Base):
    """Row in the `user` table."""

    __tablename__ = "user"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.USER.value)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=now)


class User(BaseModel):
    """User domain model."""

    id: str
    email: str
    role: UserRole
    first_name: str | None = None
    last_name: str | None = None
    last_login: datetime | None = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


def user_from_record(record: UserRecord) -> User:
    """Map a `user` row to the domain model, rejecting unknown roles."""
    return User(
        id=record.id,
        email=record.email,
        role=parse_role(record.role),
        first_name=record.first_name,
        last_name=record.last_name,
        last_login=ensure_utc(record.last_login),
        is_active=record.is_active,
        created_at=ensure_utc(record.created_at),
        updated_at=ensure_utc(record.updated_at),
    )


class UserView(BaseModel):
    """User account information (API representation)."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    role: UserRole = Field(..., description="Access role")
    first_name: str | None = Field(None, description="First name")
    last_name: str | None = Field(None, description="Last name")
    last_login: datetime | None = Field(None, description="Last time a session of this user was used")
    is_active: bool = Field(..., description="Whether the user may sign in")
    created_at: datetime = Field(..., description="Account creation time")
    updated_at: datetime = Field(..., description="Last account update time")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(**user.model_dump())
