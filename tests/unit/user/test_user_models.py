"""Tests for mapping user rows to the domain model."""

from datetime import UTC, datetime

import pytest

from myauth.core.modules.role.models import UserRole
from myauth.core.modules.user.models import UserRecord, UserView, user_from_record
from myauth.errors import DataIntegrityError


def make_record(**overrides):
    values = {
        "id": "u-1",
        "email": "someone@example.com",
        "role": "moderator",
        "first_name": "Ada",
        "last_name": None,
        "last_login": None,
        "is_active": True,
        "created_at": datetime(2024, 5, 1, 12, 0),
        "updated_at": datetime(2024, 5, 2, 12, 0),
    }
    values.update(overrides)
    return UserRecord(**values)


class TestUserFromRecord:
    def test_maps_fields(self):
        user = user_from_record(make_record())
        assert user.id == "u-1"
        assert user.role is UserRole.MODERATOR
        assert user.first_name == "Ada"
        assert user.last_login is None

    def test_naive_timestamps_become_utc(self):
        user = user_from_record(make_record())
        assert user.created_at == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
        assert user.updated_at.tzinfo is UTC

    def test_unknown_role_rejected(self):
        with pytest.raises(DataIntegrityError):
            user_from_record(make_record(role="owner"))


class TestUserView:
    def test_from_domain(self, mock_user):
        view = UserView.from_domain(mock_user)
        assert view.id == mock_user.id
        assert view.email == "testuser@example.com"
        assert view.role == UserRole.USER
        assert view.is_active is True
