"""Role enumeration and its ordering.

Roles form a total order USER < MODERATOR < ADMIN. The order is only ever used
for "at least" checks: a route that requires MODERATOR admits ADMIN as well.
"""

from enum import StrEnum

from myauth.errors import DataIntegrityError


class UserRole(StrEnum):
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


_RANKS: dict[UserRole, int] = {
    UserRole.USER: 1,
    UserRole.MODERATOR: 2,
    UserRole.ADMIN: 3,
}


def rank(role: UserRole) -> int:
    return _RANKS[role]


def at_least(actual: UserRole, required: UserRole) -> bool:
    """Check whether `actual` grants everything `required` does."""
    return rank(actual) >= rank(required)


def parse_role(value: str) -> UserRole:
    """Convert a stored role string to UserRole.

    Raises:
        DataIntegrityError: If the value is not a known role
    """
    try:
        return UserRole(value)
    except ValueError:
        raise DataIntegrityError(f"Unknown role '{value}' in storage") from None
