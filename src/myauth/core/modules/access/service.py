from myauth.core.core import Service
from myauth.core.modules.role.models import UserRole, at_least
from myauth.core.modules.session.models import AuthToken
from myauth.core.modules.user.models import User
from myauth.errors import AccessDeniedError, AuthenticationError


class AccessService(Service):
    async def authorize(self, auth_token: AuthToken | None, required_role: UserRole = UserRole.USER) -> User:
        """Resolve the token to its user and check the user's role is at least `required_role`.

        Nothing is cached: every call goes to the database.

        Raises:
            AuthenticationError: No token, or the token has no valid session
            AccessDeniedError: The user's role is below `required_role`
        """
        if not auth_token:
            raise AuthenticationError("Authentication required")

        user = await self.core.services.session.resolve_session(auth_token)
        if user is None:
            raise AuthenticationError("Invalid or expired session")

        if not at_least(user.role, required_role):
            raise AccessDeniedError("Insufficient permissions")
        return user

    async def ensure_authenticated(self, auth_token: AuthToken | None) -> User:
        """Ensure the user is authenticated."""
        return await self.authorize(auth_token, UserRole.USER)

    async def ensure_admin(self, auth_token: AuthToken | None) -> User:
        """Ensure the authenticated user is admin, raise AccessDeniedError if not."""
        return await self.authorize(auth_token, UserRole.ADMIN)
