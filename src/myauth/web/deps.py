from typing import Annotated, cast

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from myauth.app import App
from myauth.config import Config
from myauth.core.modules.session.models import AuthToken

# Security schemes
bearer_scheme = HTTPBearer(auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


async def get_auth_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    token: Annotated[str | None, Query(description="Session token (fallback for Authorization header)")] = None,
) -> AuthToken | None:
    """Get the session token from the Authorization Bearer header or the `token` query parameter.

    Validation happens in the access service, so a missing token is returned as None.
    """
    # Check Bearer token first (preferred)
    if credentials and credentials.scheme.lower() == "bearer" and credentials.credentials:
        return AuthToken(credentials.credentials)

    if token:
        return AuthToken(token)

    return None


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
AuthTokenDep = Annotated[AuthToken | None, Depends(get_auth_token)]
