from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import BaseModel, Field

from myauth.web.deps import AppDep, AuthTokenDep, ConfigDep
from myauth.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class CallbackErrorResponse(ErrorResponse):
    """Callback error that echoes the received query parameters for debugging the issuer redirect."""

    params: dict[str, str] = Field(default_factory=dict, description="Query parameters the callback received")


class LogoutResponse(BaseModel):
    """Logout acknowledgement."""

    success: bool = Field(True, description="Always true; logout is idempotent")


@router.post(
    "/api/logout",
    summary="End session",
    description="Delete the session of the presented token. Succeeds even without a token.",
    operation_id="logout",
    responses={
        200: {"description": "Session ended (or there was none)"},
        405: {"description": "Wrong HTTP method"},
    },
)
async def logout(app: AppDep, auth_token: AuthTokenDep) -> LogoutResponse:
    await app.logout(auth_token)
    return LogoutResponse(success=True)


@router.get(
    "/callback",
    summary="Demo issuer callback",
    description="Sign in the configured demo email once the issuer hands back an authorization code, "
    "then redirect to the dashboard with the new session token.",
    operation_id="issuerCallback",
    status_code=302,
    responses={
        302: {"description": "Redirect to /dashboard with a session token"},
        400: {"model": CallbackErrorResponse, "description": "No authorization code provided; echoes the query parameters"},
    },
)
async def callback(request: Request, app: AppDep, config: ConfigDep, code: str | None = None) -> Response:
    if not code:
        error = CallbackErrorResponse(
            message="No authorization code provided",
            type="validation_error",
            params=dict(request.query_params),
        )
        return JSONResponse(status_code=400, content=error.model_dump())

    # The code is not exchanged with the issuer here; the demo email stands in for the verified one
    result = await app.complete_login(config.demo_email)
    return RedirectResponse(url=f"/dashboard?token={result.token}", status_code=302)
