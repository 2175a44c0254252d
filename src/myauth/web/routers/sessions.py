from fastapi import APIRouter

from myauth.core.modules.session.models import SessionView
from myauth.web.deps import AppDep, AuthTokenDep
from myauth.web.openapi import ErrorResponse

router = APIRouter(tags=["sessions"])


@router.get(
    "/api/sessions",
    summary="List my sessions",
    description="Get the unexpired sessions of the authenticated user, newest first.",
    operation_id="listSessions",
    responses={
        200: {"description": "Sessions of the current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_sessions(app: AppDep, auth_token: AuthTokenDep) -> list[SessionView]:
    return await app.get_my_sessions(auth_token)
