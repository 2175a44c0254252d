from fastapi import APIRouter

from myauth.core.modules.user.models import UserView
from myauth.web.deps import AppDep, AuthTokenDep
from myauth.web.openapi import ErrorResponse

router = APIRouter(tags=["profile"])


@router.get(
    "/api/profile",
    summary="Get current user profile",
    description="Get the profile of the currently authenticated user.",
    operation_id="getCurrentUserProfile",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_profile(app: AppDep, auth_token: AuthTokenDep) -> UserView:
    return await app.get_current_user(auth_token)
