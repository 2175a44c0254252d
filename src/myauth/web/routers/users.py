from fastapi import APIRouter

from myauth.core.modules.user.models import UserView
from myauth.web.deps import AppDep, AuthTokenDep
from myauth.web.openapi import ErrorResponse

router = APIRouter(tags=["users"])


@router.get(
    "/api/users",
    summary="List all users",
    description="Get all users, newest first. Only accessible by admin users.",
    operation_id="listUsers",
    responses={
        200: {"description": "List of all users"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Admin privileges required"},
    },
)
async def list_users(app: AppDep, auth_token: AuthTokenDep) -> list[UserView]:
    return await app.get_all_users(auth_token)


@router.post(
    "/api/users/{user_id}/deactivate",
    summary="Deactivate user",
    description="Disable a user account and end all of its sessions. Only accessible by admin users.",
    operation_id="deactivateUser",
    responses={
        200: {"description": "User deactivated"},
        400: {"model": ErrorResponse, "description": "Cannot deactivate yourself"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Admin privileges required"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def deactivate_user(user_id: str, app: AppDep, auth_token: AuthTokenDep) -> UserView:
    return await app.deactivate_user(auth_token, user_id)
