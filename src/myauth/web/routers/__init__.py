from myauth.web.routers.auth import router as auth_router
from myauth.web.routers.profile import router as profile_router
from myauth.web.routers.sessions import router as sessions_router
from myauth.web.routers.users import router as users_router

__all__ = [
    "auth_router",
    "profile_router",
    "sessions_router",
    "users_router",
]
