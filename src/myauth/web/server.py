from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.background import BackgroundTask

from myauth.app import App
from myauth.config import Config
from myauth.errors import UserError
from myauth.web.error_handlers import general_exception_handler, user_error_handler
from myauth.web.openapi import set_custom_openapi
from myauth.web.routers import auth_router, profile_router, sessions_router, users_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="myauth API",
        lifespan=lifespan,
        openapi_tags=[],
    )

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if config.maintenance_on_request:

        @app.middleware("http")
        async def schedule_maintenance(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
            """Sweep expired sessions and bootstrap the first admin once the response is sent."""
            response = await call_next(request)
            if response.background is None:
                response.background = BackgroundTask(app_instance.run_maintenance)
            return response

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router)
    app.include_router(sessions_router)
    app.include_router(users_router)
    app.include_router(profile_router)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
