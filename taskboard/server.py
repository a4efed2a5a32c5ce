"""FastAPI application for Taskboard."""

import logging
import secrets
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard import __version__
from taskboard.core.config import Settings, get_settings
from taskboard.core.database import DatabaseManager
from taskboard.core.logging_setup import configure_logging
from taskboard.c1_errors.errors import TaskboardError
from taskboard.c2_auth_service.auth_gate import AuthenticationGate
from taskboard.c2_auth_service.credential_store import CredentialStore
from taskboard.c2_auth_service.external_identity import ExternalIdentityVerifier
from taskboard.c2_auth_service.token_codec import SessionTokenCodec
from taskboard.c2_task_service.task_service import TaskService

# C3 Routes (Application Layer)
from taskboard.c3_auth_routes import create_auth_router, create_current_user_dependency
from taskboard.c3_health_routes import router as health_router
from taskboard.c3_task_routes import create_task_router
from taskboard.c3_user_routes import create_user_router

logger = logging.getLogger(__name__)


class ServerState:
    """Process-wide components, created at startup and torn down at shutdown."""

    def __init__(self, settings: Settings, external_verifier: Optional[ExternalIdentityVerifier] = None):
        self.settings = settings
        self.external_verifier = external_verifier
        self.db_manager: Optional[DatabaseManager] = None
        self.credential_store: Optional[CredentialStore] = None
        self.token_codec: Optional[SessionTokenCodec] = None
        self.auth_gate: Optional[AuthenticationGate] = None
        self.task_service: Optional[TaskService] = None

    def open(self, db_manager: Optional[DatabaseManager] = None, clock: Optional[Callable] = None):
        """Connect to the database and build the services on top of it."""
        auth = self.settings.auth

        self.db_manager = db_manager or DatabaseManager(
            self.settings.database.database_url,
            echo=self.settings.database.echo_sql,
        )
        self.db_manager.create_tables()

        if auth.secret_key is not None:
            secret_key = auth.secret_key.get_secret_value()
        else:
            logger.warning("AUTH_SECRET_KEY is not set; sessions will not survive a restart")
            secret_key = secrets.token_urlsafe(64)

        self.credential_store = CredentialStore(
            self.db_manager,
            bcrypt_rounds=auth.bcrypt_rounds,
            min_password_length=auth.min_password_length,
        )
        self.token_codec = SessionTokenCodec(
            secret_key,
            algorithm=auth.algorithm,
            ttl=timedelta(hours=auth.token_ttl_hours),
            clock=clock,
        )
        self.auth_gate = AuthenticationGate(self.token_codec, self.credential_store)
        self.task_service = TaskService(self.db_manager)
        logger.info("Taskboard services started")

    def close(self):
        if self.db_manager is not None:
            self.db_manager.close()
            self.db_manager = None
        logger.info("Taskboard services stopped")


def _error_body(code: str, message: str, **extra):
    body = {"error": code, "message": message}
    body.update(extra)
    return body


def register_exception_handlers(app: FastAPI, debug: bool = False):
    """Map the error taxonomy onto stable HTTP responses."""

    @app.exception_handler(TaskboardError)
    async def handle_taskboard_error(request: Request, exc: TaskboardError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.code}", exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.code, exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_failed", "Invalid request", errors=jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("http_error", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        extra = {"detail": repr(exc)} if debug else {}
        return JSONResponse(
            status_code=500,
            content=_error_body("internal_error", "Something went wrong on the server", **extra),
        )


def create_app(
    settings: Optional[Settings] = None,
    external_verifier: Optional[ExternalIdentityVerifier] = None,
    db_manager: Optional[DatabaseManager] = None,
    clock: Optional[Callable] = None,
) -> FastAPI:
    """Build the Taskboard application.

    Args:
        settings: Settings to use; loaded from the environment if omitted
        external_verifier: Verifier for third-party identity credentials
        db_manager: Pre-built database manager (tests pass an in-memory one)
        clock: Clock for token issuance and expiry checks

    Returns:
        FastAPI: The configured application
    """
    settings = settings or get_settings()
    server_state = ServerState(settings, external_verifier=external_verifier)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        server_state.open(db_manager=db_manager, clock=clock)
        try:
            yield
        finally:
            server_state.close()

    app = FastAPI(
        title="Taskboard API",
        description="Collaborative task tracking with accounts and subtasks",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.server_state = server_state

    if settings.server.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.server.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
        )

    register_exception_handlers(app, debug=settings.debug)

    get_current_user = create_current_user_dependency(server_state)
    app.include_router(health_router)
    app.include_router(create_auth_router(server_state))
    app.include_router(create_user_router(server_state, get_current_user))
    app.include_router(create_task_router(server_state, get_current_user))

    return app


def main():
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
