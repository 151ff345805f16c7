from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from typing import Optional
import logging

from learnhub.core.config import Settings
from learnhub.core.database import Database
from learnhub.core.errors import AppError
from learnhub.core.security import hash_password
from learnhub.crud.user_crud import create_user, get_user_by_username
from learnhub.models.enums import UserRole
from learnhub.routes import api_router, upload_router
from learnhub.schemas.user_schema import UserCreateInternal

logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid value"))
    return "; ".join(parts) or "Invalid request"


def seed_admin(database: Database, settings: Settings) -> None:
    """Creates the configured admin account on startup if it does not exist yet."""
    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        return
    with database.session() as db:
        if get_user_by_username(db, settings.ADMIN_USERNAME):
            logger.debug(f"Admin account '{settings.ADMIN_USERNAME}' already exists.")
            return
        create_user(db, UserCreateInternal(
            username=settings.ADMIN_USERNAME,
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            role=UserRole.ADMIN,
        ))
        logger.info(f"Seeded admin account '{settings.ADMIN_USERNAME}'.")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the application around its own database and settings.
    Both are kept on app.state; nothing is shared between apps.
    """
    settings = settings or Settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="API for the LearnHub e-learning marketplace: courses, learning content, progress, referrals and payouts.",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.database = Database(settings.DATABASE_URL)

    # --- Event Handlers ---
    @app.on_event("startup")
    async def startup_event():
        logger.info("Application startup...")
        # Tables are created from the models; there are no migrations
        app.state.database.create_all()
        logger.info("Database tables checked/created.")
        seed_admin(app.state.database, settings)

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Application shutdown...")
        app.state.database.dispose()

    # --- Middleware ---
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        https_only=settings.SESSION_HTTPS_ONLY,
        same_site="lax",
    )

    logger.info(f"Allowed CORS origins: {settings.CORS_ALLOWED_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Error Handlers ---
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} ({exc.reason}): {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown routes, wrong methods and other framework errors
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _format_validation_errors(exc)
        logger.info(f"{request.method} {request.url.path} -> 400 (validation): {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": message, "reason": "validation"},
        )

    # Global Error Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception for request {request.method} {request.url}: {exc}", exc_info=True)
        # Avoid exposing detailed error messages for generic exceptions
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An unexpected internal server error occurred."},
        )

    # --- API Routers ---
    app.include_router(api_router, prefix=settings.API_PREFIX.rstrip("/"))
    app.include_router(upload_router, prefix=settings.UPLOAD_URL_PREFIX.rstrip("/"))

    @app.get("/", tags=["Root"])
    async def read_root():
        """
        Root endpoint to check if the API is running.
        """
        return {"message": f"Welcome to the {settings.PROJECT_NAME}! Navigate to /docs for API documentation."}

    return app


# --- Main execution (for development) ---
if __name__ == "__main__":
    import os
    import uvicorn
    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "0.0.0.0")
    log_level = os.getenv("UVICORN_LOG_LEVEL", "info")

    logger.info(f"Starting Uvicorn server on {host}:{port} with log level {log_level}")
    uvicorn.run("learnhub.main:create_app", factory=True, host=host, port=port, log_level=log_level)
