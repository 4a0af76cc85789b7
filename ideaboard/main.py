"""
Idea Board — FastAPI application entry-point.

Run with:
    uvicorn ideaboard.main:app --reload
or:
    python -m ideaboard
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ideaboard import __version__
from ideaboard.config import Settings, settings as default_settings
from ideaboard.database import Database
from ideaboard.errors import IdeaBoardError

# ── Import routers ──
from ideaboard.routers import auth, ideas, users

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid value for {field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around its own Database handle."""
    settings = settings or default_settings
    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)

    # ── Lifespan: open the store and create tables on startup ──
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.init()
        try:
            yield
        finally:
            await database.shutdown()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Register with a phone number, submit ideas, and track their status.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error envelope ──
    @app.exception_handler(IdeaBoardError)
    async def ideaboard_error_handler(request: Request, exc: IdeaBoardError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")

    # ── Register API routers ──
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(ideas.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()
