"""FastAPI application factory.

Main entry point for the Nihongo learning Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from nihongo.config import load_app_config
from nihongo.core.errors import NihongoError
from nihongo.db import init_db
from nihongo.web.routes import (
    auth_router,
    chapters_router,
    grammar_router,
    health_router,
    listening_router,
    pages_router,
    quizzes_router,
    reading_router,
    vocabulary_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    # Startup: schema bootstrap runs before any request is served
    config = load_app_config()
    init_db(config.database.path, timeout=config.database.timeout_seconds)
    logger.info(
        "api_startup",
        db_path=str(config.database.path.absolute()),
        public_dir=str(config.web.public_dir.absolute()),
    )
    yield


async def handle_domain_error(request: Request, exc: NihongoError) -> JSONResponse:
    """Render domain errors as {"error": message}."""
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    config = load_app_config()

    app = FastAPI(
        title="Nihongo Learning API",
        description="Chapters, vocabulary, grammar, quizzes, reading and listening",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NihongoError, handle_domain_error)

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(chapters_router)
    app.include_router(vocabulary_router)
    app.include_router(grammar_router)
    app.include_router(quizzes_router)
    app.include_router(reading_router)
    app.include_router(listening_router)
    app.include_router(pages_router)

    if config.web.public_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(config.web.public_dir)), name="static")

    return app


# Default app instance for uvicorn
app = create_app()
