"""FastAPI application factory and configuration.

Builds the app with its session manager, lifespan hooks, middleware
and routers.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edugame import __version__
from edugame.api.progress import router as progress_router
from edugame.api.session import router as session_router
from edugame.session.context import SessionManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Run startup and shutdown for the EduGame API.

    A user still signed in when the server stops is signed out, so no
    token outlives the process.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting EduGame API...")
    yield
    app.state.sessions.sign_out()
    logger.info("Shutting down EduGame API...")


def create_app() -> FastAPI:
    """Build the EduGame API with a fresh, signed-out session manager.

    Returns:
        FastAPI application with `state.sessions` set.
    """
    application = FastAPI(
        title="EduGame API",
        description=(
            "Gamified learning API. Awards XP, reports level thresholds, "
            "tracks the signed-in session and serves the AI doubt solver."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    application.state.sessions = SessionManager()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(progress_router)
    application.include_router(session_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": "edugame"}

    return application


app = create_app()
