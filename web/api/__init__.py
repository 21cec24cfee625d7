"""FastAPI backend for the tower puzzle."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.settings import Settings
from web.api.routes import games
from web.api.session_manager import session_manager

logger = logging.getLogger(__name__)

settings = Settings.from_env()
session_manager.settings = settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - stop every game timer on shutdown."""
    logger.info("Hint strategy: %s, tick every %ss", settings.hint_strategy, settings.tick_seconds)
    yield
    session_manager.close_all()
    logger.info("All game sessions closed")


app = FastAPI(
    title="Tower Puzzle API",
    description="API for playing the tower puzzle with character discs",
    version="0.1.0",
    lifespan=lifespan,
)

logger.info("CORS origins configured: %s", settings.cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(games.router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
