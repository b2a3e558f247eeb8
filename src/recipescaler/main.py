"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipescaler import __version__
from recipescaler.config import get_settings
from recipescaler.logging_config import configure_logging, get_logger
from recipescaler.routers import scaling_router

settings = get_settings()

# Configure logging on module load
configure_logging(log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        f"Starting Recipescaler API (default servings: {settings.default_servings}, "
        f"environment: {settings.environment})"
    )
    yield
    logger.info("Shutting down Recipescaler API")


app = FastAPI(
    title="Recipescaler API",
    description="Recipe scaling and shopping list consolidation",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(scaling_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "recipescaler-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Recipescaler API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
