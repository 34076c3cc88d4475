"""POPGEN - wave pressure simulation service.

Main FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from popgen import __version__
from popgen.config import settings
from popgen.routers import pressure_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("=" * 60)
    logger.info(f"  {settings.app_name} v{__version__} - INITIALIZING")
    logger.info("=" * 60)
    logger.info(
        f"Defaults: {settings.players} players, difficulty "
        f"{settings.pressure_decay_rate_multiplier_in_time}, {settings.max_time} ticks per wave"
    )
    yield
    logger.info(f"{settings.app_name} shutting down")


app = FastAPI(
    title=settings.app_name,
    description="Wave pacing via pressure simulation",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(pressure_router)


@app.get("/health")
async def health():
    return {"status": "operational", "system": settings.app_name, "version": __version__}
