from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI

from scorecard.api import cards_router, health_router
from scorecard.config import settings
from scorecard.db.database import init_db


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("scorecard"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(health_router)
