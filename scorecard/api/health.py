"""
Health check endpoints.

Readiness depends on the card store alone. The reference store is
reported but never makes the service unready, since classification
degrades without it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from scorecard.db.database import get_reference_database, get_session
from scorecard.services.reference_db import ReferenceDatabase

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    reference: str | None = None


async def reference_status(reference: ReferenceDatabase | None) -> str:
    if reference is None:
        return "disabled"
    try:
        async with reference.session_factory() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        return "disconnected"
    return "connected"


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Does not touch any store."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    reference: Annotated[ReferenceDatabase | None, Depends(get_reference_database)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the card store is unavailable.
    """
    reference_state = await reference_status(reference)
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(
            status="not ready", database="disconnected", reference=reference_state
        )
    return HealthResponse(status="ready", database="connected", reference=reference_state)
