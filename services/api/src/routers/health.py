"""Health check router."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_async_session

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/health/db")
async def health_db(db: AsyncSession = Depends(get_async_session)) -> dict:
    """Database connectivity check."""
    result = await db.execute(text("SELECT 1"))
    return {"status": "ok", "database": result.scalar() == 1}
