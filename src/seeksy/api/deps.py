"""FastAPI dependency injection helpers."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass

from fastapi import HTTPException, Query, Security
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from seeksy.config import settings
from seeksy.db.session import get_session

# API key security
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session."""
    async for session in get_session():
        yield session


async def verify_api_key(
    api_key: str | None = Security(api_key_header),
) -> str:
    """Verify the API key from the request header.

    In development mode, allows requests without an API key.
    """
    if settings.seeksy_env == "development":
        return api_key or "dev"

    if not api_key or api_key != settings.seeksy_api_key:
        raise HTTPException(status_code=403, detail="Invalid or missing API key")

    return api_key


@dataclass(frozen=True)
class Pagination:
    skip: int
    limit: int


def get_pagination(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
) -> Pagination:
    """Offset/limit query parameters shared by list endpoints."""
    return Pagination(skip=skip, limit=limit)
