"""Shared test fixtures for the Seeksy test suite."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def sample_words():
    """Word timestamps as returned by speech-to-text for a short clip."""
    return [
        {"word": "Welcome", "start": 0.0, "end": 0.4},
        {"word": "back", "start": 0.45, "end": 0.7},
        {"word": "to", "start": 0.72, "end": 0.8},
        {"word": "the", "start": 0.82, "end": 0.9},
        {"word": "show.", "start": 0.92, "end": 1.3},
        {"word": "Today", "start": 1.5, "end": 1.8},
        {"word": "we", "start": 1.82, "end": 1.95},
        {"word": "talk", "start": 1.97, "end": 2.2},
        {"word": "about", "start": 2.22, "end": 2.5},
        {"word": "podcasts", "start": 2.52, "end": 3.1},
    ]


@pytest.fixture
def sample_transcript_id():
    """Return a consistent sample transcript UUID."""
    return uuid.UUID("12345678-1234-5678-1234-567812345678")


@pytest.fixture
def mock_session():
    """An AsyncSession stand-in whose ``refresh`` fills server defaults."""
    session = MagicMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()

    async def _refresh(obj):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        if getattr(obj, "id", None) is None:
            obj.id = uuid.uuid4()
        obj.created_at = obj.created_at or now
        obj.updated_at = obj.updated_at or now

    session.refresh = AsyncMock(side_effect=_refresh)
    return session


def scalar_result(value):
    """Build an ``execute()`` result returning *value* from ``scalar_one_or_none``."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalar_one.return_value = value
    return result


def scalars_result(rows):
    """Build an ``execute()`` result returning *rows* from ``scalars().all()``."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


@pytest.fixture
def client():
    """Create a test client with DB startup/shutdown mocked out."""
    with (
        patch("seeksy.db.session.init_db", new_callable=AsyncMock),
        patch("seeksy.db.session.close_db", new_callable=AsyncMock),
    ):
        from seeksy.main import app

        with TestClient(app) as c:
            yield c


@pytest.fixture
def db_client(mock_session):
    """Test client whose ``get_db`` dependency yields ``mock_session``."""
    from seeksy.api.deps import get_db

    with (
        patch("seeksy.db.session.init_db", new_callable=AsyncMock),
        patch("seeksy.db.session.close_db", new_callable=AsyncMock),
    ):
        from seeksy.main import app

        async def _override():
            yield mock_session

        app.dependency_overrides[get_db] = _override
        try:
            with TestClient(app) as c:
                yield c
        finally:
            app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def scalar():
    return scalar_result


@pytest.fixture
def scalars():
    return scalars_result
