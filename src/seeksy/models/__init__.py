"""Data models - SQLAlchemy ORM and Pydantic schemas."""

from seeksy.models.db import (
    Base,
    CFOAssumption,
    RDBenchmark,
    Transcript,
)

__all__ = [
    "Base",
    "CFOAssumption",
    "RDBenchmark",
    "Transcript",
]
