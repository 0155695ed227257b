"""SQLAlchemy ORM models for the Seeksy media services."""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class Transcript(Base):
    """A transcription result with its caption segments."""

    __tablename__ = "transcripts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    clip_id = Column(String(255), nullable=True, index=True)
    language = Column(String(16), nullable=False, default="en")
    text = Column(Text, nullable=False, default="")
    duration = Column(Float, nullable=True)                 # seconds
    words = Column(JSONB, default=list)                     # [{word, start, end}]
    caption_segments = Column(JSONB, default=list)          # [{text, words, start, end, highlight_word}]
    has_word_timestamps = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class CFOAssumption(Base):
    """A CFO override for one forecasting assumption."""

    __tablename__ = "cfo_assumptions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    metric_key = Column(String(255), nullable=False, unique=True, index=True)
    value = Column(Float, nullable=False)
    unit = Column(String(32), nullable=True)
    source = Column(String(64), nullable=False, default="cfo_override")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class RDBenchmark(Base):
    """A market research benchmark that feeds assumption defaults."""

    __tablename__ = "rd_benchmarks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    metric_key = Column(String(255), nullable=False, unique=True, index=True)
    value = Column(Float, nullable=False)
    unit = Column(String(32), nullable=True)
    confidence = Column(String(16), nullable=True)          # low / medium / high
    source_notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
