"""Transcript storage and caption export routes."""

from __future__ import annotations

import logging
import uuid
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from seeksy.api.deps import Pagination, get_db, get_pagination, verify_api_key
from seeksy.captions import (
    CaptionSegment,
    generate_simple_segments,
    segment_words,
    segments_to_srt,
    segments_to_vtt,
)
from seeksy.models.db import Transcript
from seeksy.models.schemas import (
    ResegmentRequest,
    TranscriptCreate,
    TranscriptListResponse,
    TranscriptResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_transcript(session: AsyncSession, transcript_id: uuid.UUID) -> Transcript:
    result = await session.execute(
        select(Transcript).where(Transcript.id == transcript_id)
    )
    transcript = result.scalar_one_or_none()
    if not transcript:
        raise HTTPException(status_code=404, detail="Transcript not found")
    return transcript


@router.post("/transcripts", response_model=TranscriptResponse, status_code=201)
async def create_transcript(
    data: TranscriptCreate,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(verify_api_key),
):
    """Store a transcript and its caption segments.

    Word timestamps are segmented with the requested options; plain text is
    split into evenly timed segments, which needs ``duration``.
    """
    if data.words:
        segments = segment_words(data.words, data.options)
        text = data.text or " ".join(w.word for w in data.words)
        if data.duration is not None:
            duration = data.duration
        else:
            duration = max((s.end for s in segments), default=0.0)
        has_word_timestamps = bool(segments)
    else:
        if data.duration is None:
            raise HTTPException(
                status_code=400,
                detail="duration is required when no word timestamps are given",
            )
        segments = generate_simple_segments(data.text, data.duration, data.words_per_segment)
        text = data.text
        duration = data.duration
        has_word_timestamps = False

    transcript = Transcript(
        clip_id=data.clip_id,
        language=data.language,
        text=text,
        duration=duration,
        words=[w.model_dump() for w in data.words or []],
        caption_segments=[s.model_dump() for s in segments],
        has_word_timestamps=has_word_timestamps,
    )
    session.add(transcript)
    await session.flush()
    await session.refresh(transcript)

    logger.info(
        "Stored transcript %s: %d segments, word_timestamps=%s",
        transcript.id,
        len(segments),
        transcript.has_word_timestamps,
    )
    return transcript


@router.get("/transcripts", response_model=TranscriptListResponse)
async def list_transcripts(
    page: Pagination = Depends(get_pagination),
    clip_id: str | None = None,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(verify_api_key),
):
    """List transcripts, newest first."""
    query = select(Transcript)
    count_query = select(func.count()).select_from(Transcript)
    if clip_id:
        query = query.where(Transcript.clip_id == clip_id)
        count_query = count_query.where(Transcript.clip_id == clip_id)

    result = await session.execute(
        query.order_by(Transcript.created_at.desc()).offset(page.skip).limit(page.limit)
    )
    transcripts = result.scalars().all()

    total = (await session.execute(count_query)).scalar_one()

    return TranscriptListResponse(transcripts=transcripts, total=total)


@router.get("/transcripts/{transcript_id}", response_model=TranscriptResponse)
async def get_transcript(
    transcript_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(verify_api_key),
):
    """Get a transcript by ID."""
    return await _get_transcript(session, transcript_id)


@router.post("/transcripts/{transcript_id}/resegment", response_model=TranscriptResponse)
async def resegment_transcript(
    transcript_id: uuid.UUID,
    data: ResegmentRequest,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(verify_api_key),
):
    """Recompute caption segments from stored word timestamps."""
    transcript = await _get_transcript(session, transcript_id)
    if not transcript.has_word_timestamps or not transcript.words:
        raise HTTPException(
            status_code=400,
            detail="Transcript has no word timestamps to resegment",
        )

    segments = segment_words(transcript.words, data.options)
    transcript.caption_segments = [s.model_dump() for s in segments]

    await session.flush()
    await session.refresh(transcript)
    logger.info("Resegmented transcript %s into %d segments", transcript_id, len(segments))
    return transcript


@router.get("/transcripts/{transcript_id}/captions.{fmt}", response_class=PlainTextResponse)
async def export_captions(
    transcript_id: uuid.UUID,
    fmt: Literal["srt", "vtt"],
    session: AsyncSession = Depends(get_db),
    _: str = Depends(verify_api_key),
):
    """Export the caption segments as an SRT or WebVTT file."""
    transcript = await _get_transcript(session, transcript_id)
    segments = [CaptionSegment.model_validate(s) for s in transcript.caption_segments or []]

    if fmt == "srt":
        return PlainTextResponse(segments_to_srt(segments), media_type="application/x-subrip")
    return PlainTextResponse(segments_to_vtt(segments), media_type="text/vtt")


@router.delete("/transcripts/{transcript_id}", status_code=204)
async def delete_transcript(
    transcript_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(verify_api_key),
):
    """Delete a transcript."""
    transcript = await _get_transcript(session, transcript_id)
    await session.delete(transcript)
    logger.info("Deleted transcript %s", transcript_id)
