"""Stateless caption routes: segmentation and render payloads."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from seeksy.api.deps import verify_api_key
from seeksy.captions import (
    CaptionSegment,
    build_render_payload,
    generate_simple_segments,
    segment_words,
)
from seeksy.config import settings
from seeksy.models.schemas import (
    RenderPayloadRequest,
    SegmentRequest,
    SegmentResponse,
    SimpleSegmentRequest,
    SimpleSegmentResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

FALLBACK_CAPTION = "Watch this amazing clip!"


@router.post("/captions/segment", response_model=SegmentResponse)
async def segment(data: SegmentRequest, _: str = Depends(verify_api_key)):
    """Group word timestamps into caption segments."""
    segments = segment_words(data.words, data.options)
    logger.info("Segmented %d words into %d captions", len(data.words), len(segments))
    return SegmentResponse(segments=segments, has_word_timestamps=bool(segments))


@router.post("/captions/simple", response_model=SimpleSegmentResponse)
async def simple_segments(data: SimpleSegmentRequest, _: str = Depends(verify_api_key)):
    """Build evenly timed segments from plain text."""
    segments = generate_simple_segments(data.text, data.duration, data.words_per_segment)
    return SimpleSegmentResponse(segments=segments)


def resolve_segments(data: RenderPayloadRequest) -> list[CaptionSegment]:
    """Pick caption segments for a render, falling back to title text."""
    if data.segments:
        return data.segments
    if data.words:
        segments = segment_words(data.words)
        if segments:
            return segments
    if data.text and data.text.strip():
        return generate_simple_segments(data.text, data.duration)

    logger.warning("No transcript for render, captioning with title text")
    return generate_simple_segments(data.title or FALLBACK_CAPTION, data.duration)


@router.post("/captions/render-payload")
async def render_payload(data: RenderPayloadRequest, _: str = Depends(verify_api_key)):
    """Build the video-render timeline for a captioned clip."""
    segments = resolve_segments(data)
    return build_render_payload(
        video_url=data.video_url,
        duration=data.duration,
        segments=segments,
        orientation=data.orientation,
        style=data.style,
        use_html_captions=data.use_html_captions,
        callback_url=settings.render_callback_url,
        title=data.title,
        watermark_url=settings.certified_watermark_url if data.enable_certification else None,
    )
