"""Pydantic schemas for API request/response validation."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from seeksy.captions.render import CaptionStyle
from seeksy.captions.segmenter import CaptionSegment, SegmentationOptions, Word
from seeksy.finance.calculators import CapitalEvent, TierMix, TierPrices


# ── Captions ──────────────────────────────────────────────────────────────────


class SegmentRequest(BaseModel):
    words: list[Word]
    options: SegmentationOptions | None = None


class SegmentResponse(BaseModel):
    segments: list[CaptionSegment]
    has_word_timestamps: bool


class SimpleSegmentRequest(BaseModel):
    text: str
    duration: float = Field(..., ge=0)
    words_per_segment: int = Field(4, ge=1)


class SimpleSegmentResponse(BaseModel):
    segments: list[CaptionSegment]


class RenderPayloadRequest(BaseModel):
    video_url: str = Field(..., min_length=1)
    duration: float = Field(..., gt=0)
    segments: list[CaptionSegment] | None = None
    words: list[Word] | None = None
    text: str | None = None
    orientation: Literal["vertical", "horizontal"] = "vertical"
    style: CaptionStyle | None = None
    use_html_captions: bool | None = None
    title: str | None = None
    enable_certification: bool = False


# ── Transcripts ───────────────────────────────────────────────────────────────


class TranscriptCreate(BaseModel):
    clip_id: str | None = None
    language: str = "en"
    text: str | None = None
    duration: float | None = Field(None, ge=0)
    words: list[Word] | None = None
    options: SegmentationOptions | None = None
    words_per_segment: int = Field(4, ge=1)

    @model_validator(mode="after")
    def _require_words_or_text(self) -> TranscriptCreate:
        if not self.words and not (self.text and self.text.strip()):
            raise ValueError("Either words or text is required")
        return self


class ResegmentRequest(BaseModel):
    options: SegmentationOptions | None = None


class TranscriptResponse(BaseModel):
    id: uuid.UUID
    clip_id: str | None
    language: str
    text: str
    duration: float | None
    words: list[Word]
    caption_segments: list[CaptionSegment]
    has_word_timestamps: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TranscriptListResponse(BaseModel):
    transcripts: list[TranscriptResponse]
    total: int


# ── Finance ───────────────────────────────────────────────────────────────────


class AssumptionUpsert(BaseModel):
    value: float
    unit: str | None = None
    notes: str | None = None


class BenchmarkUpsert(BaseModel):
    value: float
    unit: str | None = None
    confidence: Literal["low", "medium", "high"] | None = None
    source_notes: str | None = None


class StoredMetricResponse(BaseModel):
    metric_key: str
    value: float
    unit: str | None

    model_config = {"from_attributes": True}


class RunwayRequest(BaseModel):
    current_cash: float
    monthly_burn: float = Field(..., ge=0)
    monthly_revenue: float = Field(0, ge=0)
    monthly_revenue_growth: float = Field(0, ge=-1, le=1)
    capital_events: list[CapitalEvent] = Field(default_factory=list)
    horizon_months: int = Field(36, ge=1, le=120)


class BreakevenRequest(BaseModel):
    fixed_opex_annual: float = Field(..., ge=0)
    variable_opex_pct: float = Field(..., ge=0, le=100)
    annual_revenue_growth_pct: float = Field(..., ge=-100, le=1000)
    initial_annual_revenue: float = Field(..., ge=0)


class ROIRequest(BaseModel):
    marketing_spend: float = Field(..., ge=0)
    cac: float = Field(..., ge=0)
    monthly_churn_pct: float = Field(..., ge=0, le=100)
    arpu: float = Field(..., ge=0)


class SubscriptionRequest(BaseModel):
    active_creators: int = Field(2400, ge=0)
    tier_mix: TierMix = Field(default_factory=TierMix)
    prices: TierPrices = Field(default_factory=TierPrices)
    monthly_growth_pct: float = Field(4, ge=-100, le=100)
