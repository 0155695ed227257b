"""CFO assumption schema and effective-value resolution.

The schema is the single source of truth for every forecasting assumption.
An effective value comes from, in priority order:

1. a CFO override stored under the schema key,
2. the R&D benchmark (a low/high pair resolves to its mean, and only when
   both ends exist),
3. a CFO override stored under the single benchmark key (older rows),
4. the schema default.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

Unit = Literal["percent", "USD", "count", "impressions", "views", "slots"]


class AssumptionConfig(BaseModel):
    key: str
    category: str
    label: str
    unit: Unit
    default: float
    benchmark_key: str | None = None
    benchmark_keys: tuple[str, str] | None = None
    min: float | None = None
    max: float | None = None
    step: float | None = None
    description: str | None = None


def _a(
    key: str,
    label: str,
    unit: Unit,
    default: float,
    benchmark: str | tuple[str, str],
    bounds: tuple[float, float, float],
    description: str,
) -> dict:
    lo, hi, step = bounds
    return {
        "key": key,
        "label": label,
        "unit": unit,
        "default": default,
        "benchmark_key": benchmark if isinstance(benchmark, str) else None,
        "benchmark_keys": benchmark if isinstance(benchmark, tuple) else None,
        "min": lo,
        "max": hi,
        "step": step,
        "description": description,
    }


_SCHEMA_TABLE: dict[str, list[dict]] = {
    "growth": [
        _a("monthly_creator_growth_rate", "Monthly Creator Growth Rate", "percent", 4,
           "creator_growth_rate", (1, 20, 1), "Expected month-over-month creator growth"),
        _a("monthly_advertiser_growth_rate", "Monthly Advertiser Growth Rate", "percent", 3,
           "advertiser_growth_rate", (1, 15, 1), "Expected month-over-month advertiser growth"),
        _a("creator_monthly_churn_rate", "Creator Monthly Churn", "percent", 5,
           "creator_monthly_churn", (1, 20, 0.5), "Percent of paying creators who cancel each month"),
        _a("advertiser_monthly_churn_rate", "Advertiser Monthly Churn", "percent", 8,
           "advertiser_monthly_churn", (1, 25, 1), "Percent of advertisers who leave each month"),
        _a("creator_cac_paid", "Creator CAC (Paid)", "USD", 45,
           "creator_cac_paid", (5, 500, 5), "Average cost to acquire one paying creator via paid channels"),
        _a("creator_cac_organic", "Creator CAC (Organic)", "USD", 15,
           "creator_cac_organic", (0, 100, 5), "Blended cost to acquire creators via organic/referral channels"),
    ],
    "subscriptions": [
        _a("free_to_pro_conversion_rate", "Free to Pro Conversion Rate", "percent", 5,
           "subscription_free_conversion", (0, 20, 1), "Monthly rate at which free users upgrade to Pro"),
        _a("pro_arpu", "Pro Tier ARPU", "USD", 29,
           "creator_subscription_arpu_pro", (9, 299, 1), "Average revenue per Pro subscriber"),
        _a("business_arpu", "Business Tier ARPU", "USD", 79,
           "creator_subscription_arpu_business", (29, 149, 5), "Average revenue per Business subscriber"),
        _a("enterprise_arpu", "Enterprise Tier ARPU", "USD", 299,
           "creator_subscription_arpu_enterprise", (99, 499, 10), "Average revenue per Enterprise subscriber"),
        _a("subscription_churn_rate", "Subscription Monthly Churn", "percent", 4,
           "subscription_monthly_churn", (1, 15, 0.5), "Monthly churn rate for paid subscriptions"),
    ],
    "advertising": [
        _a("audio_cpm_hostread", "Host-Read Audio CPM", "USD", 22,
           ("audio_hostread_preroll_cpm_low", "audio_hostread_preroll_cpm_high"), (15, 40, 1),
           "CPM for host-read podcast ads"),
        _a("audio_cpm_programmatic", "Programmatic Audio CPM", "USD", 12,
           ("audio_programmatic_cpm_low", "audio_programmatic_cpm_high"), (5, 20, 0.5),
           "CPM for programmatic audio ads"),
        _a("video_cpm", "Video Mid-roll CPM", "USD", 20,
           ("video_midroll_cpm_low", "video_midroll_cpm_high"), (10, 40, 1),
           "CPM for video mid-roll ads"),
        _a("newsletter_cpm", "Newsletter CPM", "USD", 35,
           "newsletter_cpm_avg", (20, 60, 1), "CPM for newsletter/email ads"),
        _a("display_cpm", "Display CPM", "USD", 5,
           "display_cpm_avg", (2, 15, 0.5), "CPM for display/banner ads"),
        _a("audio_fill_rate", "Audio Fill Rate", "percent", 65,
           "audio_fill_rate", (30, 95, 5), "Percentage of audio ad inventory that is filled"),
        _a("video_fill_rate", "Video Fill Rate", "percent", 55,
           "video_fill_rate", (30, 95, 5), "Percentage of video ad inventory that is filled"),
        _a("newsletter_fill_rate", "Newsletter Fill Rate", "percent", 80,
           "newsletter_fill_rate", (30, 95, 5), "Percentage of newsletter ad slots that are filled"),
        _a("display_fill_rate", "Display Fill Rate", "percent", 70,
           "display_fill_rate", (30, 95, 5), "Percentage of display ad inventory that is filled"),
        _a("hostread_platform_share", "Platform Share (Host-Read Ads)", "percent", 30,
           "hostread_platform_share", (10, 50, 5), "Platform revenue share for host-read ads"),
        _a("programmatic_platform_share", "Platform Share (Programmatic Ads)", "percent", 40,
           "programmatic_platform_share", (20, 60, 5), "Platform revenue share for programmatic ads"),
        _a("brand_deal_platform_share", "Platform Share (Brand Deals)", "percent", 20,
           "brand_deal_platform_share", (10, 40, 5), "Platform revenue share for brand deals"),
        _a("ad_slots_audio", "Audio Ad Slots per Episode", "slots", 3,
           "audio_ad_slots_per_episode", (1, 6, 1), "Number of ad slots per audio episode"),
        _a("ad_slots_video", "Video Ad Slots per Episode", "slots", 2,
           "video_ad_slots_per_video", (1, 5, 1), "Number of ad slots per video"),
    ],
    "impressions": [
        _a("podcaster_small", "Small Podcaster Monthly Impressions", "impressions", 5000,
           ("podcaster_small_monthly_impressions_low", "podcaster_small_monthly_impressions_high"),
           (1000, 20000, 1000), "Average monthly impressions for small podcasters"),
        _a("podcaster_mid", "Mid Podcaster Monthly Impressions", "impressions", 25000,
           ("podcaster_mid_monthly_impressions_low", "podcaster_mid_monthly_impressions_high"),
           (10000, 100000, 5000), "Average monthly impressions for mid-tier podcasters"),
        _a("podcaster_large", "Large Podcaster Monthly Impressions", "impressions", 250000,
           ("podcaster_large_monthly_impressions_low", "podcaster_large_monthly_impressions_high"),
           (100000, 1000000, 50000), "Average monthly impressions for large podcasters"),
        _a("video_small", "Small Video Creator Monthly Views", "views", 10000,
           ("video_creator_small_monthly_views_low", "video_creator_small_monthly_views_high"),
           (1000, 50000, 1000), "Average monthly views for small video creators"),
        _a("video_mid", "Mid Video Creator Monthly Views", "views", 100000,
           ("video_creator_mid_monthly_views_low", "video_creator_mid_monthly_views_high"),
           (50000, 500000, 10000), "Average monthly views for mid-tier video creators"),
        _a("video_large", "Large Video Creator Monthly Views", "views", 1000000,
           ("video_creator_large_monthly_views_low", "video_creator_large_monthly_views_high"),
           (500000, 5000000, 100000), "Average monthly views for large video creators"),
    ],
    "events": [
        _a("events_per_year", "Number of Events per Year", "count", 12,
           "events_per_year", (0, 200, 1), "Total events hosted annually"),
        _a("avg_ticket_price", "Average Ticket Price", "USD", 45,
           "avg_event_ticket_price", (10, 250, 5), "Average ticket price per event"),
        _a("avg_event_sponsorship", "Average Event Sponsorship", "USD", 2500,
           "avg_award_sponsorship_value", (500, 50000, 500), "Average sponsorship revenue per event"),
    ],
}

ASSUMPTIONS_SCHEMA: dict[str, AssumptionConfig] = {
    row["key"]: AssumptionConfig(category=category, **row)
    for category, rows in _SCHEMA_TABLE.items()
    for row in rows
}

SCHEMA_DEFAULTS: dict[str, float] = {k: c.default for k, c in ASSUMPTIONS_SCHEMA.items()}


def get_assumption_config(key: str) -> AssumptionConfig | None:
    return ASSUMPTIONS_SCHEMA.get(key)


def schema_by_category() -> dict[str, list[AssumptionConfig]]:
    grouped: dict[str, list[AssumptionConfig]] = {}
    for config in ASSUMPTIONS_SCHEMA.values():
        grouped.setdefault(config.category, []).append(config)
    return grouped


class AssumptionTrace(BaseModel):
    cfo_overrides: list[str] = Field(default_factory=list)
    rd_benchmarks: list[str] = Field(default_factory=list)
    schema_defaults: list[str] = Field(default_factory=list)


class ResolvedAssumptions(BaseModel):
    effective: dict[str, float]
    trace: AssumptionTrace


def _benchmark_value(config: AssumptionConfig, benchmarks: Mapping[str, float]) -> float | None:
    if config.benchmark_keys:
        low, high = (benchmarks.get(k) for k in config.benchmark_keys)
        if low is not None and high is not None:
            return (low + high) / 2
        return None
    if config.benchmark_key:
        return benchmarks.get(config.benchmark_key)
    return None


def resolve_assumptions(
    overrides: Mapping[str, float],
    benchmarks: Mapping[str, float],
) -> ResolvedAssumptions:
    """Resolve every schema key to its effective value.

    Args:
        overrides: CFO overrides keyed by metric key.
        benchmarks: R&D benchmark values keyed by benchmark metric key.

    Returns:
        The effective values plus a trace of which source won for each key.
    """
    effective: dict[str, float] = {}
    trace = AssumptionTrace()

    for key, config in ASSUMPTIONS_SCHEMA.items():
        if key in overrides:
            effective[key] = overrides[key]
            trace.cfo_overrides.append(key)
            continue

        bench = _benchmark_value(config, benchmarks)
        if bench is not None:
            effective[key] = bench
            trace.rd_benchmarks.append(key)
            continue

        if config.benchmark_key and config.benchmark_key in overrides:
            effective[key] = overrides[config.benchmark_key]
            trace.cfo_overrides.append(key)
            continue

        effective[key] = config.default
        trace.schema_defaults.append(key)

    logger.info(
        "Resolved assumptions: overrides=%d, benchmarks=%d, defaults=%d",
        len(trace.cfo_overrides),
        len(trace.rd_benchmarks),
        len(trace.schema_defaults),
    )
    return ResolvedAssumptions(effective=effective, trace=trace)
