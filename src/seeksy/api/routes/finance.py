"""CFO assumption storage and finance calculator routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seeksy.api.deps import get_db, verify_api_key
from seeksy.finance.assumptions import (
    ResolvedAssumptions,
    get_assumption_config,
    resolve_assumptions,
    schema_by_category,
)
from seeksy.finance.calculators import (
    BreakevenResult,
    ROIResult,
    RunwayResult,
    SubscriptionRevenueResult,
    calculate_breakeven,
    calculate_roi,
    calculate_runway,
    calculate_subscription_revenue,
)
from seeksy.models.db import CFOAssumption, RDBenchmark
from seeksy.models.schemas import (
    AssumptionUpsert,
    BenchmarkUpsert,
    BreakevenRequest,
    ROIRequest,
    RunwayRequest,
    StoredMetricResponse,
    SubscriptionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/finance")


# ── Assumptions ───────────────────────────────────────────────────────────────


@router.get("/assumptions/schema")
async def assumptions_schema(_: str = Depends(verify_api_key)):
    """Return the canonical assumption schema grouped by category."""
    return {
        category: [c.model_dump() for c in configs]
        for category, configs in schema_by_category().items()
    }


@router.get("/assumptions/effective", response_model=ResolvedAssumptions)
async def effective_assumptions(
    session: AsyncSession = Depends(get_db),
    _: str = Depends(verify_api_key),
):
    """Resolve every assumption from stored overrides and benchmarks."""
    overrides = (await session.execute(select(CFOAssumption))).scalars().all()
    benchmarks = (await session.execute(select(RDBenchmark))).scalars().all()
    return resolve_assumptions(
        {row.metric_key: row.value for row in overrides},
        {row.metric_key: row.value for row in benchmarks},
    )


@router.put("/assumptions/{metric_key}", response_model=StoredMetricResponse)
async def upsert_assumption(
    metric_key: str,
    data: AssumptionUpsert,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(verify_api_key),
):
    """Create or update a CFO override for one schema key."""
    config = get_assumption_config(metric_key)
    if not config:
        raise HTTPException(status_code=404, detail="Unknown assumption key")

    result = await session.execute(
        select(CFOAssumption).where(CFOAssumption.metric_key == metric_key)
    )
    row = result.scalar_one_or_none()
    if row is None:
        row = CFOAssumption(metric_key=metric_key, source="cfo_override")
        session.add(row)
    row.value = data.value
    row.unit = data.unit or config.unit
    row.notes = data.notes

    await session.flush()
    logger.info("CFO override %s = %s", metric_key, data.value)
    return row


@router.delete("/assumptions/{metric_key}", status_code=204)
async def delete_assumption(
    metric_key: str,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(verify_api_key),
):
    """Remove a CFO override so the key falls back to benchmark/default."""
    result = await session.execute(
        select(CFOAssumption).where(CFOAssumption.metric_key == metric_key)
    )
    row = result.scalar_one_or_none()
    if not row:
        raise HTTPException(status_code=404, detail="Assumption override not found")
    await session.delete(row)


@router.put("/benchmarks/{metric_key}", response_model=StoredMetricResponse)
async def upsert_benchmark(
    metric_key: str,
    data: BenchmarkUpsert,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(verify_api_key),
):
    """Create or update an R&D benchmark value."""
    result = await session.execute(
        select(RDBenchmark).where(RDBenchmark.metric_key == metric_key)
    )
    row = result.scalar_one_or_none()
    if row is None:
        row = RDBenchmark(metric_key=metric_key)
        session.add(row)
    row.value = data.value
    row.unit = data.unit
    row.confidence = data.confidence
    row.source_notes = data.source_notes

    await session.flush()
    logger.info("Benchmark %s = %s", metric_key, data.value)
    return row


# ── Calculators ──────────────────────────────────────────────────────────────


@router.post("/runway", response_model=RunwayResult)
async def runway(data: RunwayRequest, _: str = Depends(verify_api_key)):
    return calculate_runway(
        current_cash=data.current_cash,
        monthly_burn=data.monthly_burn,
        monthly_revenue=data.monthly_revenue,
        monthly_revenue_growth=data.monthly_revenue_growth,
        capital_events=data.capital_events,
        horizon_months=data.horizon_months,
    )


@router.post("/breakeven", response_model=BreakevenResult)
async def breakeven(data: BreakevenRequest, _: str = Depends(verify_api_key)):
    return calculate_breakeven(**data.model_dump())


@router.post("/roi", response_model=ROIResult)
async def roi(data: ROIRequest, _: str = Depends(verify_api_key)):
    return calculate_roi(**data.model_dump())


@router.post("/subscriptions", response_model=SubscriptionRevenueResult)
async def subscriptions(data: SubscriptionRequest, _: str = Depends(verify_api_key)):
    return calculate_subscription_revenue(
        active_creators=data.active_creators,
        tier_mix=data.tier_mix,
        prices=data.prices,
        monthly_growth_pct=data.monthly_growth_pct,
    )
