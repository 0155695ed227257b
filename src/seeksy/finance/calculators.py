"""Finance calculators used by the CFO tools.

All functions are pure: they take plain numbers (or small input models) and
return result models.  Monetary results are rounded to cents, half-up.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from seeksy.calculators.rounding import round_half_up
from seeksy.finance.assumptions import SCHEMA_DEFAULTS

logger = logging.getLogger(__name__)

BREAKEVEN_HORIZON_MONTHS = 36
ZERO_CHURN_LIFETIME_MONTHS = 24
SUBSCRIPTION_PROJECTION_YEARS = 3


# ── Runway ────────────────────────────────────────────────────────────────────


class CapitalEvent(BaseModel):
    """Cash injection (or outflow, when negative) landing in a given month."""

    month: int = Field(..., ge=1)
    amount: float
    label: str | None = None


class RunwayMonth(BaseModel):
    month: int
    revenue: float
    expenses: float
    capital: float
    ending_cash: float


class RunwayResult(BaseModel):
    runway_months: int | None
    break_even_month: int | None
    months: list[RunwayMonth]


def calculate_runway(
    current_cash: float,
    monthly_burn: float,
    monthly_revenue: float,
    monthly_revenue_growth: float,
    capital_events: Iterable[CapitalEvent] = (),
    horizon_months: int = 36,
) -> RunwayResult:
    """Project cash month by month.

    ``monthly_revenue_growth`` is a fraction (0.05 for 5%).  ``runway_months``
    counts the months before cash first goes negative and is ``None`` when it
    never does within the horizon.
    """
    if horizon_months < 1:
        raise ValueError("horizon_months must be at least 1")
    if monthly_burn < 0:
        raise ValueError("monthly_burn must be non-negative")
    if not -1 <= monthly_revenue_growth <= 1:
        raise ValueError("monthly_revenue_growth must be between -1 and 1")

    capital_by_month: dict[int, float] = {}
    for event in capital_events:
        capital_by_month[event.month] = capital_by_month.get(event.month, 0.0) + event.amount

    cash = current_cash
    runway: int | None = None
    break_even: int | None = None
    months: list[RunwayMonth] = []

    for m in range(1, horizon_months + 1):
        revenue = monthly_revenue * (1 + monthly_revenue_growth) ** (m - 1)
        capital = capital_by_month.get(m, 0.0)
        cash = cash + revenue - monthly_burn + capital

        if break_even is None and revenue >= monthly_burn:
            break_even = m
        if runway is None and cash < 0:
            runway = m - 1

        months.append(
            RunwayMonth(
                month=m,
                revenue=round_half_up(revenue),
                expenses=round_half_up(monthly_burn),
                capital=round_half_up(capital),
                ending_cash=round_half_up(cash),
            )
        )

    logger.debug("Runway: %s months, break-even month %s", runway, break_even)
    return RunwayResult(runway_months=runway, break_even_month=break_even, months=months)


# ── Breakeven ─────────────────────────────────────────────────────────────────


class BreakevenResult(BaseModel):
    break_even_month: int
    break_even_run_rate: float
    reached: bool


def calculate_breakeven(
    fixed_opex_annual: float,
    variable_opex_pct: float,
    annual_revenue_growth_pct: float,
    initial_annual_revenue: float,
) -> BreakevenResult:
    """First month (up to 36) where cumulative EBITDA turns positive.

    Revenue compounds monthly at ``annual_revenue_growth_pct / 12``.  When
    break-even is not reached, month 36 and the month-36 run rate are
    reported with ``reached=False``.
    """
    rate = 1 + (annual_revenue_growth_pct / 100) / 12
    cumulative = 0.0

    for month in range(1, BREAKEVEN_HORIZON_MONTHS + 1):
        revenue = initial_annual_revenue / 12 * rate**month
        cost = fixed_opex_annual / 12 + revenue * (variable_opex_pct / 100)
        cumulative += revenue - cost
        if cumulative > 0:
            return BreakevenResult(
                break_even_month=month,
                break_even_run_rate=round_half_up(revenue * 12),
                reached=True,
            )

    return BreakevenResult(
        break_even_month=BREAKEVEN_HORIZON_MONTHS,
        break_even_run_rate=round_half_up(
            initial_annual_revenue * rate**BREAKEVEN_HORIZON_MONTHS
        ),
        reached=False,
    )


# ── ROI ───────────────────────────────────────────────────────────────────────


class ROIResult(BaseModel):
    roi_percent: float
    ltv: float
    ltv_cac: float
    new_customers: float
    payback_months: float


def calculate_roi(
    marketing_spend: float,
    cac: float,
    monthly_churn_pct: float,
    arpu: float,
) -> ROIResult:
    churn = monthly_churn_pct / 100
    ltv = arpu / churn if churn > 0 else arpu * ZERO_CHURN_LIFETIME_MONTHS
    ltv_cac = ltv / cac if cac > 0 else 0.0
    new_customers = marketing_spend / cac if cac > 0 else 0.0
    roi = (
        (new_customers * ltv - marketing_spend) / marketing_spend * 100
        if marketing_spend > 0
        else 0.0
    )
    payback = cac / arpu if arpu > 0 else 0.0
    return ROIResult(
        roi_percent=round_half_up(roi, 1),
        ltv=round_half_up(ltv),
        ltv_cac=round_half_up(ltv_cac, 1),
        new_customers=round_half_up(new_customers),
        payback_months=round_half_up(payback, 1),
    )


# ── Subscriptions ─────────────────────────────────────────────────────────────


class TierMix(BaseModel):
    free: float = Field(60, ge=0, le=100)
    pro: float = Field(25, ge=0, le=100)
    business: float = Field(10, ge=0, le=100)
    enterprise: float = Field(5, ge=0, le=100)

    @property
    def total(self) -> float:
        return self.free + self.pro + self.business + self.enterprise


class TierPrices(BaseModel):
    pro: float = Field(SCHEMA_DEFAULTS["pro_arpu"], ge=0)
    business: float = Field(SCHEMA_DEFAULTS["business_arpu"], ge=0)
    enterprise: float = Field(SCHEMA_DEFAULTS["enterprise_arpu"], ge=0)


class SubscriptionRevenueResult(BaseModel):
    tier_counts: dict[str, int]
    tier_mrr: dict[str, float]
    mrr: float
    arr: float
    yearly_revenue: list[float]
    tier_mix_total: float
    tier_mix_valid: bool


def _count(total: int, percent: float) -> int:
    return int(round_half_up(total * percent / 100, 0))


def calculate_subscription_revenue(
    active_creators: int,
    tier_mix: TierMix | None = None,
    prices: TierPrices | None = None,
    monthly_growth_pct: float = SCHEMA_DEFAULTS["monthly_creator_growth_rate"],
) -> SubscriptionRevenueResult:
    """Project subscription revenue from the creator base and tier mix.

    Year 1 approximates six months of average growth on the current MRR; each
    later year compounds twelve months of growth on the previous one.
    """
    if active_creators < 0:
        raise ValueError("active_creators must be non-negative")
    tier_mix = tier_mix or TierMix()
    prices = prices or TierPrices()

    counts = {
        "free": _count(active_creators, tier_mix.free),
        "pro": _count(active_creators, tier_mix.pro),
        "business": _count(active_creators, tier_mix.business),
        "enterprise": _count(active_creators, tier_mix.enterprise),
    }
    tier_mrr = {
        "pro": counts["pro"] * prices.pro,
        "business": counts["business"] * prices.business,
        "enterprise": counts["enterprise"] * prices.enterprise,
    }
    mrr = sum(tier_mrr.values())

    growth = monthly_growth_pct / 100
    yearly = [mrr * 12 * (1 + monthly_growth_pct * 6 / 100)]
    for _ in range(SUBSCRIPTION_PROJECTION_YEARS - 1):
        yearly.append(yearly[-1] * (1 + growth) ** 12)

    mix_total = tier_mix.total
    return SubscriptionRevenueResult(
        tier_counts=counts,
        tier_mrr={k: round_half_up(v) for k, v in tier_mrr.items()},
        mrr=round_half_up(mrr),
        arr=round_half_up(mrr * 12),
        yearly_revenue=[round_half_up(y) for y in yearly],
        tier_mix_total=round_half_up(mix_total),
        tier_mix_valid=abs(mix_total - 100) < 1e-9,
    )
