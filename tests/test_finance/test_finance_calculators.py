"""Tests for runway, breakeven, ROI and subscription revenue calculators."""

from __future__ import annotations

import pytest

from seeksy.finance.calculators import (
    CapitalEvent,
    TierMix,
    TierPrices,
    calculate_breakeven,
    calculate_roi,
    calculate_runway,
    calculate_subscription_revenue,
)


class TestRunway:
    def test_cash_runs_out(self):
        result = calculate_runway(1000, 300, 0, 0)

        assert result.runway_months == 3
        assert result.break_even_month is None
        assert [m.ending_cash for m in result.months[:4]] == [700, 400, 100, -200]

    def test_capital_event_extends_runway(self):
        events = [CapitalEvent(month=3, amount=1000, label="Seed")]
        result = calculate_runway(1000, 300, 0, 0, capital_events=events)

        assert result.runway_months == 6
        assert result.months[2].capital == 1000
        assert result.months[2].ending_cash == 1100

    def test_events_in_same_month_are_summed(self):
        events = [CapitalEvent(month=1, amount=100), CapitalEvent(month=1, amount=50)]
        result = calculate_runway(0, 0, 0, 0, capital_events=events, horizon_months=2)
        assert result.months[0].capital == 150

    def test_never_runs_out(self):
        result = calculate_runway(500, 300, 300, 0, horizon_months=12)

        assert result.runway_months is None
        assert result.break_even_month == 1
        assert len(result.months) == 12

    def test_revenue_growth_break_even(self):
        result = calculate_runway(10_000, 200, 100, 0.5)

        assert [m.revenue for m in result.months[:3]] == [100, 150, 225]
        assert result.break_even_month == 3

    def test_invalid_horizon(self):
        with pytest.raises(ValueError):
            calculate_runway(1000, 100, 0, 0, horizon_months=0)

    def test_growth_out_of_range(self):
        with pytest.raises(ValueError):
            calculate_runway(1000, 100, 100, 5)

    def test_max_growth_over_long_horizon(self):
        result = calculate_runway(0, 0, 1_000_000, 1, horizon_months=120)
        assert result.months[-1].revenue == pytest.approx(1_000_000 * 2.0**119)


class TestBreakeven:
    def test_immediate(self):
        result = calculate_breakeven(0, 50, 0, 120_000)
        assert result.break_even_month == 1
        assert result.break_even_run_rate == 120_000
        assert result.reached is True

    def test_not_reached_reports_month_36(self):
        result = calculate_breakeven(1_200_000, 0, 0, 120_000)
        assert result.break_even_month == 36
        assert result.break_even_run_rate == 120_000
        assert result.reached is False

    def test_not_reached_run_rate_compounds(self):
        result = calculate_breakeven(10_000_000, 0, 12, 1200)
        assert result.break_even_run_rate == pytest.approx(1200 * 1.01**36, abs=0.01)

    def test_growth_brings_break_even(self):
        result = calculate_breakeven(120_000, 20, 60, 120_000)
        assert result.reached is True
        assert 1 < result.break_even_month < 36


class TestROI:
    def test_basic(self):
        result = calculate_roi(marketing_spend=1000, cac=100, monthly_churn_pct=5, arpu=50)

        assert result.ltv == 1000
        assert result.ltv_cac == 10
        assert result.new_customers == 10
        assert result.roi_percent == 900
        assert result.payback_months == 2

    def test_zero_churn_uses_24_month_lifetime(self):
        result = calculate_roi(1000, 100, 0, 50)
        assert result.ltv == 1200

    def test_zero_divisors(self):
        no_cac = calculate_roi(1000, 0, 5, 50)
        assert no_cac.ltv_cac == 0
        assert no_cac.new_customers == 0
        assert no_cac.roi_percent == -100

        assert calculate_roi(0, 100, 5, 50).roi_percent == 0
        assert calculate_roi(1000, 100, 5, 0).payback_months == 0


class TestSubscriptionRevenue:
    """Tests for tier-mix subscription projections."""

    def test_defaults(self):
        result = calculate_subscription_revenue(2400)

        assert result.tier_counts == {"free": 1440, "pro": 600, "business": 240, "enterprise": 120}
        assert result.mrr == 72240
        assert result.arr == 866880
        assert result.yearly_revenue[0] == pytest.approx(866880 * 1.24, abs=0.01)
        assert result.yearly_revenue[1] == pytest.approx(
            result.yearly_revenue[0] * 1.04**12, rel=1e-6
        )
        assert len(result.yearly_revenue) == 3
        assert result.tier_mix_valid is True

    def test_free_tier_earns_nothing(self):
        result = calculate_subscription_revenue(
            100, TierMix(free=100, pro=0, business=0, enterprise=0)
        )
        assert result.mrr == 0
        assert result.yearly_revenue == [0, 0, 0]

    def test_counts_round_half_up(self):
        result = calculate_subscription_revenue(
            10, TierMix(free=65, pro=25, business=5, enterprise=5)
        )
        assert result.tier_counts == {"free": 7, "pro": 3, "business": 1, "enterprise": 1}

    def test_invalid_mix_flagged(self):
        result = calculate_subscription_revenue(
            100, TierMix(free=60, pro=25, business=10, enterprise=10)
        )
        assert result.tier_mix_total == 105
        assert result.tier_mix_valid is False

    def test_custom_prices(self):
        result = calculate_subscription_revenue(
            100,
            TierMix(free=0, pro=100, business=0, enterprise=0),
            TierPrices(pro=10),
            monthly_growth_pct=0,
        )
        assert result.mrr == 1000
        assert result.yearly_revenue == [12000, 12000, 12000]

    def test_negative_creators(self):
        with pytest.raises(ValueError):
            calculate_subscription_revenue(-1)

    def test_large_projection_keeps_precision(self):
        result = calculate_subscription_revenue(10**9, monthly_growth_pct=100)

        assert result.yearly_revenue[0] == pytest.approx(result.arr * 7, rel=1e-9)
        assert result.yearly_revenue[2] == pytest.approx(
            result.yearly_revenue[0] * 2.0**24, rel=1e-9
        )
