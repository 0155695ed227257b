"""Tests for the military & federal benefits calculators."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from seeksy.calculators import veteran as v
from seeksy.calculators.rounding import round_half_up, round_to_nearest


class TestRounding:
    def test_half_up(self):
        assert round_half_up(2.675) == 2.68
        assert round_half_up(0.125) == 0.13
        assert round_half_up(1.5, 0) == 2.0
        assert round_half_up(2.5, 0) == 3.0

    def test_nearest_step(self):
        assert round_to_nearest(65, 10) == 70
        assert round_to_nearest(64.9, 10) == 60
        assert round_to_nearest(75, 10) == 80
        assert round_to_nearest(0, 10) == 0

    def test_values_beyond_default_precision(self):
        assert round_half_up(1.5e40) == 1.5e40
        assert round_half_up(-2.5e300, 1) == -2.5e300
        assert round_half_up(123456789012345678901234567890.0) == 1.2345678901234568e29

    def test_non_finite_passthrough(self):
        assert round_half_up(float("inf")) == float("inf")
        assert round_half_up(float("nan")) != round_half_up(float("nan"))

    def test_growth_rates_are_bounded(self):
        with pytest.raises(ValidationError):
            v.TSPGrowthInput(
                monthly_contribution=500, annual_return_rate=101, years_until_retirement=10
            )
        with pytest.raises(ValidationError):
            v.COLAInput(current_benefit=1000, expected_cola_percent=500, years=10)
        with pytest.raises(ValidationError):
            v.BRSComparisonInput(
                years_of_service_at_separation=20,
                base_pay_at_separation=5000,
                expected_return_rate=-150,
            )


class TestRetirement:
    def test_military_buyback(self):
        result = v.calculate_military_buyback(
            v.MilitaryBuybackInput(
                years_of_military_service=4, high3_salary=80000, years_until_retirement=10
            )
        )
        assert result.estimated_deposit_amount == 9600
        assert result.projected_pension_increase_per_year == 3200
        assert result.break_even_years == 3.0

    def test_military_buyback_zero_salary(self):
        result = v.calculate_military_buyback(
            v.MilitaryBuybackInput(
                years_of_military_service=4, high3_salary=0, years_until_retirement=10
            )
        )
        assert result.break_even_years == 0

    @pytest.mark.parametrize(
        "year,expected",
        [
            (1947, (55, 0)),
            (1950, (55, 6)),
            (1952, (55, 10)),
            (1960, (56, 0)),
            (1966, (56, 4)),
            (1970, (57, 0)),
        ],
    )
    def test_fers_mra(self, year, expected):
        assert v.fers_mra(year) == expected

    def test_mra_dates(self):
        result = v.calculate_mra(
            v.MRAInput(date_of_birth=date(1950, 3, 31), years_of_service=15)
        )
        assert result.minimum_retirement_age == "55 years 6 months"
        assert result.earliest_immediate_retirement_date == date(2005, 9, 30)
        assert result.reduced_annuity_eligible is True

    def test_mra_full_career_not_reduced(self):
        result = v.calculate_mra(
            v.MRAInput(date_of_birth=date(1960, 5, 15), years_of_service=30)
        )
        assert result.minimum_retirement_age == "56 years"
        assert result.earliest_immediate_retirement_date == date(2016, 5, 15)
        assert result.reduced_annuity_eligible is False

    def test_sick_leave(self):
        result = v.calculate_sick_leave(
            v.SickLeaveInput(sick_leave_hours=2087 + 2 * 174, current_years_of_service=20)
        )
        assert result.additional_years == 1
        assert result.additional_months == 2
        assert result.additional_days == 0
        assert result.additional_service_time == 1.17
        assert result.revised_service_total == 21.17

    def test_fers_pension_multiplier(self):
        enhanced = v.calculate_fers_pension(
            v.FERSPensionInput(high3_salary=90000, years_of_service=25, retiring_at_62_plus_with_20=True)
        )
        standard = v.calculate_fers_pension(
            v.FERSPensionInput(high3_salary=90000, years_of_service=25, retiring_at_62_plus_with_20=False)
        )
        assert enhanced.annual_pension == 24750
        assert enhanced.monthly_pension == 2062.5
        assert enhanced.multiplier_used == "1.1% per year"
        assert standard.annual_pension == 22500

    def test_tsp_no_growth(self):
        result = v.calculate_tsp_growth(
            v.TSPGrowthInput(
                monthly_contribution=100,
                employer_match_percent=5,
                annual_return_rate=0,
                years_until_retirement=1,
            )
        )
        assert result.projected_balance_at_retirement == 1260
        assert result.total_contributions == 1260
        assert result.total_growth == 0

    def test_tsp_growth_positive(self):
        result = v.calculate_tsp_growth(
            v.TSPGrowthInput(
                current_balance=10000,
                monthly_contribution=500,
                annual_return_rate=7,
                years_until_retirement=20,
            )
        )
        assert result.total_contributions == 130000
        assert result.total_growth > 0

    def test_cola(self):
        result = v.calculate_cola(
            v.COLAInput(current_benefit=1000, expected_cola_percent=10, years=1)
        )
        assert result.projected_monthly_benefit == 1100
        assert result.projected_annual_benefit == 13200
        assert result.total_increase_over_period == 600

    def test_brs_under_20_years(self):
        result = v.calculate_brs_comparison(
            v.BRSComparisonInput(years_of_service_at_separation=10, base_pay_at_separation=4000)
        )
        assert result.legacy_pension_estimate == 0
        assert result.brs_pension_estimate == 0
        assert result.brs_tsp_projected_balance > 0
        assert result.high_level_comparison_summary.startswith("With less than 20 years")

    def test_brs_20_years(self):
        result = v.calculate_brs_comparison(
            v.BRSComparisonInput(years_of_service_at_separation=20, base_pay_at_separation=5000)
        )
        assert result.legacy_pension_estimate == 30000
        assert result.brs_pension_estimate == 24000
        assert result.high_level_comparison_summary.startswith("BRS appears more favorable")


class TestVADisability:
    """Tests for the VA combined rating and compensation estimators."""

    def test_whole_person_method(self):
        result = v.calculate_va_combined_rating(v.VACombinedRatingInput(ratings=[30, 50]))
        assert result.combined_rating_percent == 65.0
        assert result.rounded_combined_rating == 70
        assert "65.0%" in result.explanation
        assert "70%" in result.explanation

    def test_bilateral_factor(self):
        result = v.calculate_va_combined_rating(
            v.VACombinedRatingInput(ratings=[50, 30], has_bilateral_factor=True)
        )
        assert result.combined_rating_percent == 71.5
        assert result.rounded_combined_rating == 70
        assert result.bilateral_factor_applied is True

    def test_capped_at_100(self):
        result = v.calculate_va_combined_rating(
            v.VACombinedRatingInput(ratings=[100, 90], has_bilateral_factor=True)
        )
        assert result.rounded_combined_rating == 100

    def test_rating_out_of_range(self):
        with pytest.raises(ValidationError):
            v.VACombinedRatingInput(ratings=[120])
        with pytest.raises(ValidationError):
            v.VACombinedRatingInput(ratings=[])

    def test_compensation_with_dependents(self):
        result = v.calculate_va_compensation(
            v.VACompensationInput(
                combined_rating=70,
                marital_status="Married",
                has_dependent_parents=True,
                child_count=2,
            )
        )
        assert result.estimated_monthly_compensation == pytest.approx(2038.28)
        assert result.annual_compensation == pytest.approx(24459.36)
        assert result.dependency_breakdown == (
            "Married veteran rate, Dependent parent(s), 2 child(ren)"
        )

    def test_compensation_low_rating_ignores_dependents(self):
        result = v.calculate_va_compensation(
            v.VACompensationInput(combined_rating=20, child_count=1, has_dependent_parents=True)
        )
        assert result.estimated_monthly_compensation == pytest.approx(338.49)
        assert result.dependency_breakdown == "Base single rate"

    def test_compensation_rounds_rating(self):
        result = v.calculate_va_compensation(v.VACompensationInput(combined_rating=65))
        assert result.estimated_monthly_compensation == pytest.approx(1716.28)

    def test_zero_rating(self):
        result = v.calculate_va_compensation(v.VACompensationInput(combined_rating=0))
        assert result.estimated_monthly_compensation == 0


class TestTransition:
    def test_readiness_all_done(self):
        result = v.calculate_separation_readiness(
            v.SeparationReadinessInput(
                months_until_separation=12,
                has_intent_to_file=True,
                claims_started=True,
                has_transition_counseling=True,
                has_post_separation_plan=True,
            )
        )
        assert result.readiness_score_percent == 100
        assert result.readiness_level == "Ahead"
        assert result.recommended_actions == []

    def test_readiness_urgent(self):
        result = v.calculate_separation_readiness(
            v.SeparationReadinessInput(
                months_until_separation=3,
                has_intent_to_file=False,
                claims_started=False,
                has_transition_counseling=False,
                has_post_separation_plan=False,
            )
        )
        assert result.readiness_score_percent == 0
        assert result.readiness_level == "Critical"
        assert result.recommended_actions[0].startswith("URGENT")
        assert len(result.recommended_actions) == 5

    def test_readiness_levels(self):
        result = v.calculate_separation_readiness(
            v.SeparationReadinessInput(
                months_until_separation=24,
                has_intent_to_file=True,
                claims_started=False,
                has_transition_counseling=True,
                has_post_separation_plan=False,
            )
        )
        assert result.readiness_score_percent == 50
        assert result.readiness_level == "On Track"
        assert not any(a.startswith("URGENT") for a in result.recommended_actions)

    def test_leave_sellback_capped(self):
        result = v.calculate_leave_sellback(
            v.LeaveSellBackInput(unused_leave_days=70, base_pay_per_month=3000)
        )
        assert result.gross_sell_back_amount == 6000
        assert result.estimated_taxes == 1320
        assert result.net_sell_back_amount == 4680


class TestProtectionEducationHealthcare:
    def test_sbp(self):
        result = v.calculate_sbp(v.SBPInput(gross_retired_pay=3000))
        assert result.monthly_premium == 195
        assert result.monthly_survivor_benefit == 1650
        assert result.annual_premium == 2340

    def test_insurance_needs(self):
        data = dict(
            annual_income=60000,
            years_of_income_replacement=10,
            outstanding_debt=20000,
            mortgage_balance=200000,
        )
        result = v.calculate_insurance_needs(v.InsuranceNeedsInput(current_coverage=400000, **data))
        assert result.recommended_total_coverage == 820000
        assert result.additional_coverage_needed == 420000

        covered = v.calculate_insurance_needs(v.InsuranceNeedsInput(current_coverage=1_000_000, **data))
        assert covered.additional_coverage_needed == 0

    @pytest.mark.parametrize(
        "months,percent",
        [(0, 40), (5, 40), (6, 50), (12, 60), (20, 70), (24, 80), (30, 90), (36, 100), (48, 100)],
    )
    def test_gi_bill_tiers(self, months, percent):
        assert v.gi_bill_percent(months) == percent

    def test_gi_bill_online_halves_housing(self):
        result = v.calculate_gi_bill(v.GIBillInput(service_time_months=20, school_type="Online"))
        assert result.tuition_coverage_percent == 70
        assert result.estimated_monthly_housing_allowance == 630
        assert result.books_stipend_estimate == 700

    def test_gi_bill_full(self):
        result = v.calculate_gi_bill(v.GIBillInput(service_time_months=36, school_type="Public"))
        assert result.estimated_monthly_housing_allowance == 1800
        assert result.books_stipend_estimate == 1000

    def test_va_travel(self):
        result = v.calculate_va_travel(v.VATravelInput(one_way_miles=25, round_trips_per_month=4))
        assert result.reimbursement_per_trip == pytest.approx(20.75)
        assert result.reimbursement_per_month == pytest.approx(83.0)
        assert result.reimbursement_per_year == pytest.approx(996.0)

    def test_va_travel_defaults_to_one_trip(self):
        result = v.calculate_va_travel(v.VATravelInput(one_way_miles=10, mileage_rate=0.5))
        assert result.reimbursement_per_trip == 10
        assert result.reimbursement_per_month == 10
