"""Military & federal benefits calculators.

Each calculator is a pure function from a validated input model to a result
model.  Figures are estimates using simplified published rules; they are not
official determinations.
"""

from __future__ import annotations

import calendar
from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from seeksy.calculators.rounding import round_half_up, round_to_nearest

# ── Retirement ────────────────────────────────────────────────────────────────

FERS_HOURS_PER_YEAR = 2087
FERS_HOURS_PER_MONTH = 174
FERS_HOURS_PER_DAY = 5.797


class MilitaryBuybackInput(BaseModel):
    years_of_military_service: float = Field(..., ge=0)
    high3_salary: float = Field(..., ge=0)
    deposit_percent: float = Field(3, ge=0, le=100)
    years_until_retirement: float = Field(..., ge=0)


class MilitaryBuybackResult(BaseModel):
    estimated_deposit_amount: float
    projected_pension_increase_per_year: float
    break_even_years: float


def calculate_military_buyback(data: MilitaryBuybackInput) -> MilitaryBuybackResult:
    deposit = data.high3_salary * (data.deposit_percent / 100) * data.years_of_military_service
    increase = data.high3_salary * 0.01 * data.years_of_military_service
    break_even = deposit / increase if increase > 0 else 0.0
    return MilitaryBuybackResult(
        estimated_deposit_amount=round_half_up(deposit),
        projected_pension_increase_per_year=round_half_up(increase),
        break_even_years=round_half_up(break_even, 1),
    )


class MRAInput(BaseModel):
    date_of_birth: date
    service_type: Literal["FERS", "FERS-RAE", "FERS-FRAE"] = "FERS"
    years_of_service: float = Field(..., ge=0)


class MRAResult(BaseModel):
    minimum_retirement_age: str
    mra_years: int
    mra_months: int
    earliest_immediate_retirement_date: date
    reduced_annuity_eligible: bool


def fers_mra(birth_year: int) -> tuple[int, int]:
    """Return the FERS Minimum Retirement Age as ``(years, months)``."""
    if birth_year < 1948:
        return 55, 0
    if birth_year <= 1952:
        return 55, 2 * (birth_year - 1947)
    if birth_year <= 1964:
        return 56, 0
    if birth_year <= 1969:
        return 56, 2 * (birth_year - 1964)
    return 57, 0


def _add_months(start: date, months: int) -> date:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def calculate_mra(data: MRAInput) -> MRAResult:
    years, months = fers_mra(data.date_of_birth.year)
    label = f"{years} years" + (f" {months} months" if months else "")
    return MRAResult(
        minimum_retirement_age=label,
        mra_years=years,
        mra_months=months,
        earliest_immediate_retirement_date=_add_months(data.date_of_birth, years * 12 + months),
        # MRA+10: eligible with 10-29 years, reduced 5% per year under 62
        reduced_annuity_eligible=10 <= data.years_of_service < 30,
    )


class SickLeaveInput(BaseModel):
    sick_leave_hours: float = Field(..., ge=0)
    current_years_of_service: float = Field(..., ge=0)


class SickLeaveResult(BaseModel):
    additional_service_time: float
    additional_years: int
    additional_months: int
    additional_days: int
    revised_service_total: float


def calculate_sick_leave(data: SickLeaveInput) -> SickLeaveResult:
    hours = data.sick_leave_hours
    years, remainder = divmod(hours, FERS_HOURS_PER_YEAR)
    months, remainder = divmod(remainder, FERS_HOURS_PER_MONTH)
    days = int(remainder // FERS_HOURS_PER_DAY)
    extra = hours / FERS_HOURS_PER_YEAR
    return SickLeaveResult(
        additional_service_time=round_half_up(extra),
        additional_years=int(years),
        additional_months=int(months),
        additional_days=days,
        revised_service_total=round_half_up(data.current_years_of_service + extra),
    )


class FERSPensionInput(BaseModel):
    high3_salary: float = Field(..., ge=0)
    years_of_service: float = Field(..., ge=0)
    retiring_at_62_plus_with_20: bool


class FERSPensionResult(BaseModel):
    annual_pension: float
    monthly_pension: float
    multiplier_used: str


def calculate_fers_pension(data: FERSPensionInput) -> FERSPensionResult:
    multiplier = 0.011 if data.retiring_at_62_plus_with_20 else 0.01
    annual = data.high3_salary * data.years_of_service * multiplier
    return FERSPensionResult(
        annual_pension=round_half_up(annual),
        monthly_pension=round_half_up(annual / 12),
        multiplier_used="1.1% per year" if data.retiring_at_62_plus_with_20 else "1.0% per year",
    )


class TSPGrowthInput(BaseModel):
    current_balance: float = Field(0, ge=0)
    monthly_contribution: float = Field(..., ge=0)
    employer_match_percent: float = Field(0, ge=0)
    annual_return_rate: float = Field(..., ge=-100, le=100)
    years_until_retirement: int = Field(..., ge=0, le=80)


class TSPGrowthResult(BaseModel):
    projected_balance_at_retirement: float
    total_contributions: float
    total_growth: float


def calculate_tsp_growth(data: TSPGrowthInput) -> TSPGrowthResult:
    monthly_rate = data.annual_return_rate / 100 / 12
    monthly_total = data.monthly_contribution * (1 + data.employer_match_percent / 100)
    balance = data.current_balance
    contributed = data.current_balance
    for _ in range(data.years_until_retirement * 12):
        balance = balance * (1 + monthly_rate) + monthly_total
        contributed += monthly_total
    return TSPGrowthResult(
        projected_balance_at_retirement=round_half_up(balance),
        total_contributions=round_half_up(contributed),
        total_growth=round_half_up(balance - contributed),
    )


class COLAInput(BaseModel):
    current_benefit: float = Field(..., ge=0)
    expected_cola_percent: float = Field(..., ge=-100, le=100)
    years: int = Field(..., ge=0, le=80)


class COLAResult(BaseModel):
    projected_monthly_benefit: float
    projected_annual_benefit: float
    total_increase_over_period: float


def calculate_cola(data: COLAInput) -> COLAResult:
    projected = data.current_benefit * (1 + data.expected_cola_percent / 100) ** data.years
    increase = projected - data.current_benefit
    return COLAResult(
        projected_monthly_benefit=round_half_up(projected),
        projected_annual_benefit=round_half_up(projected * 12),
        # linear ramp approximation of the cumulative extra pay
        total_increase_over_period=round_half_up(increase * 12 * data.years / 2),
    )


class BRSComparisonInput(BaseModel):
    years_of_service_at_separation: int = Field(..., ge=0, le=60)
    base_pay_at_separation: float = Field(..., ge=0)
    tsp_contribution_percent: float = Field(0, ge=0)
    expected_return_rate: float = Field(7, ge=-100, le=100)


class BRSComparisonResult(BaseModel):
    legacy_pension_estimate: float
    brs_pension_estimate: float
    brs_tsp_projected_balance: float
    high_level_comparison_summary: str


BRS_GOVERNMENT_MATCH = 0.05
PENSION_COMPARISON_YEARS = 20


def calculate_brs_comparison(data: BRSComparisonInput) -> BRSComparisonResult:
    years = data.years_of_service_at_separation
    vested = years >= 20
    legacy = data.base_pay_at_separation * (years * 0.025 if vested else 0) * 12
    brs = data.base_pay_at_separation * (years * 0.02 if vested else 0) * 12

    monthly_in = data.base_pay_at_separation * (
        data.tsp_contribution_percent / 100 + BRS_GOVERNMENT_MATCH
    )
    rate = (data.expected_return_rate or 7) / 100 / 12
    tsp = 0.0
    for _ in range(years * 12):
        tsp = tsp * (1 + rate) + monthly_in

    if not vested:
        summary = (
            "With less than 20 years, BRS is generally better due to continuation "
            "pay and vested TSP matching."
        )
    elif brs * PENSION_COMPARISON_YEARS + tsp > legacy * PENSION_COMPARISON_YEARS:
        summary = "BRS appears more favorable when combining pension and TSP growth."
    else:
        summary = "Legacy may provide higher guaranteed income, but BRS offers flexibility."

    return BRSComparisonResult(
        legacy_pension_estimate=round_half_up(legacy),
        brs_pension_estimate=round_half_up(brs),
        brs_tsp_projected_balance=round_half_up(tsp),
        high_level_comparison_summary=summary,
    )


# ── VA Disability ─────────────────────────────────────────────────────────────

# 2024 monthly rates (veteran alone / veteran with spouse), keyed by rating.
VA_COMPENSATION_RATES_2024: dict[int, tuple[float, float]] = {
    10: (171.23, 171.23),
    20: (338.49, 338.49),
    30: (524.31, 586.31),
    40: (755.28, 839.28),
    50: (1075.16, 1180.16),
    60: (1361.88, 1487.88),
    70: (1716.28, 1863.28),
    80: (1995.01, 2163.01),
    90: (2241.91, 2430.91),
    100: (3737.85, 3946.25),
}
DEPENDENT_PARENT_ADD = 75.0
PER_CHILD_ADD = 50.0
DEPENDENT_MIN_RATING = 30


class VACombinedRatingInput(BaseModel):
    ratings: list[Annotated[float, Field(ge=0, le=100)]] = Field(..., min_length=1)
    has_bilateral_factor: bool = False


class VACombinedRatingResult(BaseModel):
    combined_rating_percent: float
    rounded_combined_rating: int
    bilateral_factor_applied: bool
    explanation: str


def calculate_va_combined_rating(data: VACombinedRatingInput) -> VACombinedRatingResult:
    remaining = 100.0
    for rating in sorted(data.ratings, reverse=True):
        remaining -= remaining * rating / 100

    combined = 100 - remaining
    if data.has_bilateral_factor:
        combined *= 1.10

    rounded = min(100, round_to_nearest(combined, 10))
    combined_1dp = round_half_up(combined, 1)
    return VACombinedRatingResult(
        combined_rating_percent=combined_1dp,
        rounded_combined_rating=rounded,
        bilateral_factor_applied=data.has_bilateral_factor,
        explanation=(
            f'Using VA\'s "whole person" method, your combined rating is '
            f"{combined_1dp:.1f}%, rounded to {rounded}%."
        ),
    )


class VACompensationInput(BaseModel):
    combined_rating: float = Field(..., ge=0, le=100)
    marital_status: Literal["Single", "Married"] = "Single"
    has_dependent_parents: bool = False
    child_count: int = Field(0, ge=0)


class VACompensationResult(BaseModel):
    estimated_monthly_compensation: float
    dependency_breakdown: str
    annual_compensation: float


def calculate_va_compensation(data: VACompensationInput) -> VACompensationResult:
    rating = round_to_nearest(data.combined_rating, 10)
    single, married = VA_COMPENSATION_RATES_2024.get(rating, (0.0, 0.0))
    base = married if data.marital_status == "Married" else single

    parent_add = (
        DEPENDENT_PARENT_ADD
        if data.has_dependent_parents and rating >= DEPENDENT_MIN_RATING
        else 0.0
    )
    child_add = data.child_count * PER_CHILD_ADD if rating >= DEPENDENT_MIN_RATING else 0.0
    total = base + parent_add + child_add

    breakdown = []
    if data.marital_status == "Married":
        breakdown.append("Married veteran rate")
    if parent_add:
        breakdown.append("Dependent parent(s)")
    if child_add:
        breakdown.append(f"{data.child_count} child(ren)")

    return VACompensationResult(
        estimated_monthly_compensation=round_half_up(total),
        dependency_breakdown=", ".join(breakdown) if breakdown else "Base single rate",
        annual_compensation=round_half_up(total * 12),
    )


# ── Transition ────────────────────────────────────────────────────────────────

MAX_SELLBACK_DAYS = 60
DEFAULT_FEDERAL_TAX_RATE = 22.0


class SeparationReadinessInput(BaseModel):
    months_until_separation: float = Field(..., ge=0)
    has_intent_to_file: bool
    claims_started: bool
    has_transition_counseling: bool
    has_post_separation_plan: bool


class SeparationReadinessResult(BaseModel):
    readiness_score_percent: int
    readiness_level: Literal["Critical", "Behind", "On Track", "Ahead"]
    recommended_actions: list[str]


def calculate_separation_readiness(data: SeparationReadinessInput) -> SeparationReadinessResult:
    score = 0
    actions: list[str] = []

    if data.has_intent_to_file:
        score += 25
    else:
        actions.append("File your Intent to File to preserve your effective date")

    if data.claims_started:
        score += 25
    elif data.months_until_separation < 12:
        actions.append("Start gathering evidence for your VA claims")

    if data.has_transition_counseling:
        score += 25
    else:
        actions.append("Complete TAP or equivalent transition counseling")

    if data.has_post_separation_plan:
        score += 25
    else:
        actions.append("Develop your post-separation employment or education plan")

    if data.months_until_separation < 6 and score < 75:
        actions.insert(
            0,
            "URGENT: You're less than 6 months out - prioritize these items immediately",
        )

    if score >= 75:
        level = "Ahead"
    elif score >= 50:
        level = "On Track"
    elif score >= 25:
        level = "Behind"
    else:
        level = "Critical"

    return SeparationReadinessResult(
        readiness_score_percent=score,
        readiness_level=level,
        recommended_actions=actions,
    )


class LeaveSellBackInput(BaseModel):
    unused_leave_days: float = Field(..., ge=0)
    base_pay_per_month: float = Field(..., ge=0)
    federal_tax_rate: float | None = Field(None, ge=0, le=100)


class LeaveSellBackResult(BaseModel):
    gross_sell_back_amount: float
    estimated_taxes: float
    net_sell_back_amount: float


def calculate_leave_sellback(data: LeaveSellBackInput) -> LeaveSellBackResult:
    daily_rate = data.base_pay_per_month / 30
    gross = daily_rate * min(data.unused_leave_days, MAX_SELLBACK_DAYS)
    tax_rate = (data.federal_tax_rate or DEFAULT_FEDERAL_TAX_RATE) / 100
    taxes = gross * tax_rate
    return LeaveSellBackResult(
        gross_sell_back_amount=round_half_up(gross),
        estimated_taxes=round_half_up(taxes),
        net_sell_back_amount=round_half_up(gross - taxes),
    )


# ── Protection ────────────────────────────────────────────────────────────────

SBP_SURVIVOR_SHARE = 0.55


class SBPInput(BaseModel):
    gross_retired_pay: float = Field(..., ge=0)
    coverage_base_percent: float = Field(100, ge=0, le=100)
    sbp_premium_rate_percent: float = Field(6.5, ge=0, le=100)


class SBPResult(BaseModel):
    monthly_premium: float
    monthly_survivor_benefit: float
    annual_premium: float


def calculate_sbp(data: SBPInput) -> SBPResult:
    coverage_base = data.gross_retired_pay * data.coverage_base_percent / 100
    premium = coverage_base * data.sbp_premium_rate_percent / 100
    return SBPResult(
        monthly_premium=round_half_up(premium),
        monthly_survivor_benefit=round_half_up(coverage_base * SBP_SURVIVOR_SHARE),
        annual_premium=round_half_up(premium * 12),
    )


class InsuranceNeedsInput(BaseModel):
    annual_income: float = Field(..., ge=0)
    years_of_income_replacement: float = Field(..., ge=0)
    outstanding_debt: float = Field(0, ge=0)
    mortgage_balance: float = Field(0, ge=0)
    current_coverage: float = Field(0, ge=0)


class InsuranceNeedsResult(BaseModel):
    recommended_total_coverage: float
    additional_coverage_needed: float


def calculate_insurance_needs(data: InsuranceNeedsInput) -> InsuranceNeedsResult:
    total = (
        data.annual_income * data.years_of_income_replacement
        + data.outstanding_debt
        + data.mortgage_balance
    )
    return InsuranceNeedsResult(
        recommended_total_coverage=round_half_up(total),
        additional_coverage_needed=round_half_up(max(0.0, total - data.current_coverage)),
    )


# ── Education ─────────────────────────────────────────────────────────────────

# (minimum qualifying months, benefit percent), checked top-down
GI_BILL_TIERS: list[tuple[int, int]] = [
    (36, 100),
    (30, 90),
    (24, 80),
    (18, 70),
    (12, 60),
    (6, 50),
]
GI_BILL_MIN_PERCENT = 40
NATIONAL_AVG_HOUSING = 1800.0
BOOKS_STIPEND_CAP = 1000.0


class GIBillInput(BaseModel):
    service_time_months: int = Field(..., ge=0)
    school_type: Literal["Public", "Private", "Foreign", "Online"]
    zip_code: str | None = None


class GIBillResult(BaseModel):
    tuition_coverage_percent: int
    estimated_monthly_housing_allowance: float
    books_stipend_estimate: float


def gi_bill_percent(service_months: int) -> int:
    for min_months, percent in GI_BILL_TIERS:
        if service_months >= min_months:
            return percent
    return GI_BILL_MIN_PERCENT


def calculate_gi_bill(data: GIBillInput) -> GIBillResult:
    percent = gi_bill_percent(data.service_time_months)
    housing = NATIONAL_AVG_HOUSING
    if data.school_type == "Online":
        housing *= 0.5
    return GIBillResult(
        tuition_coverage_percent=percent,
        estimated_monthly_housing_allowance=round_half_up(housing * percent / 100),
        books_stipend_estimate=round_half_up(BOOKS_STIPEND_CAP * percent / 100),
    )


# ── Healthcare ────────────────────────────────────────────────────────────────

VA_MILEAGE_RATE_2024 = 0.415


class VATravelInput(BaseModel):
    one_way_miles: float = Field(..., ge=0)
    round_trips_per_month: int | None = Field(None, ge=0)
    mileage_rate: float | None = Field(None, ge=0)


class VATravelResult(BaseModel):
    reimbursement_per_trip: float
    reimbursement_per_month: float
    reimbursement_per_year: float


def calculate_va_travel(data: VATravelInput) -> VATravelResult:
    rate = data.mileage_rate or VA_MILEAGE_RATE_2024
    per_trip = data.one_way_miles * 2 * rate
    per_month = per_trip * (data.round_trips_per_month or 1)
    return VATravelResult(
        reimbursement_per_trip=round_half_up(per_trip),
        reimbursement_per_month=round_half_up(per_month),
        reimbursement_per_year=round_half_up(per_month * 12),
    )
