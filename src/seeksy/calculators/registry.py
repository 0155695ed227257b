"""Calculator registry for the Military & Federal Benefits Hub.

Maps each calculator id to its display config, its input model and its
compute function, so the API and CLI can list and run calculators uniformly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel

from seeksy.calculators import veteran as v

logger = logging.getLogger(__name__)

Category = Literal[
    "Retirement",
    "VA Disability",
    "Transition",
    "Taxes",
    "Protection",
    "Education",
    "Healthcare",
]

CATEGORIES: list[dict[str, str]] = [
    {"id": "Retirement", "label": "Retirement", "icon": "Clock"},
    {"id": "VA Disability", "label": "VA Disability", "icon": "Shield"},
    {"id": "Transition", "label": "Transition", "icon": "ArrowRight"},
    {"id": "Taxes", "label": "Taxes", "icon": "Receipt"},
    {"id": "Protection", "label": "Protection", "icon": "Heart"},
    {"id": "Education", "label": "Education", "icon": "GraduationCap"},
    {"id": "Healthcare", "label": "Healthcare", "icon": "Stethoscope"},
]


class CalculatorInput(BaseModel):
    name: str
    label: str
    type: Literal["number", "text", "date", "select", "boolean", "list:number"]
    required: bool
    default: Any = None
    options: list[str] | None = None
    helper_text: str | None = None


class CalculatorConfig(BaseModel):
    id: str
    title: str
    route: str
    category: Category
    description: str
    inputs: list[CalculatorInput]
    outputs: list[str]


@dataclass(frozen=True)
class Calculator:
    config: CalculatorConfig
    input_model: type[BaseModel]
    compute: Callable[[Any], BaseModel]


def _num(name: str, label: str, required: bool = True, default: Any = None, **kw: Any) -> CalculatorInput:
    return CalculatorInput(name=name, label=label, type="number", required=required, default=default, **kw)


def _bool(name: str, label: str, required: bool = False) -> CalculatorInput:
    return CalculatorInput(name=name, label=label, type="boolean", required=required)


def _select(name: str, label: str, options: list[str], required: bool = True) -> CalculatorInput:
    return CalculatorInput(name=name, label=label, type="select", options=options, required=required)


def _outputs(result_model: type[BaseModel]) -> list[str]:
    return list(result_model.model_fields)


_DEFINITIONS: list[tuple[dict[str, Any], type[BaseModel], type[BaseModel], Callable[[Any], BaseModel]]] = [
    (
        {
            "id": "military_buyback",
            "title": "Military Buy-Back Calculator",
            "route": "/veterans/calculators/military-buyback",
            "category": "Retirement",
            "description": (
                "Estimate the cost and long-term benefit of buying back active-duty "
                "time toward a federal retirement."
            ),
            "inputs": [
                _num("years_of_military_service", "Years of military service"),
                _num("high3_salary", "Estimated High-3 federal salary"),
                _num("deposit_percent", "Deposit percent", default=3),
                _num("years_until_retirement", "Years until retirement"),
            ],
        },
        v.MilitaryBuybackInput,
        v.MilitaryBuybackResult,
        v.calculate_military_buyback,
    ),
    (
        {
            "id": "mra_calculator",
            "title": "Minimum Retirement Age (MRA) Calculator",
            "route": "/veterans/calculators/mra",
            "category": "Retirement",
            "description": (
                "Find your MRA and earliest retirement eligibility window as a "
                "federal employee."
            ),
            "inputs": [
                CalculatorInput(name="date_of_birth", label="Date of birth", type="date", required=True),
                _select("service_type", "Service type", ["FERS", "FERS-RAE", "FERS-FRAE"]),
                _num("years_of_service", "Years of creditable service"),
            ],
        },
        v.MRAInput,
        v.MRAResult,
        v.calculate_mra,
    ),
    (
        {
            "id": "sick_leave_calculator",
            "title": "Sick Leave Credit Calculator",
            "route": "/veterans/calculators/sick-leave",
            "category": "Retirement",
            "description": (
                "Estimate how unused sick leave converts into additional service "
                "credit for your FERS retirement."
            ),
            "inputs": [
                _num("sick_leave_hours", "Unused sick leave (hours)"),
                _num("current_years_of_service", "Current years of service"),
            ],
        },
        v.SickLeaveInput,
        v.SickLeaveResult,
        v.calculate_sick_leave,
    ),
    (
        {
            "id": "va_combined_rating",
            "title": "VA Combined Rating Estimator",
            "route": "/veterans/calculators/va-combined-rating",
            "category": "VA Disability",
            "description": (
                "Estimate your combined VA disability rating using the VA's "
                '"whole person" method.'
            ),
            "inputs": [
                CalculatorInput(
                    name="ratings",
                    label="Individual ratings (%)",
                    type="list:number",
                    required=True,
                    helper_text="Enter each rating percentage, e.g., 30, 20, 10",
                ),
                _bool("has_bilateral_factor", "Bilateral conditions?"),
            ],
        },
        v.VACombinedRatingInput,
        v.VACombinedRatingResult,
        v.calculate_va_combined_rating,
    ),
    (
        {
            "id": "va_compensation_estimator",
            "title": "VA Monthly Compensation Estimator",
            "route": "/veterans/calculators/va-compensation",
            "category": "VA Disability",
            "description": "Estimate monthly VA disability pay based on rating and dependents.",
            "inputs": [
                _num("combined_rating", "Combined rating (%)"),
                _select("marital_status", "Marital status", ["Single", "Married"]),
                _bool("has_dependent_parents", "Dependent parents?"),
                _num("child_count", "Number of dependent children", required=False, default=0),
            ],
        },
        v.VACompensationInput,
        v.VACompensationResult,
        v.calculate_va_compensation,
    ),
    (
        {
            "id": "fers_pension_estimator",
            "title": "FERS Pension Estimator",
            "route": "/veterans/calculators/fers-pension",
            "category": "Retirement",
            "description": (
                "Estimate your FERS pension based on High-3 salary, years of "
                "service, and applicable multiplier."
            ),
            "inputs": [
                _num("high3_salary", "High-3 average salary"),
                _num("years_of_service", "Years of creditable service"),
                _bool("retiring_at_62_plus_with_20", "Age 62+ with 20+ years?", required=True),
            ],
        },
        v.FERSPensionInput,
        v.FERSPensionResult,
        v.calculate_fers_pension,
    ),
    (
        {
            "id": "tsp_growth_calculator",
            "title": "TSP Retirement Growth Calculator",
            "route": "/veterans/calculators/tsp-growth",
            "category": "Retirement",
            "description": (
                "Project your Thrift Savings Plan balance over time with "
                "contributions and assumed returns."
            ),
            "inputs": [
                _num("current_balance", "Current TSP balance", required=False, default=0),
                _num("monthly_contribution", "Monthly contribution"),
                _num("employer_match_percent", "Agency/service match % of salary", required=False, default=0),
                _num("annual_return_rate", "Assumed annual return (%)"),
                _num("years_until_retirement", "Years until retirement"),
            ],
        },
        v.TSPGrowthInput,
        v.TSPGrowthResult,
        v.calculate_tsp_growth,
    ),
    (
        {
            "id": "separation_readiness_score",
            "title": "Separation Readiness Score",
            "route": "/veterans/tools/separation-readiness",
            "category": "Transition",
            "description": (
                "Answer a few questions to see how ready you are for separation "
                "or retirement."
            ),
            "inputs": [
                _num("months_until_separation", "Months until separation/retirement"),
                _bool("has_intent_to_file", "Intent to File submitted?", required=True),
                _bool("claims_started", "Any claims already filed?", required=True),
                _bool("has_transition_counseling", "Completed TAP or equivalent?", required=True),
                _bool("has_post_separation_plan", "Post-service employment/education plan?", required=True),
            ],
        },
        v.SeparationReadinessInput,
        v.SeparationReadinessResult,
        v.calculate_separation_readiness,
    ),
    (
        {
            "id": "leave_sellback_calculator",
            "title": "Military Leave Sell-Back Calculator",
            "route": "/veterans/calculators/leave-sellback",
            "category": "Transition",
            "description": (
                "Estimate how much you'll receive if you sell back unused leave "
                "at separation."
            ),
            "inputs": [
                _num("unused_leave_days", "Unused leave days"),
                _num("base_pay_per_month", "Base pay per month"),
                _num("federal_tax_rate", "Estimated federal tax rate (%)", required=False),
            ],
        },
        v.LeaveSellBackInput,
        v.LeaveSellBackResult,
        v.calculate_leave_sellback,
    ),
    (
        {
            "id": "sbp_calculator",
            "title": "Survivor Benefit Plan (SBP) Calculator",
            "route": "/veterans/calculators/sbp",
            "category": "Protection",
            "description": (
                "Estimate SBP costs and potential survivor benefits for your "
                "spouse or dependents."
            ),
            "inputs": [
                _num("gross_retired_pay", "Gross retired pay (monthly)"),
                _num("coverage_base_percent", "Coverage base (% of retired pay)", default=100),
                _num("sbp_premium_rate_percent", "SBP premium rate (%)", default=6.5),
            ],
        },
        v.SBPInput,
        v.SBPResult,
        v.calculate_sbp,
    ),
    (
        {
            "id": "insurance_needs_estimator",
            "title": "Life Insurance Needs Estimator",
            "route": "/veterans/calculators/insurance-needs",
            "category": "Protection",
            "description": (
                "Estimate how much life insurance you may need as you move "
                "between SGLI, VGLI, and FEGLI."
            ),
            "inputs": [
                _num("annual_income", "Annual income"),
                _num("years_of_income_replacement", "Years of income to protect"),
                _num("outstanding_debt", "Total debts (excluding mortgage)", required=False, default=0),
                _num("mortgage_balance", "Mortgage balance", required=False, default=0),
                _num("current_coverage", "Current life insurance coverage", required=False, default=0),
            ],
        },
        v.InsuranceNeedsInput,
        v.InsuranceNeedsResult,
        v.calculate_insurance_needs,
    ),
    (
        {
            "id": "gi_bill_estimator",
            "title": "GI Bill Benefits Estimator",
            "route": "/veterans/calculators/gi-bill",
            "category": "Education",
            "description": (
                "Estimate GI Bill tuition and housing benefits based on service "
                "history and school type."
            ),
            "inputs": [
                _num("service_time_months", "Qualifying active-duty months"),
                _select("school_type", "School type", ["Public", "Private", "Foreign", "Online"]),
                CalculatorInput(name="zip_code", label="School ZIP code", type="text", required=False),
            ],
        },
        v.GIBillInput,
        v.GIBillResult,
        v.calculate_gi_bill,
    ),
    (
        {
            "id": "cola_estimator",
            "title": "COLA Growth Estimator",
            "route": "/veterans/calculators/cola",
            "category": "Retirement",
            "description": (
                "Project how annual cost-of-living adjustments may change your "
                "retired pay over time."
            ),
            "inputs": [
                _num("current_benefit", "Current monthly benefit"),
                _num("expected_cola_percent", "Average annual COLA (%)"),
                _num("years", "Years to project"),
            ],
        },
        v.COLAInput,
        v.COLAResult,
        v.calculate_cola,
    ),
    (
        {
            "id": "brs_vs_legacy_comparison",
            "title": "BRS vs. Legacy Comparison",
            "route": "/veterans/calculators/brs-comparison",
            "category": "Retirement",
            "description": (
                "Compare potential outcomes between the Blended Retirement "
                "System and legacy retirement."
            ),
            "inputs": [
                _num("years_of_service_at_separation", "Years of service at separation/retirement"),
                _num("base_pay_at_separation", "Base pay at separation"),
                _num("tsp_contribution_percent", "TSP contribution %", required=False, default=0),
                _num("expected_return_rate", "Expected TSP annual return (%)", required=False, default=7),
            ],
        },
        v.BRSComparisonInput,
        v.BRSComparisonResult,
        v.calculate_brs_comparison,
    ),
    (
        {
            "id": "va_travel_reimbursement",
            "title": "VA Travel Reimbursement Estimator",
            "route": "/veterans/calculators/va-travel",
            "category": "Healthcare",
            "description": "Estimate mileage reimbursement for approved VA healthcare travel.",
            "inputs": [
                _num("one_way_miles", "One-way distance to facility (miles)"),
                _num("round_trips_per_month", "Number of round trips per month", required=False),
                _num("mileage_rate", "VA mileage rate per mile", required=False),
            ],
        },
        v.VATravelInput,
        v.VATravelResult,
        v.calculate_va_travel,
    ),
]

CALCULATORS: dict[str, Calculator] = {
    meta["id"]: Calculator(
        config=CalculatorConfig(**meta, outputs=_outputs(result_model)),
        input_model=input_model,
        compute=compute,
    )
    for meta, input_model, result_model, compute in _DEFINITIONS
}


def list_calculators(category: str | None = None) -> list[CalculatorConfig]:
    """Return calculator configs, optionally filtered by category."""
    return [
        c.config
        for c in CALCULATORS.values()
        if category is None or c.config.category == category
    ]


def get_calculator(calculator_id: str) -> Calculator:
    """Look up a calculator by id.  Raises ``KeyError`` if unknown."""
    try:
        return CALCULATORS[calculator_id]
    except KeyError:
        raise KeyError(f"Unknown calculator: {calculator_id}") from None


def get_calculator_by_route(route: str) -> Calculator | None:
    """Find the calculator served at a page *route*, or ``None``."""
    return next((c for c in CALCULATORS.values() if c.config.route == route), None)


def run_calculator(calculator_id: str, payload: dict[str, Any]) -> BaseModel:
    """Validate *payload* against the calculator's input model and compute.

    Raises:
        KeyError: unknown calculator id.
        pydantic.ValidationError: payload does not match the input model.
    """
    calculator = get_calculator(calculator_id)
    data = calculator.input_model.model_validate(payload)
    result = calculator.compute(data)
    logger.info("Ran calculator %s", calculator_id)
    return result
