from seeksy.finance.assumptions import (
    ASSUMPTIONS_SCHEMA,
    AssumptionConfig,
    ResolvedAssumptions,
    resolve_assumptions,
)
from seeksy.finance.calculators import (
    CapitalEvent,
    calculate_breakeven,
    calculate_roi,
    calculate_runway,
    calculate_subscription_revenue,
)

__all__ = [
    "ASSUMPTIONS_SCHEMA",
    "AssumptionConfig",
    "CapitalEvent",
    "ResolvedAssumptions",
    "calculate_breakeven",
    "calculate_roi",
    "calculate_runway",
    "calculate_subscription_revenue",
    "resolve_assumptions",
]
