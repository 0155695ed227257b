from seeksy.calculators.registry import (
    CALCULATORS,
    CATEGORIES,
    CalculatorConfig,
    get_calculator,
    get_calculator_by_route,
    list_calculators,
    run_calculator,
)

__all__ = [
    "CALCULATORS",
    "CATEGORIES",
    "CalculatorConfig",
    "get_calculator",
    "get_calculator_by_route",
    "list_calculators",
    "run_calculator",
]
