"""Veteran and federal benefits calculator routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from seeksy.api.deps import verify_api_key
from seeksy.calculators import (
    CATEGORIES,
    CalculatorConfig,
    get_calculator,
    get_calculator_by_route,
    list_calculators,
    run_calculator,
)

router = APIRouter()


@router.get("/calculators", response_model=list[CalculatorConfig])
async def list_all(category: str | None = None, _: str = Depends(verify_api_key)):
    """List calculators, optionally filtered by category."""
    return list_calculators(category)


@router.get("/calculators/categories")
async def categories(_: str = Depends(verify_api_key)):
    return CATEGORIES


@router.get("/calculators/lookup", response_model=CalculatorConfig)
async def lookup_by_route(route: str, _: str = Depends(verify_api_key)):
    """Resolve a frontend page route to its calculator config."""
    calculator = get_calculator_by_route(route)
    if calculator is None:
        raise HTTPException(status_code=404, detail="Calculator not found")
    return calculator.config


@router.get("/calculators/{calculator_id}", response_model=CalculatorConfig)
async def get_one(calculator_id: str, _: str = Depends(verify_api_key)):
    try:
        return get_calculator(calculator_id).config
    except KeyError:
        raise HTTPException(status_code=404, detail="Calculator not found")


@router.post("/calculators/{calculator_id}/run")
async def run(
    calculator_id: str,
    payload: dict[str, Any] = Body(...),
    _: str = Depends(verify_api_key),
):
    """Run a calculator.  Invalid inputs are answered with 422."""
    try:
        result = run_calculator(calculator_id, payload)
    except KeyError:
        raise HTTPException(status_code=404, detail="Calculator not found")
    return {"calculator_id": calculator_id, "result": result.model_dump(mode="json")}
