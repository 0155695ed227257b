"""Half-up rounding for money and percentage outputs."""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext


def _quantize(value: Decimal, ndigits: int) -> Decimal:
    # Precision grows with the magnitude so large projections never trap.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + ndigits + 2)
        return value.quantize(Decimal(1).scaleb(-ndigits), rounding=ROUND_HALF_UP)


def round_half_up(value: float, ndigits: int = 2) -> float:
    """Round *value* half away from zero (``round()`` would round half to even).

    Infinities and NaN are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(_quantize(Decimal(str(value)), ndigits))


def round_to_nearest(value: float, step: int) -> int:
    """Round *value* to the nearest multiple of *step*, halves going up."""
    return int(_quantize(Decimal(str(value / step)), 0)) * step
