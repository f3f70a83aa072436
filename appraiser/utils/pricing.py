from __future__ import annotations

import math
from typing import Optional

# (upper bound, rounding unit); anything at or above the last bound rounds to 1000
PRICE_TIERS = (
    (100, 10),
    (1_000, 50),
    (10_000, 100),
    (100_000, 500),
)
TOP_TIER_UNIT = 1_000


def rounding_unit(price: float) -> int:
    for upper, unit in PRICE_TIERS:
        if price < upper:
            return unit
    return TOP_TIER_UNIT


def humanize_price(price: float) -> int:
    """Round an estimate to tier precision so values never carry fake precision."""
    unit = rounding_unit(price)
    # half-up rounding; round() would round half to even
    return int(math.floor(price / unit + 0.5) * unit)


def humanize_optional(value: object) -> Optional[int]:
    """Humanize a model-supplied figure; falsy or non-numeric values become None."""
    if not value or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return humanize_price(number)


def floor_to_unit(price: float) -> int:
    """Largest multiple of the tier unit not exceeding price."""
    unit = rounding_unit(price)
    return int(math.floor(price / unit) * unit)
