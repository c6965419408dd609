"""Domain helper deriving a reorder quantity from a demand forecast."""

from __future__ import annotations

from typing import Optional

from src.domain.services.base_forecasters import round_half_up

DEFAULT_REORDER_LEVEL = 10
SAFETY_FACTOR = 1.2


def suggest_reorder_quantity(
    predicted_demand: int,
    reorder_level: Optional[int] = None,
    *,
    default_reorder_level: int = DEFAULT_REORDER_LEVEL,
    safety_factor: float = SAFETY_FACTOR,
) -> int:
    """``max(reorder_level, round(predicted_demand * safety_factor))``.

    A missing or zero reorder level falls back to ``default_reorder_level``.
    """

    level = reorder_level or default_reorder_level
    return max(level, round_half_up(predicted_demand * safety_factor))
