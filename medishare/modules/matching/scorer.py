# medishare/modules/matching/scorer.py

"""
Compatibility scoring between one surplus posting and one open request.

    match_score = 0.4 * urgency + 0.3 * expiry + 0.3 * quantity

- urgency:  Critical 100, High 75, Medium 50, Low 25
- expiry:   max(0, 100 - days_until_expiry / 90 * 100). Only the low end is
            clamped, so stock that is already past expiry scores above 100.
- quantity: min(surplus / requested, 1) * 100

Scoring is pure: no I/O and no logging. Pass ``now`` to make it deterministic.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from medishare.shared.schemas.enums import UrgencyEnum
from medishare.shared.services.inventory_status import InventoryStatusService

URGENCY_SCORES = {
    UrgencyEnum.CRITICAL.value: 100,
    UrgencyEnum.HIGH.value: 75,
    UrgencyEnum.MEDIUM.value: 50,
    UrgencyEnum.LOW.value: 25,
}

URGENCY_WEIGHT = 0.4
EXPIRY_WEIGHT = 0.3
QUANTITY_WEIGHT = 0.3

EXPIRY_HORIZON_DAYS = 90


@dataclass(frozen=True)
class MatchScore:
    match_score: int
    days_until_expiry: int
    quantity_ratio: float


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def urgency_score(urgency) -> int:
    return URGENCY_SCORES.get(getattr(urgency, "value", urgency), 0)


def expiry_score(days_until_expiry: int) -> float:
    return max(0.0, 100 - (days_until_expiry / EXPIRY_HORIZON_DAYS) * 100)


def quantity_ratio(offered: int, requested: int) -> float:
    return min(offered / requested, 1.0)


def score_match(surplus, request, inventory_item, now: Optional[datetime] = None) -> MatchScore:
    """
    Score a surplus posting against a request for the same medicine.

    ``inventory_item`` must be the item the surplus was drawn from and must
    hold the requested medicine; callers resolve both before scoring.
    """
    days = InventoryStatusService.days_until_expiry(inventory_item.expiry_date, now)
    ratio = quantity_ratio(surplus.quantity, request.quantity)

    raw = (
        URGENCY_WEIGHT * urgency_score(request.urgency)
        + EXPIRY_WEIGHT * expiry_score(days)
        + QUANTITY_WEIGHT * ratio * 100
    )

    return MatchScore(
        match_score=_round_half_up(raw),
        days_until_expiry=days,
        quantity_ratio=ratio
    )
