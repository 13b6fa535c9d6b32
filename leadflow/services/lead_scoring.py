"""Read-time priority score for Lost leads.

Score = timeline (max 40) + deal size (max 25) + not-today reason (max 20)
+ rep rating (max 15), capped at 100. Win leads always score 0. Nothing here
is persisted; callers recompute on every read.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from leadflow.models.enums import LeadStatus, NotTodayReason, PurchaseTimeline, ScoreCategory

MAX_SCORE = 100
HOT_THRESHOLD = 80
WARM_THRESHOLD = 50

TIMELINE_POINTS: dict[PurchaseTimeline, int] = {
    PurchaseTimeline.TODAY: 40,
    PurchaseTimeline.THREE_DAYS: 30,
    PurchaseTimeline.SEVEN_DAYS: 20,
    PurchaseTimeline.THIRTY_DAYS: 10,
}

# (minimum deal size, points), checked top-down.
DEAL_SIZE_TIERS: tuple[tuple[int, int], ...] = (
    (100000, 25),
    (50000, 20),
    (25000, 15),
)
DEAL_SIZE_FLOOR_POINTS = 10

REASON_POINTS: dict[NotTodayReason, int] = {
    NotTodayReason.NEED_FAMILY_APPROVAL: 20,
    NotTodayReason.PRICE_HIGH: 15,
    NotTodayReason.WANT_MORE_OPTIONS: 10,
    NotTodayReason.OTHER: 10,
    NotTodayReason.JUST_BROWSING: 5,
}

RATING_POINTS: dict[int, int] = {5: 15, 4: 12, 3: 9, 2: 6, 1: 3}


@dataclass(frozen=True)
class LeadScore:
    score: int
    category: ScoreCategory
    breakdown: dict[str, int]


def _coerce(enum_cls: type[enum.Enum], value: Any) -> Any:
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _timeline_points(lead: Any) -> int:
    timeline = _coerce(PurchaseTimeline, getattr(lead, "purchase_timeline", None))
    return TIMELINE_POINTS.get(timeline, 0) if timeline else 0


def _deal_size_points(lead: Any) -> int:
    deal_size = getattr(lead, "deal_size", None)
    if deal_size is None:
        return 0
    amount = Decimal(str(deal_size))
    if amount <= 0:
        return 0
    for minimum, points in DEAL_SIZE_TIERS:
        if amount >= minimum:
            return points
    return DEAL_SIZE_FLOOR_POINTS


def _reason_points(lead: Any) -> int:
    reason = _coerce(NotTodayReason, getattr(lead, "not_today_reason", None))
    return REASON_POINTS.get(reason, 0) if reason else 0


def _rating_points(lead: Any) -> int:
    rating = getattr(lead, "lead_rating", None)
    if rating is None:
        return 0
    try:
        return RATING_POINTS.get(int(rating), 0)
    except (TypeError, ValueError):
        return 0


def _is_lost(lead: Any) -> bool:
    return _coerce(LeadStatus, getattr(lead, "status", None)) == LeadStatus.LOST


def categorize(score: int) -> ScoreCategory:
    """Map a score to HOT (>=80), WARM (50-79) or COLD (<50)."""
    if score >= HOT_THRESHOLD:
        return ScoreCategory.HOT
    if score >= WARM_THRESHOLD:
        return ScoreCategory.WARM
    return ScoreCategory.COLD


def score_breakdown(lead: Any) -> LeadScore:
    if not _is_lost(lead):
        return LeadScore(score=0, category=categorize(0), breakdown={})

    breakdown = {
        "purchase_timeline": _timeline_points(lead),
        "deal_size": _deal_size_points(lead),
        "not_today_reason": _reason_points(lead),
        "lead_rating": _rating_points(lead),
    }
    total = min(MAX_SCORE, sum(breakdown.values()))
    return LeadScore(score=total, category=categorize(total), breakdown=breakdown)


def score(lead: Any) -> int:
    """Deterministic 0-100 priority for a Lost lead; 0 for anything else."""
    return score_breakdown(lead).score
