"""Canonical enum values for the lead lifecycle schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    SALES_REP = "sales_rep"


class LeadStatus(str, enum.Enum):
    WIN = "win"
    LOST = "lost"


class ReviewStatus(str, enum.Enum):
    PENDING = "pending"
    YET_TO_REVIEW = "yet_to_review"
    REVIEWED = "reviewed"


class PurchaseTimeline(str, enum.Enum):
    TODAY = "today"
    THREE_DAYS = "3_days"
    SEVEN_DAYS = "7_days"
    THIRTY_DAYS = "30_days"


class NotTodayReason(str, enum.Enum):
    NEED_FAMILY_APPROVAL = "need_family_approval"
    PRICE_HIGH = "price_high"
    WANT_MORE_OPTIONS = "want_more_options"
    JUST_BROWSING = "just_browsing"
    OTHER = "other"


class ScoreCategory(str, enum.Enum):
    HOT = "HOT"
    WARM = "WARM"
    COLD = "COLD"


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enum values (not member names) in the database."""
    return [member.value for member in enum_cls]
