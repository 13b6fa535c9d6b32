"""SQLAlchemy model package for the organization-scoped lead schema."""

from leadflow.models.base import Base
from leadflow.models.category import Category
from leadflow.models.enums import (
    LeadStatus,
    NotTodayReason,
    PurchaseTimeline,
    ReviewStatus,
    ScoreCategory,
    UserRole,
)
from leadflow.models.lead import Lead, LostLead, WinLead
from leadflow.models.organization import Organization
from leadflow.models.product_model import ProductModel
from leadflow.models.user import User

__all__ = [
    "Base",
    "Category",
    "Lead",
    "LeadStatus",
    "LostLead",
    "NotTodayReason",
    "Organization",
    "ProductModel",
    "PurchaseTimeline",
    "ReviewStatus",
    "ScoreCategory",
    "User",
    "UserRole",
    "WinLead",
]
