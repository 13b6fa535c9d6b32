"""Pydantic schema package for API contracts."""

from leadflow.schemas.categories import (
    CategoryCreateRequest,
    CategoryOrderItem,
    CategoryReorderRequest,
    CategoryResponse,
)
from leadflow.schemas.leads import (
    BulkDeleteRequest,
    CustomerHistoryResponse,
    IncentiveUpdateRequest,
    LeadCreateRequest,
    LeadResponse,
    ReviewStatusUpdateRequest,
    ScoredLeadResponse,
)
from leadflow.schemas.team import (
    OrganizationResponse,
    OrganizationUpdateRequest,
    TeamMemberCreateRequest,
    TeamMemberResponse,
)

__all__ = [
    "BulkDeleteRequest",
    "CategoryCreateRequest",
    "CategoryOrderItem",
    "CategoryReorderRequest",
    "CategoryResponse",
    "CustomerHistoryResponse",
    "IncentiveUpdateRequest",
    "LeadCreateRequest",
    "LeadResponse",
    "OrganizationResponse",
    "OrganizationUpdateRequest",
    "ReviewStatusUpdateRequest",
    "ScoredLeadResponse",
    "TeamMemberCreateRequest",
    "TeamMemberResponse",
]
