"""Lead request/response schemas for API contracts.

Request models accept the camelCase field names the lead form posts and stay
loose on types: range and cross-field rules belong to the intake service so
that callers get one specific error code per rule.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leadflow.models.enums import NotTodayReason, PurchaseTimeline, ReviewStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())


class LeadCreateRequest(_CamelModel):
    customer_name: str | None = None
    customer_phone: str | None = None
    category_id: int | str | None = None
    status: str | None = None
    invoice_no: str | None = None
    sale_price: float | str | None = None
    deal_size: float | str | None = None
    model_name: str | None = None
    purchase_timeline: str | None = None
    not_today_reason: str | None = None
    other_reason: str | None = None
    lead_rating: int | str | None = None


class ReviewStatusUpdateRequest(_CamelModel):
    invoice_no: str = Field(min_length=1, max_length=64)
    review_status: str = Field(min_length=2, max_length=40)


class IncentiveUpdateRequest(_CamelModel):
    has_incentive: bool
    incentive_amount: float | str | None = None


class BulkDeleteRequest(_CamelModel):
    lead_ids: list[int] = Field(default_factory=list)


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organization_id: int
    sales_rep_id: int
    customer_name: str
    customer_phone: str
    category_id: int
    status: str
    invoice_no: str | None = None
    sale_price: Decimal | None = None
    review_status: ReviewStatus | None = None
    reviewed_by: int | None = None
    has_incentive: bool | None = None
    incentive_amount: Decimal | None = None
    deal_size: Decimal | None = None
    model_id: int | None = None
    purchase_timeline: PurchaseTimeline | None = None
    not_today_reason: NotTodayReason | None = None
    other_reason: str | None = None
    lead_rating: int | None = None
    whatsapp_sent: bool = False
    whatsapp_sent_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ScoredLeadResponse(BaseModel):
    lead: LeadResponse
    score: int
    category: str
    breakdown: dict[str, int]


class CustomerHistoryResponse(BaseModel):
    phone: str
    name: str
    lead_count: int
    win_count: int
    lost_count: int
    total_value: Decimal
    first_visit: datetime
    last_visit: datetime
    leads: list[LeadResponse]
