"""Read-side lead queries plus the messaging hand-off flag."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from leadflow.auth.caller_context import CallerContext
from leadflow.core.exceptions import NotFoundError, ValidationError
from leadflow.core.logging import LogContext, build_log_event
from leadflow.models import Lead, LostLead, ScoreCategory, WinLead
from leadflow.models.base import as_naive_utc, utcnow
from leadflow.services.base_service import BaseService
from leadflow.services.lead_scoring import LeadScore, score_breakdown
from leadflow.utils.validators import is_valid_phone

logger = logging.getLogger(__name__)


@dataclass
class CustomerHistory:
    phone: str
    name: str
    lead_count: int
    win_count: int
    lost_count: int
    total_value: Decimal
    first_visit: datetime
    last_visit: datetime
    leads: list[Lead] = field(default_factory=list)


@dataclass(frozen=True)
class ScoredLead:
    lead: LostLead
    result: LeadScore


class LeadQueryService(BaseService):

    def my_incentives(self, context: CallerContext) -> list[WinLead]:
        """Win leads of the calling rep that carry an approved incentive."""
        return (
            self.db.query(WinLead)
            .filter(WinLead.organization_id == context.organization_id)
            .filter(WinLead.sales_rep_id == context.user_id)
            .filter(WinLead.has_incentive.is_(True))
            .filter(WinLead.incentive_amount.is_not(None))
            .order_by(WinLead.created_at.desc(), WinLead.id.desc())
            .all()
        )

    def customer_history(self, context: CallerContext, phone: str) -> CustomerHistory:
        if not is_valid_phone(phone):
            raise ValidationError("Invalid phone number", code="InvalidPhone")

        leads = (
            self.db.query(Lead)
            .filter(Lead.organization_id == context.organization_id)
            .filter(Lead.customer_phone == phone)
            .order_by(Lead.created_at.desc(), Lead.id.desc())
            .all()
        )
        if not leads:
            raise NotFoundError("Customer not found", code="CustomerNotFound")

        total_value = Decimal("0")
        win_count = 0
        for lead in leads:
            if isinstance(lead, WinLead):
                win_count += 1
                total_value += lead.sale_price or 0
            elif isinstance(lead, LostLead):
                total_value += lead.deal_size or 0

        return CustomerHistory(
            phone=phone,
            name=leads[0].customer_name,
            lead_count=len(leads),
            win_count=win_count,
            lost_count=len(leads) - win_count,
            total_value=total_value,
            first_visit=leads[-1].created_at,
            last_visit=leads[0].created_at,
            leads=leads,
        )

    def scored_lost_leads(
        self,
        context: CallerContext,
        category: ScoreCategory | str | None = None,
    ) -> list[ScoredLead]:
        """Lost leads with their live score, best first; optionally one HOT/WARM/COLD band."""
        wanted: ScoreCategory | None = None
        if category is not None:
            try:
                wanted = ScoreCategory(str(category).upper())
            except ValueError as exc:
                raise ValidationError("Invalid score category", code="InvalidScoreCategory") from exc

        leads = (
            self.db.query(LostLead)
            .filter(LostLead.organization_id == context.organization_id)
            .order_by(LostLead.created_at.desc())
            .all()
        )
        scored = [ScoredLead(lead=lead, result=score_breakdown(lead)) for lead in leads]
        if wanted is not None:
            scored = [item for item in scored if item.result.category == wanted]
        return sorted(scored, key=lambda item: item.result.score, reverse=True)

    def mark_whatsapp_sent(self, context: CallerContext, lead_id: int, sent_at: datetime | None = None) -> Lead:
        lead = (
            self.db.query(Lead)
            .filter(Lead.id == lead_id)
            .filter(Lead.organization_id == context.organization_id)
            .first()
        )
        if lead is None:
            raise NotFoundError("Lead not found", code="LeadNotFound")

        lead.whatsapp_sent = True
        lead.whatsapp_sent_at = as_naive_utc(sent_at) if sent_at else utcnow()
        self.commit()
        self.db.refresh(lead)
        logger.info(
            "lead.whatsapp_marked_sent",
            extra=build_log_event(
                "lead.whatsapp_marked_sent",
                LogContext(
                    organization_id=str(context.organization_id),
                    user_id=str(context.user_id),
                    lead_id=str(lead.id),
                ),
            ),
        )
        return lead
