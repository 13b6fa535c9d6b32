"""Review and incentive workflow for Win leads."""

from __future__ import annotations

import logging
from typing import Any

from leadflow.auth.caller_context import CallerContext, require_admin
from leadflow.core.exceptions import NotFoundError, ValidationError
from leadflow.core.logging import LogContext, build_log_event
from leadflow.core.state_machine import StateMachine
from leadflow.models import ReviewStatus, WinLead
from leadflow.services.base_service import BaseService
from leadflow.utils.validators import parse_money, sanitize_text

logger = logging.getLogger(__name__)

# `pending` is only ever entered at creation. Re-applying the current state is
# accepted so a repeated toggle is harmless.
REVIEW_STATE_MACHINE = StateMachine(
    {
        ReviewStatus.PENDING.value: {ReviewStatus.REVIEWED.value, ReviewStatus.YET_TO_REVIEW.value},
        ReviewStatus.YET_TO_REVIEW.value: {ReviewStatus.REVIEWED.value, ReviewStatus.YET_TO_REVIEW.value},
        ReviewStatus.REVIEWED.value: {ReviewStatus.YET_TO_REVIEW.value, ReviewStatus.REVIEWED.value},
    }
)


def _log_context(context: CallerContext, lead: WinLead) -> LogContext:
    return LogContext(
        organization_id=str(context.organization_id),
        user_id=str(context.user_id),
        lead_id=str(lead.id),
    )


class ReviewService(BaseService):
    """Moves Win leads through review and records admin incentive decisions."""

    def get_win_lead_by_invoice(self, context: CallerContext, invoice_no: str) -> WinLead | None:
        return (
            self.db.query(WinLead)
            .filter(WinLead.organization_id == context.organization_id)
            .filter(WinLead.invoice_no == invoice_no)
            .first()
        )

    def get_win_lead(self, context: CallerContext, lead_id: int) -> WinLead | None:
        return (
            self.db.query(WinLead)
            .filter(WinLead.id == lead_id)
            .filter(WinLead.organization_id == context.organization_id)
            .first()
        )

    def set_review_status(self, context: CallerContext, invoice_no: str, new_status: Any) -> WinLead:
        invoice = sanitize_text(invoice_no)
        if not invoice:
            raise ValidationError("Invoice number is required", code="MissingInvoice")

        try:
            target = ReviewStatus(new_status)
        except ValueError as exc:
            raise ValidationError("Invalid review status", code="InvalidReviewStatus") from exc
        if target == ReviewStatus.PENDING:
            raise ValidationError("Invalid review status", code="InvalidReviewStatus")

        lead = self.get_win_lead_by_invoice(context, invoice)
        if lead is None:
            raise NotFoundError("Lead not found", code="LeadNotFound")

        previous = ReviewStatus(lead.review_status)
        REVIEW_STATE_MACHINE.assert_transition(previous.value, target.value)

        lead.review_status = target
        if target == ReviewStatus.REVIEWED:
            lead.reviewed_by = context.user_id
        else:
            lead.reviewed_by = None
            if lead.incentive_is_set:
                # Incentive data only lives on reviewed leads.
                lead.has_incentive = None
                lead.incentive_amount = None
                logger.info(
                    "lead.incentive_reset",
                    extra=build_log_event("lead.incentive_reset", _log_context(context, lead)),
                )

        self.commit()
        self.db.refresh(lead)
        logger.info(
            "lead.review_status_changed",
            extra=build_log_event(
                "lead.review_status_changed",
                _log_context(context, lead),
                previous=previous.value,
                current=target.value,
            ),
        )
        return lead

    def set_incentive(
        self,
        context: CallerContext,
        lead_id: int,
        has_incentive: bool,
        amount: Any = None,
    ) -> WinLead:
        require_admin(context, "update incentives")

        lead = self.get_win_lead(context, lead_id)
        if lead is None:
            raise NotFoundError("Lead not found or access denied", code="LeadNotFound")

        if not lead.is_reviewed:
            raise ValidationError("Incentives can only be set on reviewed leads", code="ReviewRequired")

        if not isinstance(has_incentive, bool):
            raise ValidationError("has_incentive must be true or false", code="InvalidIncentive")

        if has_incentive:
            parsed_amount = parse_money(amount)
            if parsed_amount is None or parsed_amount <= 0:
                raise ValidationError("Incentive amount must be greater than 0", code="InvalidIncentiveAmount")
            lead.incentive_amount = parsed_amount
        else:
            lead.incentive_amount = None
        lead.has_incentive = has_incentive

        self.commit()
        self.db.refresh(lead)
        logger.info(
            "lead.incentive_updated",
            extra=build_log_event(
                "lead.incentive_updated",
                _log_context(context, lead),
                has_incentive=has_incentive,
                incentive_amount=str(lead.incentive_amount) if lead.incentive_amount is not None else None,
            ),
        )
        return lead
