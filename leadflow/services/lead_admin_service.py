"""Administrative lead deletion, always scoped to the caller's organization."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from leadflow.auth.caller_context import CallerContext, require_admin
from leadflow.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from leadflow.core.logging import LogContext, build_log_event
from leadflow.models import Lead
from leadflow.services.base_service import BaseService

logger = logging.getLogger(__name__)


class LeadAdminService(BaseService):

    def delete_lead(self, context: CallerContext, lead_id: int) -> None:
        require_admin(context, "delete leads")
        lead = (
            self.db.query(Lead)
            .filter(Lead.id == lead_id)
            .filter(Lead.organization_id == context.organization_id)
            .first()
        )
        if lead is None:
            raise NotFoundError("Lead not found or access denied", code="LeadNotFound")

        self.db.delete(lead)
        self.commit()
        logger.info(
            "lead.deleted",
            extra=build_log_event(
                "lead.deleted",
                LogContext(
                    organization_id=str(context.organization_id),
                    user_id=str(context.user_id),
                    lead_id=str(lead_id),
                ),
            ),
        )

    def bulk_delete(self, context: CallerContext, lead_ids: Iterable[int]) -> int:
        require_admin(context, "bulk delete leads")
        requested = {int(lead_id) for lead_id in lead_ids}
        if not requested:
            raise ValidationError("No lead IDs provided", code="MissingLeadIds")

        leads = (
            self.db.query(Lead)
            .filter(Lead.id.in_(list(requested)))
            .filter(Lead.organization_id == context.organization_id)
            .all()
        )
        if not leads:
            raise NotFoundError("No valid leads found for deletion", code="LeadNotFound")
        if len(leads) != len(requested):
            raise AuthorizationError("Some leads do not belong to your organization", code="ForeignLeads")

        for lead in leads:
            self.db.delete(lead)
        self.commit()
        logger.info(
            "lead.bulk_deleted",
            extra=build_log_event(
                "lead.bulk_deleted",
                LogContext(organization_id=str(context.organization_id), user_id=str(context.user_id)),
                deleted_count=len(leads),
            ),
        )
        return len(leads)
