"""Organization profile settings shown on the lead form and customer messages."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from leadflow.auth.caller_context import CallerContext, require_admin
from leadflow.core.exceptions import NotFoundError, ValidationError
from leadflow.core.logging import LogContext, build_log_event
from leadflow.models import Organization
from leadflow.services.base_service import BaseService
from leadflow.utils.validators import is_valid_phone, sanitize_text

logger = logging.getLogger(__name__)

MAX_URL_LENGTH = 500
URL_FIELDS = ("logo_url", "google_review_qr_url")


def _clean_url(field_name: str, value: Any) -> str | None:
    cleaned = sanitize_text(value)
    if not cleaned:
        return None
    if len(cleaned) > MAX_URL_LENGTH or not cleaned.startswith(("http://", "https://")):
        raise ValidationError(f"{field_name} must be an http(s) URL", code="InvalidUrl")
    return cleaned


class OrganizationService(BaseService):

    def get_organization(self, context: CallerContext) -> Organization:
        organization = self.db.get(Organization, context.organization_id)
        if organization is None:
            raise NotFoundError("Organization not found", code="OrganizationNotFound")
        return organization

    def update_organization(self, context: CallerContext, changes: Mapping[str, Any]) -> Organization:
        """Apply only the keys present in ``changes``; a blank name is ignored."""
        require_admin(context, "update organization settings")
        organization = self.get_organization(context)

        updates: dict[str, Any] = {}
        if "name" in changes:
            name = sanitize_text(changes["name"], max_len=255)
            if name and len(name) < 2:
                raise ValidationError("Organization name must be at least 2 characters", code="InvalidOrganizationName")
            if name:
                updates["name"] = name

        if "contact_number" in changes:
            contact_number = sanitize_text(changes["contact_number"]) or None
            if contact_number is not None and not is_valid_phone(contact_number):
                raise ValidationError("Invalid phone number", code="InvalidPhone")
            updates["contact_number"] = contact_number

        for field_name in URL_FIELDS:
            if field_name in changes:
                updates[field_name] = _clean_url(field_name, changes[field_name])

        for field_name, value in updates.items():
            setattr(organization, field_name, value)
        self.commit()
        self.db.refresh(organization)
        logger.info(
            "organization.updated",
            extra=build_log_event(
                "organization.updated",
                LogContext(organization_id=str(context.organization_id), user_id=str(context.user_id)),
                fields=sorted(updates),
            ),
        )
        return organization
