"""Team membership for an organization: listing and adding users."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from leadflow.auth.caller_context import CallerContext, require_admin
from leadflow.core.exceptions import ConflictError, ValidationError
from leadflow.core.logging import LogContext, build_log_event
from leadflow.models import User, UserRole
from leadflow.services.base_service import BaseService
from leadflow.utils.validators import is_valid_phone, sanitize_text

logger = logging.getLogger(__name__)


class TeamService(BaseService):
    """Admin-only team management. Credentials are provisioned elsewhere."""

    def list_members(self, context: CallerContext) -> list[User]:
        require_admin(context, "view the team")
        return (
            self.db.query(User)
            .filter(User.organization_id == context.organization_id)
            .order_by(User.created_at.desc(), User.id.desc())
            .all()
        )

    def add_member(self, context: CallerContext, name: Any, phone: Any, role: Any = UserRole.SALES_REP.value) -> User:
        require_admin(context, "add team members")

        cleaned_name = sanitize_text(name, max_len=255)
        if len(cleaned_name) < 2:
            raise ValidationError("Name must be at least 2 characters", code="InvalidName")
        if not is_valid_phone(phone):
            raise ValidationError("Invalid phone number", code="InvalidPhone")
        try:
            member_role = UserRole(role)
        except ValueError as exc:
            raise ValidationError("Invalid role. Must be admin or sales_rep", code="InvalidRole") from exc

        if self._phone_taken(context.organization_id, phone):
            raise ConflictError("User with this phone number already exists", code="DuplicatePhone")

        user = User(
            organization_id=context.organization_id,
            name=cleaned_name,
            phone=phone,
            role=member_role,
        )
        self.db.add(user)
        try:
            self.commit()
        except IntegrityError as exc:
            raise ConflictError("User with this phone number already exists", code="DuplicatePhone") from exc
        self.db.refresh(user)

        logger.info(
            "team.member_added",
            extra=build_log_event(
                "team.member_added",
                LogContext(organization_id=str(context.organization_id), user_id=str(context.user_id)),
                member_id=user.id,
                role=member_role.value,
            ),
        )
        return user

    def _phone_taken(self, organization_id: int, phone: str) -> bool:
        existing = (
            self.db.query(User.id)
            .filter(User.organization_id == organization_id)
            .filter(User.phone == phone)
            .first()
        )
        return existing is not None
