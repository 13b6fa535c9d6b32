"""Caller context extraction and enforcement utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from leadflow.core.exceptions import AuthenticationError, AuthorizationError
from leadflow.models.enums import UserRole


@dataclass(frozen=True)
class CallerContext:
    """Who is calling: passed explicitly into every core operation."""

    organization_id: int
    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def from_claims(claims: dict[str, Any]) -> CallerContext:
    """Build caller context from verified token claims."""
    try:
        organization_id = int(claims["organization_id"])
        user_id = int(claims["sub"])
        role = str(claims["role"]).lower()
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Token claims are missing organization/user context.") from exc

    if role not in {member.value for member in UserRole}:
        raise AuthenticationError(f"Unknown role in token: {role}")

    return CallerContext(organization_id=organization_id, user_id=user_id, role=role)


def require_admin(context: CallerContext, action: str = "perform this action") -> None:
    if not context.is_admin:
        raise AuthorizationError(f"Only admins can {action}.")
