"""Shared authorization and error-mapping helpers for API v1 route modules."""

from __future__ import annotations

import hmac

from fastapi import HTTPException, status

from leadflow.auth.caller_context import CallerContext
from leadflow.auth.rbac import require_scopes
from leadflow.core.config import get_config
from leadflow.core.dependencies import get_current_caller
from leadflow.core.exceptions import AuthenticationError, LeadFlowException, map_domain_error


def _extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise AuthenticationError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Authorization header must use Bearer token.")
    return parts[1].strip()


def authorize(authorization: str | None, scopes: list[str]) -> CallerContext:
    token = _extract_bearer_token(authorization)
    caller = get_current_caller(token=token, settings=get_config())
    require_scopes(caller.role, scopes)
    return caller


def authorize_cron(authorization: str | None) -> None:
    """Scheduler calls carry ``Bearer <CRON_SECRET>`` instead of a user token."""
    expected = get_config().CRON_SECRET
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server misconfigured: CRON_SECRET not set",
        )
    try:
        token = _extract_bearer_token(authorization)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized") from exc
    if not hmac.compare_digest(token, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def to_http_exception(exc: LeadFlowException) -> HTTPException:
    status_code, body = map_domain_error(exc)
    return HTTPException(status_code=status_code, detail=body)
