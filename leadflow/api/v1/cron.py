"""Scheduler-triggered endpoints for API v1."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from leadflow.api.v1._authz import authorize_cron, to_http_exception
from leadflow.core.dependencies import get_db_session
from leadflow.core.exceptions import LeadFlowException
from leadflow.schemas.leads import LeadResponse
from leadflow.services.auto_expiry_service import run_auto_expiry_sweep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["cron"])


@router.get("/auto-expire-leads")
def auto_expire_leads(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize_cron(authorization)
    try:
        result = run_auto_expiry_sweep(db=db)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc

    if result.expired_count == 0:
        message = "No leads to auto-expire"
    else:
        message = f"Auto-expired {result.expired_count} lead(s)"
    return {
        "success": True,
        "message": message,
        "expiredCount": result.expired_count,
        "leads": [LeadResponse.model_validate(lead).model_dump(mode="json") for lead in result.leads],
    }
