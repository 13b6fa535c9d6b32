"""Admin-only lead maintenance endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from leadflow.api.v1._authz import authorize, to_http_exception
from leadflow.core.dependencies import get_db_session
from leadflow.core.exceptions import LeadFlowException
from leadflow.schemas.leads import BulkDeleteRequest, IncentiveUpdateRequest, LeadResponse
from leadflow.services.lead_admin_service import LeadAdminService
from leadflow.services.review_service import ReviewService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.patch("/leads/{lead_id}")
def update_incentive(
    lead_id: int,
    payload: IncentiveUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["incentives.write"])
        lead = ReviewService(db=db).set_incentive(
            caller,
            lead_id,
            has_incentive=payload.has_incentive,
            amount=payload.incentive_amount,
        )
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc

    return {
        "success": True,
        "message": "Lead updated successfully",
        "data": LeadResponse.model_validate(lead).model_dump(mode="json"),
    }


@router.delete("/leads/{lead_id}")
def delete_lead(
    lead_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["leads.delete"])
        LeadAdminService(db=db).delete_lead(caller, lead_id)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc
    return {"success": True, "message": "Lead deleted successfully"}


@router.post("/leads/bulk-delete")
def bulk_delete(
    payload: BulkDeleteRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["leads.delete"])
        deleted = LeadAdminService(db=db).bulk_delete(caller, payload.lead_ids)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc
    return {"success": True, "message": f"{deleted} lead(s) deleted successfully", "deleted": deleted}
