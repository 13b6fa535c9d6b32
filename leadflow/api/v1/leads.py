"""Lead intake, review and rep-facing read endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from leadflow.api.v1._authz import authorize, to_http_exception
from leadflow.core.dependencies import get_db_session
from leadflow.core.exceptions import LeadFlowException
from leadflow.schemas.leads import (
    CustomerHistoryResponse,
    LeadCreateRequest,
    LeadResponse,
    ReviewStatusUpdateRequest,
    ScoredLeadResponse,
)
from leadflow.services.lead_intake_service import LeadIntakeService
from leadflow.services.lead_query_service import LeadQueryService
from leadflow.services.review_service import ReviewService

router = APIRouter(tags=["leads"])


@router.post("/leads", status_code=status.HTTP_201_CREATED)
def create_lead(
    payload: LeadCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["leads.create"])
        lead = LeadIntakeService(db=db).create_lead(caller, payload.model_dump())
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc

    message = "Sale completed successfully!" if lead.is_win else "Lead created successfully!"
    return {
        "success": True,
        "message": message,
        "data": LeadResponse.model_validate(lead).model_dump(mode="json"),
    }


@router.put("/leads/review-status")
def update_review_status(
    payload: ReviewStatusUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["leads.review"])
        lead = ReviewService(db=db).set_review_status(caller, payload.invoice_no, payload.review_status)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc

    return {
        "success": True,
        "message": "Review status updated successfully",
        "data": LeadResponse.model_validate(lead).model_dump(mode="json"),
    }


@router.get("/leads/my-incentives")
def my_incentives(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["incentives.read"])
        leads = LeadQueryService(db=db).my_incentives(caller)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc

    return {
        "success": True,
        "data": [LeadResponse.model_validate(lead).model_dump(mode="json") for lead in leads],
    }


@router.get("/leads/scored")
def scored_leads(
    category: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["leads.read"])
        scored = LeadQueryService(db=db).scored_lost_leads(caller, category=category)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc

    items = [
        ScoredLeadResponse(
            lead=LeadResponse.model_validate(item.lead),
            score=item.result.score,
            category=item.result.category.value,
            breakdown=item.result.breakdown,
        ).model_dump(mode="json")
        for item in scored
    ]
    return {"success": True, "data": items, "total": len(items)}


@router.post("/leads/{lead_id}/whatsapp-sent")
def mark_whatsapp_sent(
    lead_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["leads.notify"])
        lead = LeadQueryService(db=db).mark_whatsapp_sent(caller, lead_id)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc

    return {"success": True, "data": LeadResponse.model_validate(lead).model_dump(mode="json")}


@router.get("/customers/{phone}")
def customer_history(
    phone: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["customers.read"])
        history = LeadQueryService(db=db).customer_history(caller, phone)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc

    body = CustomerHistoryResponse(
        phone=history.phone,
        name=history.name,
        lead_count=history.lead_count,
        win_count=history.win_count,
        lost_count=history.lost_count,
        total_value=history.total_value,
        first_visit=history.first_visit,
        last_visit=history.last_visit,
        leads=[LeadResponse.model_validate(lead) for lead in history.leads],
    )
    return {"success": True, "data": body.model_dump(mode="json")}
