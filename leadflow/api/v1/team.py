"""Team and organization settings endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from leadflow.api.v1._authz import authorize, to_http_exception
from leadflow.core.dependencies import get_db_session
from leadflow.core.exceptions import LeadFlowException
from leadflow.schemas.team import (
    OrganizationResponse,
    OrganizationUpdateRequest,
    TeamMemberCreateRequest,
    TeamMemberResponse,
)
from leadflow.services.organization_service import OrganizationService
from leadflow.services.team_service import TeamService

router = APIRouter(prefix="/admin", tags=["team"])


@router.get("/team")
def list_team(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["team.read"])
        members = TeamService(db=db).list_members(caller)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc
    return {
        "success": True,
        "data": [TeamMemberResponse.model_validate(member).model_dump(mode="json") for member in members],
    }


@router.post("/team", status_code=status.HTTP_201_CREATED)
def add_team_member(
    payload: TeamMemberCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["team.write"])
        member = TeamService(db=db).add_member(caller, payload.name, payload.phone, payload.role)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc
    return {
        "success": True,
        "message": "Team member added successfully",
        "data": TeamMemberResponse.model_validate(member).model_dump(mode="json"),
    }


@router.get("/organization")
def get_organization(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["organization.read"])
        organization = OrganizationService(db=db).get_organization(caller)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc
    return {"success": True, "data": OrganizationResponse.model_validate(organization).model_dump()}


@router.put("/organization")
def update_organization(
    payload: OrganizationUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["organization.write"])
        organization = OrganizationService(db=db).update_organization(
            caller, payload.model_dump(exclude_unset=True)
        )
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc
    return {
        "success": True,
        "message": "Organization updated successfully",
        "data": OrganizationResponse.model_validate(organization).model_dump(),
    }
