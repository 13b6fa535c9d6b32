"""Category endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from leadflow.api.v1._authz import authorize, to_http_exception
from leadflow.core.dependencies import get_db_session
from leadflow.core.exceptions import LeadFlowException
from leadflow.schemas.categories import CategoryCreateRequest, CategoryReorderRequest, CategoryResponse
from leadflow.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
def list_categories(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["categories.read"])
        categories = CategoryService(db=db).list_categories(caller)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc
    return {
        "success": True,
        "data": [CategoryResponse.model_validate(item).model_dump() for item in categories],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["categories.write"])
        category = CategoryService(db=db).create_category(caller, payload.name)
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc
    return {"success": True, "data": CategoryResponse.model_validate(category).model_dump()}


@router.put("/reorder")
def reorder_categories(
    payload: CategoryReorderRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        caller = authorize(authorization=authorization, scopes=["categories.write"])
        categories = CategoryService(db=db).reorder(
            caller,
            [item.model_dump() for item in payload.category_orders],
        )
    except LeadFlowException as exc:
        raise to_http_exception(exc) from exc
    return {
        "success": True,
        "message": "Categories reordered successfully",
        "data": [CategoryResponse.model_validate(item).model_dump() for item in categories],
    }
