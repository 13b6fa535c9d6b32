"""Organization category configuration."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from leadflow.auth.caller_context import CallerContext, require_admin
from leadflow.core.exceptions import ConflictError, NotFoundError, ValidationError
from leadflow.core.logging import LogContext, build_log_event
from leadflow.models import Category
from leadflow.services.base_service import BaseService
from leadflow.utils.validators import sanitize_text

logger = logging.getLogger(__name__)


class CategoryService(BaseService):
    """Service for listing, creating and reordering an organization's categories."""

    def list_categories(self, context: CallerContext) -> list[Category]:
        return (
            self.db.query(Category)
            .filter(Category.organization_id == context.organization_id)
            .order_by(Category.display_order.asc(), Category.name.asc())
            .all()
        )

    def create_category(self, context: CallerContext, name: Any) -> Category:
        require_admin(context, "manage categories")
        cleaned = sanitize_text(name, max_len=120)
        if len(cleaned) < 2:
            raise ValidationError("Category name must be at least 2 characters", code="InvalidCategoryName")

        max_order = (
            self.db.query(func.max(Category.display_order))
            .filter(Category.organization_id == context.organization_id)
            .scalar()
        )
        category = Category(
            organization_id=context.organization_id,
            name=cleaned,
            display_order=(max_order or 0) + 1,
        )
        self.db.add(category)
        try:
            self.commit()
        except IntegrityError as exc:
            raise ConflictError("Category already exists", code="DuplicateCategory") from exc
        self.db.refresh(category)
        logger.info(
            "category.created",
            extra=build_log_event(
                "category.created",
                LogContext(organization_id=str(context.organization_id), user_id=str(context.user_id)),
                category_id=category.id,
            ),
        )
        return category

    def reorder(self, context: CallerContext, orders: Iterable[Mapping[str, Any]]) -> list[Category]:
        """Apply ``[{"id": ..., "display_order": ...}]``; every id must be owned by the caller."""
        require_admin(context, "manage categories")
        try:
            wanted = {int(item["id"]): int(item["display_order"]) for item in orders}
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError("Each entry needs an id and a display_order", code="InvalidCategoryOrder") from exc

        categories = (
            self.db.query(Category)
            .filter(Category.organization_id == context.organization_id)
            .filter(Category.id.in_(list(wanted)))
            .all()
        )
        if len(categories) != len(wanted):
            raise NotFoundError("Category not found", code="CategoryNotFound")

        for category in categories:
            category.display_order = wanted[category.id]
        self.commit()
        return self.list_categories(context)
