"""Lead intake: validates a rep's submission and persists a Win or Lost lead."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError

from leadflow.auth.caller_context import CallerContext
from leadflow.core.exceptions import ConflictError, InternalError, NotFoundError, ValidationError
from leadflow.core.logging import LogContext, build_log_event
from leadflow.models import (
    Category,
    Lead,
    LeadStatus,
    LostLead,
    NotTodayReason,
    ProductModel,
    PurchaseTimeline,
    ReviewStatus,
    WinLead,
)
from leadflow.services.base_service import BaseService
from leadflow.utils.validators import (
    is_valid_invoice_no,
    is_valid_phone,
    parse_money,
    parse_rating,
    sanitize_text,
)

logger = logging.getLogger(__name__)

MIN_SALE_PRICE = 500
MAX_SALE_PRICE = 500000
MAX_OTHER_REASON_LENGTH = 200


class LeadIntakeService(BaseService):
    """Creates leads. All validation runs before the first write."""

    def create_lead(self, context: CallerContext, payload: Mapping[str, Any]) -> Lead:
        customer_name = sanitize_text(payload.get("customer_name"))
        if len(customer_name) < 2:
            raise ValidationError("Customer name must be at least 2 characters", code="InvalidName")

        customer_phone = payload.get("customer_phone")
        if not is_valid_phone(customer_phone):
            raise ValidationError("Invalid phone number", code="InvalidPhone")

        category_id = payload.get("category_id")
        if category_id is None or category_id == "":
            raise ValidationError("Category is required", code="MissingCategory")

        status = payload.get("status")
        if status not in {LeadStatus.WIN.value, LeadStatus.LOST.value}:
            raise ValidationError("Invalid status", code="InvalidStatus")

        category = self._get_category(context, category_id)

        if status == LeadStatus.WIN.value:
            lead = self._build_win_lead(context, payload)
        else:
            lead = self._build_lost_lead(context, payload, category)

        lead.organization_id = context.organization_id
        lead.sales_rep_id = context.user_id
        lead.customer_name = customer_name
        lead.customer_phone = customer_phone
        lead.category_id = category.id
        return self._persist(context, lead)

    def _get_category(self, context: CallerContext, category_id: Any) -> Category:
        try:
            resolved_id = int(category_id)
        except (TypeError, ValueError) as exc:
            raise NotFoundError("Category not found", code="CategoryNotFound") from exc

        category = (
            self.db.query(Category)
            .filter(Category.id == resolved_id)
            .filter(Category.organization_id == context.organization_id)
            .first()
        )
        if category is None:
            raise NotFoundError("Category not found", code="CategoryNotFound")
        return category

    def _build_win_lead(self, context: CallerContext, payload: Mapping[str, Any]) -> WinLead:
        invoice_no = sanitize_text(payload.get("invoice_no"))
        if len(invoice_no) < 3:
            raise ValidationError("Invoice number must be at least 3 characters", code="InvalidInvoice")
        if not is_valid_invoice_no(invoice_no):
            raise ValidationError("Invoice number must be alphanumeric", code="InvalidInvoice")

        sale_price = parse_money(payload.get("sale_price"))
        if sale_price is None:
            raise ValidationError("Invalid sale price", code="InvalidPrice")
        if sale_price < MIN_SALE_PRICE or sale_price > MAX_SALE_PRICE:
            raise ValidationError(
                f"Sale price must be between {MIN_SALE_PRICE} and {MAX_SALE_PRICE}", code="InvalidPrice"
            )

        if self._invoice_exists(context.organization_id, invoice_no):
            raise ConflictError("Invoice number already exists", code="DuplicateInvoice")

        return WinLead(
            invoice_no=invoice_no,
            sale_price=sale_price,
            review_status=ReviewStatus.PENDING,
            reviewed_by=None,
            has_incentive=None,
            incentive_amount=None,
        )

    def _invoice_exists(self, organization_id: int, invoice_no: str) -> bool:
        existing = (
            self.db.query(WinLead.id)
            .filter(WinLead.organization_id == organization_id)
            .filter(WinLead.invoice_no == invoice_no)
            .first()
        )
        return existing is not None

    def _build_lost_lead(self, context: CallerContext, payload: Mapping[str, Any], category: Category) -> LostLead:
        deal_size = parse_money(payload.get("deal_size"))
        if deal_size is None or deal_size <= 0:
            raise ValidationError("Invalid deal size", code="InvalidDealSize")

        model_name = sanitize_text(payload.get("model_name"))
        if len(model_name) < 2:
            raise ValidationError("Model name must be at least 2 characters", code="InvalidModel")

        try:
            timeline = PurchaseTimeline(payload.get("purchase_timeline"))
        except ValueError as exc:
            raise ValidationError("Invalid purchase timeline", code="InvalidTimeline") from exc

        reason: NotTodayReason | None = None
        other_reason: str | None = None
        if timeline != PurchaseTimeline.TODAY:
            raw_reason = payload.get("not_today_reason")
            if not raw_reason:
                raise ValidationError("A reason is required when the customer is not buying today", code="InvalidReason")
            try:
                reason = NotTodayReason(raw_reason)
            except ValueError as exc:
                raise ValidationError("Invalid not-today reason", code="InvalidReason") from exc

            if reason == NotTodayReason.OTHER:
                other_reason = sanitize_text(payload.get("other_reason"))
                if not other_reason:
                    raise ValidationError("Please describe the other reason", code="InvalidOtherReason")
                if len(other_reason) > MAX_OTHER_REASON_LENGTH:
                    raise ValidationError(
                        f"Other reason must be at most {MAX_OTHER_REASON_LENGTH} characters",
                        code="InvalidOtherReason",
                    )

        lead_rating = parse_rating(payload.get("lead_rating"))
        if lead_rating is None:
            raise ValidationError("Lead rating must be between 1 and 5", code="InvalidRating")

        product_model = self._resolve_model(context, category, model_name)
        return LostLead(
            deal_size=deal_size,
            model_id=product_model.id,
            purchase_timeline=timeline,
            not_today_reason=reason,
            other_reason=other_reason,
            lead_rating=lead_rating,
        )

    def _find_model(self, context: CallerContext, category: Category, name: str) -> ProductModel | None:
        return (
            self.db.query(ProductModel)
            .filter(ProductModel.organization_id == context.organization_id)
            .filter(ProductModel.category_id == category.id)
            .filter(ProductModel.name == name)
            .first()
        )

    def _resolve_model(self, context: CallerContext, category: Category, name: str) -> ProductModel:
        """Find the model by exact trimmed name or create it inside a savepoint.

        A concurrent creator that wins the unique constraint is resolved by
        reading its row back instead of failing the lead.
        """
        existing = self._find_model(context, category, name)
        if existing is not None:
            return existing

        product_model = ProductModel(
            organization_id=context.organization_id,
            category_id=category.id,
            name=name,
        )
        try:
            with self.db.begin_nested():
                self.db.add(product_model)
        except IntegrityError:
            existing = self._find_model(context, category, name)
            if existing is None:
                raise InternalError("Failed to create model")
            logger.info(
                "model.create_race_resolved",
                extra=build_log_event(
                    "model.create_race_resolved",
                    LogContext(organization_id=str(context.organization_id), user_id=str(context.user_id)),
                    model_id=existing.id,
                ),
            )
            return existing

        logger.info(
            "model.created",
            extra=build_log_event(
                "model.created",
                LogContext(organization_id=str(context.organization_id), user_id=str(context.user_id)),
                model_id=product_model.id,
                category_id=category.id,
            ),
        )
        return product_model

    def _persist(self, context: CallerContext, lead: Lead) -> Lead:
        self.db.add(lead)
        try:
            self.commit()
        except IntegrityError as exc:
            if isinstance(lead, WinLead):
                raise ConflictError("Invoice number already exists", code="DuplicateInvoice") from exc
            raise InternalError("Failed to create lead") from exc
        self.db.refresh(lead)

        logger.info(
            "lead.created",
            extra=build_log_event(
                "lead.created",
                LogContext(
                    organization_id=str(context.organization_id),
                    user_id=str(context.user_id),
                    lead_id=str(lead.id),
                ),
                status=lead.status,
            ),
        )
        return lead
