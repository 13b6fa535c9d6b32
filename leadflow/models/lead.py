"""Lead model module.

A lead is stored in one ``leads`` table but mapped as a tagged variant:
``WinLead`` and ``LostLead`` are single-table-inheritance subclasses of
``Lead`` discriminated by ``status``. Each variant only declares the columns
of its own field group, and the CHECK constraints below pin the other group
to NULL at the storage layer as well.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leadflow.models.base import AuditMixin, Base, OrganizationScopedMixin
from leadflow.models.enums import (
    LeadStatus,
    NotTodayReason,
    PurchaseTimeline,
    ReviewStatus,
    enum_values,
)

_WIN_GROUP = (
    "status = 'win'"
    " AND invoice_no IS NOT NULL AND sale_price IS NOT NULL AND review_status IS NOT NULL"
    " AND deal_size IS NULL AND model_id IS NULL AND purchase_timeline IS NULL"
    " AND not_today_reason IS NULL AND other_reason IS NULL AND lead_rating IS NULL"
    " AND auto_expired_at IS NULL"
)
_LOST_GROUP = (
    "status = 'lost'"
    " AND deal_size IS NOT NULL AND model_id IS NOT NULL AND purchase_timeline IS NOT NULL"
    " AND lead_rating IS NOT NULL"
    " AND invoice_no IS NULL AND sale_price IS NULL AND review_status IS NULL"
    " AND reviewed_by IS NULL AND has_incentive IS NULL AND incentive_amount IS NULL"
)


class Lead(Base, AuditMixin, OrganizationScopedMixin):
    __tablename__ = "leads"
    __table_args__ = (
        CheckConstraint(f"({_WIN_GROUP}) OR ({_LOST_GROUP})", name="ck_leads_status_field_group"),
        CheckConstraint(
            "purchase_timeline IS NULL OR purchase_timeline <> 'today'"
            " OR (not_today_reason IS NULL AND other_reason IS NULL)",
            name="ck_leads_today_has_no_reason",
        ),
        CheckConstraint(
            "(has_incentive IS NULL AND incentive_amount IS NULL) OR review_status = 'reviewed'",
            name="ck_leads_incentive_requires_review",
        ),
        CheckConstraint("incentive_amount IS NULL OR has_incentive", name="ck_leads_amount_requires_incentive"),
        CheckConstraint("lead_rating IS NULL OR lead_rating BETWEEN 1 AND 5", name="ck_leads_rating_range"),
        Index("idx_leads_org_status", "organization_id", "status"),
        Index("idx_leads_org_phone", "organization_id", "customer_phone"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sales_rep_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(10), nullable=False)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False)
    status: Mapped[str] = mapped_column(String(8), nullable=False)
    whatsapp_sent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    whatsapp_sent_at: Mapped[datetime | None] = mapped_column(DateTime)

    category = relationship("Category")
    sales_rep = relationship("User", foreign_keys=[sales_rep_id])

    __mapper_args__ = {
        "polymorphic_on": "status",
        "polymorphic_abstract": True,
    }

    @property
    def is_win(self) -> bool:
        return self.status == LeadStatus.WIN.value

    @property
    def is_lost(self) -> bool:
        return self.status == LeadStatus.LOST.value


class WinLead(Lead):
    """A completed sale; carries the review/incentive sub-state."""

    __mapper_args__ = {"polymorphic_identity": LeadStatus.WIN.value}

    invoice_no: Mapped[str | None] = mapped_column(String(64))
    sale_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    review_status: Mapped[ReviewStatus | None] = mapped_column(
        Enum(ReviewStatus, native_enum=False, values_callable=enum_values, length=20)
    )
    reviewed_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    has_incentive: Mapped[bool | None] = mapped_column(Boolean)
    incentive_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))

    reviewer = relationship("User", foreign_keys=[reviewed_by])

    @property
    def is_reviewed(self) -> bool:
        return self.review_status == ReviewStatus.REVIEWED

    @property
    def incentive_is_set(self) -> bool:
        return self.has_incentive is not None


class LostLead(Lead):
    """A missed sale kept for follow-up; scored at read time."""

    __mapper_args__ = {"polymorphic_identity": LeadStatus.LOST.value}

    deal_size: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    model_id: Mapped[int | None] = mapped_column(ForeignKey("models.id", ondelete="RESTRICT"))
    purchase_timeline: Mapped[PurchaseTimeline | None] = mapped_column(
        Enum(PurchaseTimeline, native_enum=False, values_callable=enum_values, length=20)
    )
    not_today_reason: Mapped[NotTodayReason | None] = mapped_column(
        Enum(NotTodayReason, native_enum=False, values_callable=enum_values, length=30)
    )
    other_reason: Mapped[str | None] = mapped_column(String(200))
    lead_rating: Mapped[int | None] = mapped_column(Integer)
    auto_expired_at: Mapped[datetime | None] = mapped_column(DateTime)

    product_model = relationship("ProductModel")


# Invoice uniqueness spans the Win variant's column, which only exists on the
# table once WinLead has been mapped.
Lead.__table__.append_constraint(
    UniqueConstraint(
        Lead.__table__.c.organization_id,
        Lead.__table__.c.invoice_no,
        name="uq_leads_org_invoice",
    )
)
