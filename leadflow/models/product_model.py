"""Product model module (the "Model" a rep names on a Lost lead)."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leadflow.models.base import AuditMixin, Base, OrganizationScopedMixin


class ProductModel(Base, AuditMixin, OrganizationScopedMixin):
    __tablename__ = "models"
    __table_args__ = (
        UniqueConstraint("organization_id", "category_id", "name", name="uq_models_org_category_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    category = relationship("Category")
