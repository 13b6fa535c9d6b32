"""User model module."""

from __future__ import annotations

from sqlalchemy import Enum, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leadflow.models.base import AuditMixin, Base, OrganizationScopedMixin
from leadflow.models.enums import UserRole, enum_values


class User(Base, AuditMixin, OrganizationScopedMixin):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("organization_id", "phone", name="uq_users_org_phone"),
        Index("idx_users_org_role", "organization_id", "role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(10), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False, values_callable=enum_values, length=20), nullable=False
    )

    organization = relationship("Organization")
