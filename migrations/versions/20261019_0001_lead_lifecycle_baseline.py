"""lead lifecycle baseline: organizations, users, categories, models, leads

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None

WIN_GROUP = (
    "status = 'win'"
    " AND invoice_no IS NOT NULL AND sale_price IS NOT NULL AND review_status IS NOT NULL"
    " AND deal_size IS NULL AND model_id IS NULL AND purchase_timeline IS NULL"
    " AND not_today_reason IS NULL AND other_reason IS NULL AND lead_rating IS NULL"
    " AND auto_expired_at IS NULL"
)
LOST_GROUP = (
    "status = 'lost'"
    " AND deal_size IS NOT NULL AND model_id IS NOT NULL AND purchase_timeline IS NOT NULL"
    " AND lead_rating IS NOT NULL"
    " AND invoice_no IS NULL AND sale_price IS NULL AND review_status IS NULL"
    " AND reviewed_by IS NULL AND has_incentive IS NULL AND incentive_amount IS NULL"
)


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("organization_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=10), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "phone", name="uq_users_org_phone"),
    )
    op.create_index("ix_users_organization_id", "users", ["organization_id"])
    op.create_index("idx_users_org_role", "users", ["organization_id", "role"])

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("organization_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "name", name="uq_categories_org_name"),
    )
    op.create_index("ix_categories_organization_id", "categories", ["organization_id"])
    op.create_index("idx_categories_org_order", "categories", ["organization_id", "display_order"])

    op.create_table(
        "models",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("organization_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "category_id", "name", name="uq_models_org_category_name"),
    )
    op.create_index("ix_models_organization_id", "models", ["organization_id"])

    op.create_table(
        "leads",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("organization_id", sa.Integer(), nullable=False),
        sa.Column("sales_rep_id", sa.Integer(), nullable=False),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_phone", sa.String(length=10), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=8), nullable=False),
        sa.Column("whatsapp_sent", sa.Boolean(), nullable=False),
        sa.Column("whatsapp_sent_at", sa.DateTime(), nullable=True),
        sa.Column("invoice_no", sa.String(length=64), nullable=True),
        sa.Column("sale_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("review_status", sa.String(length=20), nullable=True),
        sa.Column("reviewed_by", sa.Integer(), nullable=True),
        sa.Column("has_incentive", sa.Boolean(), nullable=True),
        sa.Column("incentive_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("deal_size", sa.Numeric(12, 2), nullable=True),
        sa.Column("model_id", sa.Integer(), nullable=True),
        sa.Column("purchase_timeline", sa.String(length=20), nullable=True),
        sa.Column("not_today_reason", sa.String(length=30), nullable=True),
        sa.Column("other_reason", sa.String(length=200), nullable=True),
        sa.Column("lead_rating", sa.Integer(), nullable=True),
        sa.Column("auto_expired_at", sa.DateTime(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["sales_rep_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["reviewed_by"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["model_id"], ["models.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "invoice_no", name="uq_leads_org_invoice"),
        sa.CheckConstraint(f"({WIN_GROUP}) OR ({LOST_GROUP})", name="ck_leads_status_field_group"),
        sa.CheckConstraint(
            "purchase_timeline IS NULL OR purchase_timeline <> 'today'"
            " OR (not_today_reason IS NULL AND other_reason IS NULL)",
            name="ck_leads_today_has_no_reason",
        ),
        sa.CheckConstraint(
            "(has_incentive IS NULL AND incentive_amount IS NULL) OR review_status = 'reviewed'",
            name="ck_leads_incentive_requires_review",
        ),
        sa.CheckConstraint("incentive_amount IS NULL OR has_incentive", name="ck_leads_amount_requires_incentive"),
        sa.CheckConstraint("lead_rating IS NULL OR lead_rating BETWEEN 1 AND 5", name="ck_leads_rating_range"),
    )
    op.create_index("ix_leads_organization_id", "leads", ["organization_id"])
    op.create_index("ix_leads_sales_rep_id", "leads", ["sales_rep_id"])
    op.create_index("idx_leads_org_status", "leads", ["organization_id", "status"])
    op.create_index("idx_leads_org_phone", "leads", ["organization_id", "customer_phone"])


def downgrade() -> None:
    op.drop_index("idx_leads_org_phone", table_name="leads")
    op.drop_index("idx_leads_org_status", table_name="leads")
    op.drop_index("ix_leads_sales_rep_id", table_name="leads")
    op.drop_index("ix_leads_organization_id", table_name="leads")
    op.drop_table("leads")

    op.drop_index("ix_models_organization_id", table_name="models")
    op.drop_table("models")

    op.drop_index("idx_categories_org_order", table_name="categories")
    op.drop_index("ix_categories_organization_id", table_name="categories")
    op.drop_table("categories")

    op.drop_index("idx_users_org_role", table_name="users")
    op.drop_index("ix_users_organization_id", table_name="users")
    op.drop_table("users")

    op.drop_table("organizations")
