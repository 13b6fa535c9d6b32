from __future__ import annotations

import pytest

from leadflow.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from leadflow.services.category_service import CategoryService


def test_create_appends_to_display_order(session, admin_ctx, category):
    service = CategoryService(db=session)
    created = service.create_category(admin_ctx, "  Refrigerators ")

    assert created.name == "Refrigerators"
    assert created.display_order == category.display_order + 1
    assert [item.name for item in service.list_categories(admin_ctx)] == ["Televisions", "Refrigerators"]


def test_only_admins_manage_categories(session, rep_ctx):
    with pytest.raises(AuthorizationError):
        CategoryService(db=session).create_category(rep_ctx, "Washing Machines")


def test_duplicate_category_name_is_conflict(session, admin_ctx, category):
    with pytest.raises(ConflictError) as exc:
        CategoryService(db=session).create_category(admin_ctx, "Televisions")
    assert exc.value.code == "DuplicateCategory"


def test_short_category_name_rejected(session, admin_ctx):
    with pytest.raises(ValidationError) as exc:
        CategoryService(db=session).create_category(admin_ctx, "A")
    assert exc.value.code == "InvalidCategoryName"


def test_list_is_organization_scoped(session, rep_ctx, other_rep_ctx, category, other_category):
    service = CategoryService(db=session)

    assert [item.id for item in service.list_categories(rep_ctx)] == [category.id]
    assert [item.id for item in service.list_categories(other_rep_ctx)] == [other_category.id]


def test_reorder_updates_display_order(session, admin_ctx, category):
    service = CategoryService(db=session)
    fridge = service.create_category(admin_ctx, "Refrigerators")

    ordered = service.reorder(
        admin_ctx,
        [{"id": category.id, "display_order": 2}, {"id": fridge.id, "display_order": 1}],
    )

    assert [item.id for item in ordered] == [fridge.id, category.id]


def test_reorder_rejects_foreign_categories(session, admin_ctx, category, other_category):
    with pytest.raises(NotFoundError):
        CategoryService(db=session).reorder(
            admin_ctx,
            [{"id": category.id, "display_order": 1}, {"id": other_category.id, "display_order": 2}],
        )


def test_reorder_rejects_malformed_entries(session, admin_ctx, category):
    with pytest.raises(ValidationError) as exc:
        CategoryService(db=session).reorder(admin_ctx, [{"id": category.id}])
    assert exc.value.code == "InvalidCategoryOrder"
