from __future__ import annotations

import pytest

from leadflow.auth.caller_context import CallerContext
from leadflow.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from leadflow.services.organization_service import OrganizationService


def test_any_member_reads_own_organization(session, rep_ctx, organization, other_organization):
    org = OrganizationService(db=session).get_organization(rep_ctx)
    assert org.id == organization.id
    assert org.name == "Sharma Electronics"


def test_unknown_organization_not_found(session):
    ghost = CallerContext(organization_id=9999, user_id=1, role="admin")
    with pytest.raises(NotFoundError):
        OrganizationService(db=session).get_organization(ghost)


def test_update_applies_only_supplied_fields(session, admin_ctx, organization):
    service = OrganizationService(db=session)
    service.update_organization(admin_ctx, {"logo_url": "https://cdn.example.com/logo.png"})

    updated = service.update_organization(
        admin_ctx,
        {"name": " Sharma Digital ", "contact_number": "9876500000"},
    )

    assert updated.name == "Sharma Digital"
    assert updated.contact_number == "9876500000"
    assert updated.logo_url == "https://cdn.example.com/logo.png"
    assert updated.google_review_qr_url is None


def test_blank_values_clear_optional_fields(session, admin_ctx, organization):
    service = OrganizationService(db=session)
    service.update_organization(
        admin_ctx,
        {"contact_number": "9876500000", "google_review_qr_url": "https://g.page/r/sharma"},
    )

    updated = service.update_organization(
        admin_ctx,
        {"name": "", "contact_number": "", "google_review_qr_url": None},
    )

    assert updated.name == "Sharma Electronics"
    assert updated.contact_number is None
    assert updated.google_review_qr_url is None


def test_reps_cannot_update_organization(session, rep_ctx, organization):
    with pytest.raises(AuthorizationError):
        OrganizationService(db=session).update_organization(rep_ctx, {"name": "Taken Over"})


@pytest.mark.parametrize(
    ("changes", "code"),
    [
        ({"name": "S"}, "InvalidOrganizationName"),
        ({"contact_number": "12345"}, "InvalidPhone"),
        ({"logo_url": "ftp://files.example.com/logo.png"}, "InvalidUrl"),
        ({"google_review_qr_url": "not a url"}, "InvalidUrl"),
    ],
)
def test_update_validation(session, admin_ctx, organization, changes, code):
    with pytest.raises(ValidationError) as exc:
        OrganizationService(db=session).update_organization(admin_ctx, changes)
    assert exc.value.code == code
