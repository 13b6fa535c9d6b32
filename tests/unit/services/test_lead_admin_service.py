from __future__ import annotations

import pytest

from leadflow.auth.caller_context import CallerContext
from leadflow.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from leadflow.models import Lead
from leadflow.services.lead_admin_service import LeadAdminService
from leadflow.services.lead_intake_service import LeadIntakeService


@pytest.fixture
def leads(session, rep_ctx, category, win_payload, lost_payload):
    service = LeadIntakeService(db=session)
    return [
        service.create_lead(rep_ctx, win_payload(category)),
        service.create_lead(rep_ctx, lost_payload(category)),
    ]


def test_admin_deletes_lead(session, admin_ctx, leads):
    LeadAdminService(db=session).delete_lead(admin_ctx, leads[0].id)
    assert session.query(Lead).count() == 1


def test_rep_cannot_delete(session, rep_ctx, leads):
    with pytest.raises(AuthorizationError):
        LeadAdminService(db=session).delete_lead(rep_ctx, leads[0].id)


def test_delete_is_organization_scoped(session, other_organization, admin_ctx, leads):
    foreign_admin = CallerContext(organization_id=other_organization.id, user_id=admin_ctx.user_id, role="admin")
    with pytest.raises(NotFoundError):
        LeadAdminService(db=session).delete_lead(foreign_admin, leads[0].id)
    assert session.query(Lead).count() == 2


def test_bulk_delete_returns_count(session, admin_ctx, leads):
    deleted = LeadAdminService(db=session).bulk_delete(admin_ctx, [lead.id for lead in leads])

    assert deleted == 2
    assert session.query(Lead).count() == 0


def test_bulk_delete_requires_ids(session, admin_ctx):
    with pytest.raises(ValidationError) as exc:
        LeadAdminService(db=session).bulk_delete(admin_ctx, [])
    assert exc.value.code == "MissingLeadIds"


def test_bulk_delete_with_unknown_ids_deletes_nothing(session, admin_ctx, leads):
    service = LeadAdminService(db=session)

    with pytest.raises(NotFoundError):
        service.bulk_delete(admin_ctx, [9998, 9999])
    with pytest.raises(AuthorizationError) as exc:
        service.bulk_delete(admin_ctx, [leads[0].id, 9999])
    assert exc.value.code == "ForeignLeads"
    assert session.query(Lead).count() == 2
