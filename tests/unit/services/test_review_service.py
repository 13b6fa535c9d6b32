from __future__ import annotations

from decimal import Decimal

import pytest

from leadflow.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from leadflow.core.state_machine import InvalidTransitionError
from leadflow.models import ReviewStatus
from leadflow.services.lead_intake_service import LeadIntakeService
from leadflow.services.review_service import REVIEW_STATE_MACHINE, ReviewService


@pytest.fixture
def win_lead(session, rep_ctx, category, win_payload):
    return LeadIntakeService(db=session).create_lead(rep_ctx, win_payload(category))


def test_reviewing_stamps_reviewer(session, admin_ctx, win_lead):
    lead = ReviewService(db=session).set_review_status(admin_ctx, "INV001", "reviewed")

    assert lead.review_status == ReviewStatus.REVIEWED
    assert lead.reviewed_by == admin_ctx.user_id


def test_rep_can_toggle_review_status(session, rep_ctx, win_lead):
    lead = ReviewService(db=session).set_review_status(rep_ctx, "INV001", "yet_to_review")

    assert lead.review_status == ReviewStatus.YET_TO_REVIEW
    assert lead.reviewed_by is None


def test_review_status_can_be_reapplied(session, admin_ctx, win_lead):
    service = ReviewService(db=session)
    service.set_review_status(admin_ctx, "INV001", "reviewed")
    lead = service.set_review_status(admin_ctx, "INV001", "reviewed")

    assert lead.review_status == ReviewStatus.REVIEWED


def test_pending_is_not_a_target_state(session, admin_ctx, win_lead):
    with pytest.raises(ValidationError) as exc:
        ReviewService(db=session).set_review_status(admin_ctx, "INV001", "pending")
    assert exc.value.code == "InvalidReviewStatus"


@pytest.mark.parametrize(
    ("invoice_no", "status", "error", "code"),
    [
        ("", "reviewed", ValidationError, "MissingInvoice"),
        ("INV001", "approved", ValidationError, "InvalidReviewStatus"),
        ("INV999", "reviewed", NotFoundError, "LeadNotFound"),
    ],
)
def test_review_status_errors(session, admin_ctx, win_lead, invoice_no, status, error, code):
    with pytest.raises(error) as exc:
        ReviewService(db=session).set_review_status(admin_ctx, invoice_no, status)
    assert exc.value.code == code


def test_review_is_scoped_to_organization(session, other_rep_ctx, win_lead):
    with pytest.raises(NotFoundError):
        ReviewService(db=session).set_review_status(other_rep_ctx, "INV001", "reviewed")


def test_incentive_rejected_before_review(session, admin_ctx, rep_ctx, win_lead):
    service = ReviewService(db=session)

    with pytest.raises(ValidationError) as exc:
        service.set_incentive(admin_ctx, win_lead.id, True, 500)
    assert exc.value.code == "ReviewRequired"

    with pytest.raises(AuthorizationError):
        service.set_incentive(rep_ctx, win_lead.id, True, 500)

    session.refresh(win_lead)
    assert win_lead.has_incentive is None
    assert win_lead.incentive_amount is None


def test_incentive_true_then_false_clears_amount(session, admin_ctx, win_lead):
    service = ReviewService(db=session)
    service.set_review_status(admin_ctx, "INV001", "reviewed")

    lead = service.set_incentive(admin_ctx, win_lead.id, True, "750")
    assert lead.has_incentive is True
    assert lead.incentive_amount == Decimal("750.00")

    lead = service.set_incentive(admin_ctx, win_lead.id, False, 750)
    assert lead.has_incentive is False
    assert lead.incentive_amount is None


def test_incentive_true_needs_positive_amount(session, admin_ctx, win_lead):
    service = ReviewService(db=session)
    service.set_review_status(admin_ctx, "INV001", "reviewed")

    for amount in (None, 0, "-10", "lots", "0.001", "10000000000"):
        with pytest.raises(ValidationError) as exc:
            service.set_incentive(admin_ctx, win_lead.id, True, amount)
        assert exc.value.code == "InvalidIncentiveAmount"


def test_incentive_flag_must_be_boolean(session, admin_ctx, win_lead):
    service = ReviewService(db=session)
    service.set_review_status(admin_ctx, "INV001", "reviewed")

    with pytest.raises(ValidationError) as exc:
        service.set_incentive(admin_ctx, win_lead.id, "yes", 100)
    assert exc.value.code == "InvalidIncentive"


def test_leaving_reviewed_resets_incentive(session, admin_ctx, win_lead):
    service = ReviewService(db=session)
    service.set_review_status(admin_ctx, "INV001", "reviewed")
    service.set_incentive(admin_ctx, win_lead.id, True, 300)

    lead = service.set_review_status(admin_ctx, "INV001", "yet_to_review")

    assert lead.review_status == ReviewStatus.YET_TO_REVIEW
    assert lead.reviewed_by is None
    assert lead.has_incentive is None
    assert lead.incentive_amount is None


def test_incentive_on_unknown_lead_is_not_found(session, admin_ctx):
    with pytest.raises(NotFoundError):
        ReviewService(db=session).set_incentive(admin_ctx, 999, True, 100)


def test_state_machine_never_returns_to_pending():
    assert REVIEW_STATE_MACHINE.can_transition("pending", "reviewed")
    assert REVIEW_STATE_MACHINE.can_transition("reviewed", "yet_to_review")
    assert not REVIEW_STATE_MACHINE.can_transition("reviewed", "pending")
    with pytest.raises(InvalidTransitionError):
        REVIEW_STATE_MACHINE.assert_transition("yet_to_review", "pending")
