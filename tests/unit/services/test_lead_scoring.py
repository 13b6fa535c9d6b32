from __future__ import annotations

from types import SimpleNamespace

import pytest

from leadflow.models import ScoreCategory
from leadflow.services.lead_intake_service import LeadIntakeService
from leadflow.services.lead_scoring import categorize, score, score_breakdown


def _lost(**fields):
    values = {
        "status": "lost",
        "purchase_timeline": "today",
        "deal_size": 100000,
        "not_today_reason": None,
        "lead_rating": 5,
    }
    values.update(fields)
    return SimpleNamespace(**values)


def test_today_high_value_top_rated_is_hot():
    result = score_breakdown(_lost())

    assert result.breakdown == {
        "purchase_timeline": 40,
        "deal_size": 25,
        "not_today_reason": 0,
        "lead_rating": 15,
    }
    assert result.score == 80
    assert result.category == ScoreCategory.HOT


def test_win_leads_score_zero():
    win = SimpleNamespace(status="win", sale_price=100000)
    assert score(win) == 0


@pytest.mark.parametrize(
    ("deal_size", "points"),
    [(100000, 25), (99999, 20), (50000, 20), (25000, 15), (24999, 10), (1, 10)],
)
def test_deal_size_tiers(deal_size, points):
    assert score_breakdown(_lost(deal_size=deal_size)).breakdown["deal_size"] == points


@pytest.mark.parametrize(
    ("timeline", "points"),
    [("today", 40), ("3_days", 30), ("7_days", 20), ("30_days", 10)],
)
def test_timeline_points(timeline, points):
    assert score_breakdown(_lost(purchase_timeline=timeline)).breakdown["purchase_timeline"] == points


@pytest.mark.parametrize(
    ("reason", "points"),
    [
        ("need_family_approval", 20),
        ("price_high", 15),
        ("want_more_options", 10),
        ("other", 10),
        ("just_browsing", 5),
        (None, 0),
    ],
)
def test_reason_points(reason, points):
    lead = _lost(purchase_timeline="3_days", not_today_reason=reason)
    assert score_breakdown(lead).breakdown["not_today_reason"] == points


def test_rating_points_scale_by_three():
    assert [score_breakdown(_lost(lead_rating=r)).breakdown["lead_rating"] for r in (1, 2, 3, 4, 5)] == [
        3,
        6,
        9,
        12,
        15,
    ]


def test_score_is_bounded():
    best = _lost(not_today_reason="need_family_approval")
    worst = _lost(purchase_timeline="30_days", deal_size=10, not_today_reason="just_browsing", lead_rating=1)

    assert score(best) == 100
    assert score(worst) == 28
    assert 0 <= score(worst) <= score(best) <= 100


@pytest.mark.parametrize(
    ("value", "category"),
    [(100, "HOT"), (80, "HOT"), (79, "WARM"), (50, "WARM"), (49, "COLD"), (0, "COLD")],
)
def test_categorize_thresholds(value, category):
    assert categorize(value) == ScoreCategory(category)


def test_score_is_deterministic_for_orm_leads(session, rep_ctx, category, lost_payload):
    lead = LeadIntakeService(db=session).create_lead(rep_ctx, lost_payload(category))

    # 7_days + 60000 + price_high + 4 stars
    assert score(lead) == 20 + 20 + 15 + 12
    assert score(lead) == score(lead)
