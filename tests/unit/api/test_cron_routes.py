from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi import HTTPException

from leadflow.api.v1 import _authz, cron
from leadflow.models.base import utcnow
from leadflow.services.lead_intake_service import LeadIntakeService


class _Cfg:
    def __init__(self, cron_secret):
        self.CRON_SECRET = cron_secret


def test_cron_requires_configured_secret(monkeypatch, session):
    monkeypatch.setattr(_authz, "get_config", lambda: _Cfg(None))

    with pytest.raises(HTTPException) as exc:
        cron.auto_expire_leads(authorization="Bearer anything", db=session)
    assert exc.value.status_code == 500


@pytest.mark.parametrize("header", [None, "Bearer wrong", "s3cret", "Basic s3cret"])
def test_cron_rejects_bad_secret(monkeypatch, session, header):
    monkeypatch.setattr(_authz, "get_config", lambda: _Cfg("s3cret"))

    with pytest.raises(HTTPException) as exc:
        cron.auto_expire_leads(authorization=header, db=session)
    assert exc.value.status_code == 401


def test_cron_expires_stale_leads(monkeypatch, session, rep_ctx, category, lost_payload):
    monkeypatch.setattr(_authz, "get_config", lambda: _Cfg("s3cret"))
    lead = LeadIntakeService(db=session).create_lead(rep_ctx, lost_payload(category, purchase_timeline="3_days"))
    lead.updated_at = utcnow() - timedelta(days=31)
    session.commit()

    response = cron.auto_expire_leads(authorization="Bearer s3cret", db=session)

    assert response["expiredCount"] == 1
    assert response["leads"][0]["id"] == lead.id
    assert response["leads"][0]["not_today_reason"] == "other"

    again = cron.auto_expire_leads(authorization="Bearer s3cret", db=session)
    assert again["expiredCount"] == 0
    assert again["message"] == "No leads to auto-expire"
