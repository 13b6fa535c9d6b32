from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from leadflow.auth.caller_context import CallerContext
from leadflow.database.db import enable_sqlite_transactions
from leadflow.models import Base, Category, Organization, User, UserRole


def build_session():
    engine = enable_sqlite_transactions(create_engine("sqlite:///:memory:"))
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    return TestingSessionLocal()


@pytest.fixture
def session():
    db = build_session()
    yield db
    db.close()


@pytest.fixture
def organization(session):
    org = Organization(name="Sharma Electronics")
    session.add(org)
    session.commit()
    return org


@pytest.fixture
def other_organization(session):
    org = Organization(name="Gupta Furniture")
    session.add(org)
    session.commit()
    return org


def _add_user(session, organization, name, phone, role):
    user = User(organization_id=organization.id, name=name, phone=phone, role=role)
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def admin_user(session, organization):
    return _add_user(session, organization, "Asha Admin", "9000000001", UserRole.ADMIN)


@pytest.fixture
def rep_user(session, organization):
    return _add_user(session, organization, "Ravi Rep", "9000000002", UserRole.SALES_REP)


@pytest.fixture
def other_rep_user(session, other_organization):
    return _add_user(session, other_organization, "Meena Rep", "9000000003", UserRole.SALES_REP)


@pytest.fixture
def category(session, organization):
    item = Category(organization_id=organization.id, name="Televisions", display_order=1)
    session.add(item)
    session.commit()
    return item


@pytest.fixture
def other_category(session, other_organization):
    item = Category(organization_id=other_organization.id, name="Sofas", display_order=1)
    session.add(item)
    session.commit()
    return item


@pytest.fixture
def admin_ctx(admin_user):
    return CallerContext(organization_id=admin_user.organization_id, user_id=admin_user.id, role="admin")


@pytest.fixture
def rep_ctx(rep_user):
    return CallerContext(organization_id=rep_user.organization_id, user_id=rep_user.id, role="sales_rep")


@pytest.fixture
def other_rep_ctx(other_rep_user):
    return CallerContext(
        organization_id=other_rep_user.organization_id,
        user_id=other_rep_user.id,
        role="sales_rep",
    )


def _win_payload(category, invoice_no="INV001", sale_price=1000, **overrides):
    payload = {
        "customer_name": "Priya Nair",
        "customer_phone": "9876543210",
        "category_id": category.id,
        "status": "win",
        "invoice_no": invoice_no,
        "sale_price": sale_price,
    }
    payload.update(overrides)
    return payload


def _lost_payload(category, **overrides):
    payload = {
        "customer_name": "Karan Mehta",
        "customer_phone": "9123456780",
        "category_id": category.id,
        "status": "lost",
        "deal_size": 60000,
        "model_name": "Bravia X90",
        "purchase_timeline": "7_days",
        "not_today_reason": "price_high",
        "lead_rating": 4,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def win_payload():
    return _win_payload


@pytest.fixture
def lost_payload():
    return _lost_payload


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def mint_token(claims, secret, ttl=timedelta(minutes=5), alg="HS256"):
    body = dict(claims)
    body.setdefault("exp", int(time.time() + ttl.total_seconds()))
    header_segment = _b64url(json.dumps({"alg": alg, "typ": "JWT"}).encode("utf-8"))
    payload_segment = _b64url(json.dumps(body).encode("utf-8"))
    signing_input = f"{header_segment}.{payload_segment}"
    signature = hmac.new(secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()
    return f"{signing_input}.{_b64url(signature)}"


@pytest.fixture
def issue_token():
    return mint_token
