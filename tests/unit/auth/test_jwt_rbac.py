from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

import pytest

from leadflow.auth.caller_context import from_claims, require_admin
from leadflow.auth.jwt import decode_jwt
from leadflow.auth.rbac import has_scopes, require_scopes
from leadflow.core.config import get_config
from leadflow.core.dependencies import get_current_caller
from leadflow.core.exceptions import AuthenticationError, AuthorizationError


def test_valid_token_yields_caller_claims(issue_token):
    token = issue_token({"sub": "10", "organization_id": 20, "role": "sales_rep"}, secret="test-secret")
    claims = decode_jwt(token, secret="test-secret")
    assert claims["sub"] == "10"
    assert claims["organization_id"] == 20
    assert claims["role"] == "sales_rep"
    assert "exp" in claims


def test_rejects_wrong_secret_and_expired_tokens(issue_token):
    token = issue_token({"sub": "1"}, secret="right")
    with pytest.raises(AuthenticationError):
        decode_jwt(token, secret="wrong")

    stale = issue_token({"sub": "1"}, secret="right", ttl=timedelta(minutes=-5))
    with pytest.raises(AuthenticationError):
        decode_jwt(stale, secret="right")


def test_recently_expired_token_within_leeway(issue_token):
    token = issue_token({"sub": "1"}, secret="right", ttl=timedelta(seconds=-5))
    assert decode_jwt(token, secret="right")["sub"] == "1"
    with pytest.raises(AuthenticationError):
        decode_jwt(token, secret="right", leeway=0)


def test_rejects_other_algorithms_and_malformed_tokens(issue_token):
    unsigned = issue_token({"sub": "1"}, secret="right", alg="none")
    with pytest.raises(AuthenticationError):
        decode_jwt(unsigned, secret="right")

    for malformed in ("", "a.b", "a..c", "not.a.token"):
        with pytest.raises(AuthenticationError):
            decode_jwt(malformed, secret="right")


def test_missing_exp_rejected(issue_token):
    token = issue_token({"sub": "1", "exp": None}, secret="right")
    with pytest.raises(AuthenticationError):
        decode_jwt(token, secret="right")
    assert decode_jwt(token, secret="right", verify_exp=False)["sub"] == "1"


def test_current_caller_resolved_from_token(issue_token):
    settings = replace(get_config(), JWT_SECRET="unit-secret")
    token = issue_token({"sub": "7", "organization_id": "3", "role": "ADMIN"}, secret="unit-secret")

    caller = get_current_caller(token, settings=settings)

    assert caller.organization_id == 3
    assert caller.user_id == 7
    assert caller.is_admin


def test_claims_need_organization_and_known_role():
    with pytest.raises(AuthenticationError):
        from_claims({"sub": "1", "role": "admin"})
    with pytest.raises(AuthenticationError):
        from_claims({"sub": "1", "organization_id": 1, "role": "manager"})


def test_require_admin_blocks_reps():
    rep = from_claims({"sub": "1", "organization_id": 1, "role": "sales_rep"})
    with pytest.raises(AuthorizationError):
        require_admin(rep, "delete leads")


def test_rbac_blocks_missing_scope():
    require_scopes("sales_rep", ["leads.create", "leads.review"])
    with pytest.raises(AuthorizationError):
        require_scopes("sales_rep", ["leads.delete"])
    assert has_scopes("admin", ["leads.delete", "categories.write"])
    assert not has_scopes("unknown", ["leads.read"])
