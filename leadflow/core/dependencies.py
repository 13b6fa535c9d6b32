"""Dependency providers for API handlers and background workers."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy.orm import Session

from leadflow.auth.caller_context import CallerContext, from_claims
from leadflow.auth.jwt import decode_jwt
from leadflow.core.config import Config, get_config
from leadflow.database.db import get_db


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_current_caller(token: str, settings: Config | None = None) -> CallerContext:
    """Resolve the caller's organization, user and role from a bearer token."""
    cfg = settings or get_settings()
    claims = decode_jwt(token=token, secret=cfg.JWT_SECRET)
    return from_claims(claims)
