"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from leadflow.api.v1 import admin, categories, cron, health, leads, team

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(leads.router)
api_router.include_router(admin.router)
api_router.include_router(team.router)
api_router.include_router(categories.router)
api_router.include_router(cron.router)


def get_api_router() -> APIRouter:
    return api_router
