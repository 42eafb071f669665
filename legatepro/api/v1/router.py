"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from legatepro.api.v1 import auth, dashboard, estates, health, invoices, settings, time_entries
from legatepro.core.config import get_config

api_router = APIRouter(prefix=get_config().API_PREFIX)
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(dashboard.router)
api_router.include_router(estates.router)
api_router.include_router(invoices.router)
api_router.include_router(time_entries.router)
api_router.include_router(settings.router)


def get_api_router() -> APIRouter:
    return api_router
