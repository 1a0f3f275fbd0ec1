"""API v1 router aggregating all endpoint routers.

Mounted under ``api.v1_prefix`` (default ``/api/v1``). The extraction and
health routers are also mounted at the root by the application factory.
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_extractor.api.v1.endpoints import extraction, health, recipes


router = APIRouter()

router.include_router(health.router)
router.include_router(extraction.router)
router.include_router(recipes.router)
