from __future__ import annotations

from fastapi import APIRouter

from navpage_core.api.admin import router as admin_router
from navpage_core.api.data import router as data_router

router = APIRouter()

router.include_router(data_router)
router.include_router(admin_router)
