"""Admin API router"""

from fastapi import APIRouter
from beanstore.api.v1.auth.router import router as auth_router
from .router import router as dashboard_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(dashboard_router)
