"""Admin dashboard endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from beanstore.core.database import get_db
from beanstore.api.v1.auth.dependencies import get_current_admin
from .schemas import AdminStats
from .services import AdminService

router = APIRouter()

@router.get("/stats", response_model=AdminStats)
async def get_admin_stats(
    current_admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Get admin dashboard statistics"""
    service = AdminService(db)
    return await service.get_stats()
