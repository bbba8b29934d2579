"""Notification endpoints"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from beanstore.core.database import get_db
from beanstore.api.v1.auth.dependencies import get_current_admin
from .schemas import NotificationCreate, NotificationResponse
from .services import NotificationService

router = APIRouter()

@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    notification_data: NotificationCreate,
    current_admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Send a product notification (admin only)"""
    service = NotificationService(db)
    return await service.create_notification(notification_data)

@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    current_admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """List sent notifications (admin only)"""
    service = NotificationService(db)
    return await service.list_notifications()
