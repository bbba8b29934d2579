"""
Notification service
Records product notifications; delivery is a log line only
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from beanstore.models import Notification, Product
from beanstore.core.exceptions import NotFoundException
from .schemas import NotificationCreate

logger = logging.getLogger(__name__)

class NotificationService:
    """Service for managing notifications"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_notification(self, data: NotificationCreate) -> Notification:
        """
        Store a notification and dispatch it

        Raises:
            NotFoundException: If the referenced product does not exist
        """
        if data.product_id is not None:
            product = await self.db.get(Product, data.product_id)
            if product is None:
                raise NotFoundException(f"Product {data.product_id} not found")

        notification = Notification(
            product_id=data.product_id,
            type=data.type.value,
            message=data.message
        )

        self.db.add(notification)
        await self.db.commit()
        await self.db.refresh(notification)

        self._dispatch(notification)
        return notification

    def _dispatch(self, notification: Notification) -> None:
        # No mail provider is wired in; dispatch is logged
        logger.info(f"Mock email sent ({notification.type}): {notification.message}")

    async def list_notifications(self) -> List[Notification]:
        """All notifications, newest first"""
        result = await self.db.execute(
            select(Notification).order_by(Notification.sent_at.desc(), Notification.id.desc())
        )
        return list(result.scalars().all())
