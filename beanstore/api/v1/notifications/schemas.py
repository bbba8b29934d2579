"""
Notification schemas
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
import enum

class NotificationType(str, enum.Enum):
    RESTOCK = "restock"
    PRICE_DROP = "price_drop"
    NEW_ARRIVAL = "new_arrival"
    PROMOTION = "promotion"

class NotificationCreate(BaseModel):
    product_id: Optional[int] = Field(None, gt=0)
    type: NotificationType
    message: str = Field(..., min_length=1, max_length=2000)

class NotificationResponse(BaseModel):
    id: int
    product_id: Optional[int] = None
    type: str
    message: str
    sent_at: datetime

    model_config = {"from_attributes": True}
