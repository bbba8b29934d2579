"""
Authentication dependencies
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from beanstore.core.config import Settings
from beanstore.core.database import get_db
from beanstore.core.exceptions import UnauthorizedException
from beanstore.core.security import SecurityUtils
from beanstore.models import AdminUser
from beanstore.utils.dependencies import get_app_settings

security = HTTPBearer(auto_error=False)

async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> dict:
    """
    Resolve the calling admin from a Bearer token

    Services only ever see the returned identity, never credentials.
    """
    if credentials is None:
        raise UnauthorizedException("No token provided")

    payload = SecurityUtils.decode_token(credentials.credentials, settings)

    if payload.get("type") != "access":
        raise UnauthorizedException("Invalid token type")

    username = payload.get("sub")
    result = await db.execute(
        select(AdminUser).where(AdminUser.username == username)
    )
    admin = result.scalar_one_or_none()

    if admin is None:
        raise UnauthorizedException("Admin not found")

    return {"id": admin.id, "username": admin.username}
