"""
Admin authentication service layer
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
import logging

from beanstore.models import AdminUser
from beanstore.core.config import Settings
from beanstore.core.security import SecurityUtils
from beanstore.core.exceptions import (
    InvalidArgumentException,
    UnauthorizedException,
    DuplicateResourceException
)
from .schemas import RegisterAdminRequest, TokenResponse, AdminResponse

logger = logging.getLogger(__name__)

class AuthService:
    """Admin directory: credential checks and token issuance"""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def get_admin(self, username: str) -> Optional[AdminUser]:
        result = await self.db.execute(
            select(AdminUser).where(AdminUser.username == username)
        )
        return result.scalar_one_or_none()

    async def authenticate(self, username: str, password: str) -> TokenResponse:
        """
        Verify credentials and issue a signed, time-limited token

        Raises:
            UnauthorizedException: On unknown user or wrong password
        """
        admin = await self.get_admin(username)

        # Same message for both cases so usernames can't be probed
        if not admin or not SecurityUtils.verify_password(password, admin.password):
            logger.warning(f"Failed admin login for '{username}'")
            raise UnauthorizedException("Invalid credentials")

        token = SecurityUtils.create_access_token({"sub": admin.username}, self.settings)
        logger.info(f"Admin '{username}' logged in")

        return TokenResponse(
            access_token=token,
            expires_in=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            admin=AdminResponse.model_validate(admin)
        )

    async def create_admin(self, username: str, password: str, email: str) -> AdminUser:
        """
        Create admin account with a hashed password

        Raises:
            InvalidArgumentException: If password is too weak
            DuplicateResourceException: If username or email is taken
        """
        is_valid, error = SecurityUtils.validate_password(password, self.settings.PASSWORD_MIN_LENGTH)
        if not is_valid:
            raise InvalidArgumentException(error)

        result = await self.db.execute(
            select(AdminUser).where(
                or_(AdminUser.username == username, AdminUser.email == email)
            )
        )
        existing = result.scalars().first()
        if existing:
            if existing.username == username:
                raise DuplicateResourceException("Admin", "username", username)
            raise DuplicateResourceException("Admin", "email", email)

        admin = AdminUser(
            username=username,
            password=SecurityUtils.hash_password(password),
            email=email
        )
        self.db.add(admin)
        await self.db.commit()
        await self.db.refresh(admin)

        logger.info(f"Admin '{username}' created")
        return admin

    async def register(self, request: RegisterAdminRequest) -> AdminUser:
        return await self.create_admin(request.username, request.password, request.email)
