"""
Admin authentication API routes
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from beanstore.core.config import Settings
from beanstore.core.database import get_db
from beanstore.utils.dependencies import get_app_settings
from .dependencies import get_current_admin
from .schemas import LoginRequest, RegisterAdminRequest, AdminResponse, TokenResponse
from .services import AuthService

router = APIRouter()

@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Admin login",
    description="Exchange admin credentials for a bearer token"
)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """Admin login"""
    service = AuthService(db, settings)
    return await service.authenticate(request.username, request.password)

@router.post(
    "/register",
    response_model=AdminResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register admin",
    description="Create another administrator (admin only)"
)
async def register(
    request: RegisterAdminRequest,
    current_admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """Register new admin"""
    service = AuthService(db, settings)
    admin = await service.register(request)
    return AdminResponse.model_validate(admin)
