"""
Admin authentication schemas for request/response validation
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
import re

class LoginRequest(BaseModel):
    """Admin login request"""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "admin",
                "password": "admin123"
            }
        }
    }

class RegisterAdminRequest(BaseModel):
    """Create another administrator"""
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)
    email: EmailStr

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        if not re.match(r'^[A-Za-z0-9_.-]+$', v):
            raise ValueError("Username may only contain letters, digits, '.', '_' and '-'")
        return v

class AdminResponse(BaseModel):
    """Public view of an admin account"""
    id: int
    username: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}

class TokenResponse(BaseModel):
    """Issued access token"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    admin: AdminResponse
