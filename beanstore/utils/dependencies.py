"""
Common dependencies for FastAPI
"""

from fastapi import Request
import uuid

from beanstore.core.config import Settings

def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with"""
    return request.app.state.settings

def get_cart_session_id(request: Request) -> str:
    """
    Opaque cart session id, assigned on first interaction

    The id only partitions cart data; it is never treated as an identity.
    """
    session_id = request.session.get("session_id")
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session["session_id"] = session_id
    return session_id
