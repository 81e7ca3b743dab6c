"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the token/session engine.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class DeviceInfo(BaseModel):
    """Client device description captured at login (descriptive only)"""

    device_id: Optional[str] = None
    fingerprint: Optional[str] = None
    name: Optional[str] = None
    browser_name: Optional[str] = None
    browser_version: Optional[str] = None
    os_name: Optional[str] = None
    os_version: Optional[str] = None
    device_type: str = "web"
    location: Optional[dict] = None


class IssueContext(BaseModel):
    """Request context for a login"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    device_info: Optional[DeviceInfo] = None
    login_method: str = "password"


# ============================================================================
# Response DTOs
# ============================================================================


class TokenPair(BaseModel):
    """Access/refresh pair returned by issue and refresh. Never persisted."""

    access_token: str
    refresh_token: str
    session_id: str
    expires_at: datetime
    refresh_expires_at: datetime


class Principal(BaseModel):
    """Authenticated identity behind a verified access token"""

    user_id: str
    email: str
    role: str
    session_id: str
