"""
Session Management DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import AuthSession


class SessionSummary(BaseModel):
    """Public view of an active session (no token hashes)"""

    session_id: str
    device_id: Optional[str] = None
    device_name: Optional[str] = None
    device_type: Optional[str] = None
    browser_name: Optional[str] = None
    os_name: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None
    last_activity: Optional[datetime] = None
    expires_at: datetime

    @classmethod
    def from_session(cls, session: AuthSession) -> "SessionSummary":
        return cls(
            session_id=session.session_id,
            device_id=session.device_id,
            device_name=session.device_name,
            device_type=session.device_type,
            browser_name=session.browser_name,
            os_name=session.os_name,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            created_at=session.created_at,
            last_activity=session.last_activity,
            expires_at=session.expires_at,
        )


class RevokeResult(BaseModel):
    revoked_count: int
