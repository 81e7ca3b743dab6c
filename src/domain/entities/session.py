"""
AuthSession Entity

Persisted record binding one login to the currently valid token hashes.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class AuthSession(SQLModel, table=True):
    """
    AuthSession entity - the sole source of truth for token validity.

    Business Rules:
    - Tokens are stored as SHA-256 hashes, never raw
    - session_id is embedded in every token issued under the session
    - expires_at tracks the refresh token lifetime (30 days), not the
      access token's 15-minute window
    - A revoked or expired row is treated as non-existent until reaped
    - Revocation is terminal (no un-revoke)
    """

    __tablename__ = "auth_user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    session_id: str = Field(unique=True, index=True, max_length=64)

    user_id: UUID = Field(nullable=False, index=True)
    device_id: Optional[str] = Field(default=None, index=True, max_length=255)

    # Descriptive metadata - never used for authorization decisions
    device_fingerprint: Optional[str] = Field(default=None, max_length=255)
    user_agent: Optional[str] = None
    ip_address: Optional[str] = Field(default=None, max_length=64)
    location_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    device_name: Optional[str] = Field(default=None, max_length=255)
    browser_name: Optional[str] = Field(default=None, max_length=100)
    browser_version: Optional[str] = Field(default=None, max_length=50)
    os_name: Optional[str] = Field(default=None, max_length=100)
    os_version: Optional[str] = Field(default=None, max_length=50)
    device_type: str = Field(default="web", max_length=50)
    login_method: str = Field(default="password", max_length=50)

    access_token_hash: str = Field(max_length=64, index=True)  # SHA-256 hex
    refresh_token_hash: str = Field(max_length=64, index=True)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_activity: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    is_revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    revoked_reason: Optional[str] = Field(default=None, max_length=100)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_auth_session_expires_at", "expires_at"),
        Index("idx_auth_session_user_revoked", "user_id", "is_revoked"),
    )
