"""
User Entity

Owner of sessions. Only the fields token issuance and verification need.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow
from .enums import UserStatus


class User(SQLModel, table=True):
    """
    User entity - the principal behind every session.

    Business Rules:
    - Only active users can verify or refresh tokens
    - Role is copied into access tokens at issue/refresh time
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    role: str = Field(default="user", max_length=50)

    status: UserStatus = Field(default=UserStatus.active)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.active
