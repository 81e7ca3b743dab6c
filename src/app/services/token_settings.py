"""
Token Settings

Explicit configuration for the token/session engine. Built once at process
start and passed into every component.
"""

from datetime import timedelta
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import RotationPolicy
from src.domain.errors import ConfigMissingError

DEFAULT_ISSUER = "session-auth-service"


class TokenSettings(BaseModel):
    """Signing secrets, issuer, lifetimes and refresh policy"""

    model_config = ConfigDict(frozen=True)

    access_secret: str = Field(..., min_length=1, repr=False)
    refresh_secret: str = Field(..., min_length=1, repr=False)
    issuer: str = DEFAULT_ISSUER
    algorithm: str = "HS256"
    access_token_ttl: timedelta = timedelta(minutes=15)
    refresh_token_ttl: timedelta = timedelta(days=30)
    rotation_policy: RotationPolicy = RotationPolicy.rotating
    store_timeout_seconds: float = 5.0
    activity_touch_interval_seconds: int = 0

    @classmethod
    def from_config(cls, config: Any) -> "TokenSettings":
        """
        Build settings from an ApplicationConfig-like object.

        Raises:
            ConfigMissingError: if a signing secret is absent, or both
                secrets are the same value
        """
        access_secret: Optional[str] = getattr(config, "JWT_ACCESS_SECRET", None)
        refresh_secret: Optional[str] = getattr(config, "JWT_REFRESH_SECRET", None)

        missing = [
            name
            for name, value in (
                ("JWT_ACCESS_SECRET", access_secret),
                ("JWT_REFRESH_SECRET", refresh_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigMissingError(
                f"Missing required secrets: {', '.join(missing)}"
            )
        if access_secret == refresh_secret:
            raise ConfigMissingError(
                "JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ"
            )

        try:
            rotation_policy = RotationPolicy(
                getattr(config, "ROTATION_POLICY", RotationPolicy.rotating.value)
            )
        except ValueError as exc:
            raise ConfigMissingError(
                f"ROTATION_POLICY must be one of: "
                f"{', '.join(p.value for p in RotationPolicy)}"
            ) from exc

        return cls(
            access_secret=access_secret,
            refresh_secret=refresh_secret,
            issuer=getattr(config, "JWT_ISSUER", None) or DEFAULT_ISSUER,
            access_token_ttl=timedelta(
                minutes=int(getattr(config, "ACCESS_TOKEN_TTL_MINUTES", 15))
            ),
            refresh_token_ttl=timedelta(
                days=int(getattr(config, "REFRESH_TOKEN_TTL_DAYS", 30))
            ),
            rotation_policy=rotation_policy,
            store_timeout_seconds=float(
                getattr(config, "STORE_TIMEOUT_SECONDS", 5.0)
            ),
            activity_touch_interval_seconds=int(
                getattr(config, "ACTIVITY_TOUCH_INTERVAL_SECONDS", 0)
            ),
        )
