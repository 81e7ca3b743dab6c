from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError
from src.app.services.auth_service import AuthService
from src.app.use_cases.auth import Principal, TokenPair
from src.depends import get_auth_service, get_current_principal
from src.domain.entities import RevocationReason
from src.domain.errors import UNAUTHENTICATED_MESSAGE
from src.domain.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RefreshRequest(BaseModel):
    """
    Refresh token HTTP request payload

    Validates incoming refresh request.
    """

    refresh_token: str = Field(..., min_length=1, description="Refresh token")


class LogoutResponse(BaseModel):
    message: str


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=TokenPair)
async def refresh(
    request: RefreshRequest, auth_service: AuthService = Depends(get_auth_service)
):
    """
    Refresh Token Pair

    Exchanges a refresh token for a new access/refresh pair. Under the
    rotating policy the presented refresh token stops working.

    Raises:
        - 401 Unauthorized: Invalid, expired, revoked or already-rotated token
        - 503 Service Unavailable: Session store failure (safe to retry)
    """
    pair = await auth_service.refresh_access_token(request.refresh_token)
    if pair is None:
        raise ClientError(
            Error("UNAUTHENTICATED", UNAUTHENTICATED_MESSAGE),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return pair


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    principal: Principal = Depends(get_current_principal),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Logout

    Revokes the session behind the presented access token.
    """
    await auth_service.revoke_session(
        principal.session_id,
        reason=RevocationReason.logout.value,
        user_id=principal.user_id,
    )
    return {"message": "Logged out"}
