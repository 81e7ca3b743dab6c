from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import ClientError
from src.app.services.auth_service import AuthService
from src.app.use_cases.auth import Principal
from src.app.use_cases.sessions import SessionSummary
from src.depends import get_auth_service, get_current_principal
from src.domain.result import Error

router = APIRouter(prefix="/sessions", tags=["Sessions"])


class RevokeSessionResponse(BaseModel):
    """Response for session revocation operations"""

    message: str
    revoked_count: int


class RevokeSpecificSessionResponse(BaseModel):
    """Response for specific session revocation"""

    message: str
    identifier: str
    revoked: bool


@router.get("", status_code=status.HTTP_200_OK, response_model=List[SessionSummary])
async def list_sessions(
    principal: Principal = Depends(get_current_principal),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    List Active Sessions

    Returns the caller's non-revoked, non-expired sessions, most recently
    active first.
    """
    return await auth_service.list_active_sessions(principal.user_id)


@router.delete(
    "/{identifier}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSpecificSessionResponse,
)
async def revoke_specific_session(
    identifier: str,
    principal: Principal = Depends(get_current_principal),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Revoke Specific Session

    Revokes one of the caller's sessions by session id or device id.
    Revoking an already-revoked session succeeds.

    Raises:
        - 404 Not Found: No session of the caller matches the identifier
    """
    revoked = await auth_service.revoke_session(identifier, user_id=principal.user_id)
    if not revoked:
        raise ClientError(
            Error("SESSION_NOT_FOUND", "Session not found"),
            status_code=status.HTTP_404_NOT_FOUND,
        )

    return {
        "message": "Session revoked successfully",
        "identifier": identifier,
        "revoked": True,
    }


@router.post(
    "/revoke-others",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionResponse,
)
async def revoke_all_except_current(
    principal: Principal = Depends(get_current_principal),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Revoke All Other Sessions

    Logs out every other device of the caller. The caller's device is
    resolved from the session behind the access token.
    """
    count = await auth_service.revoke_other_sessions(
        principal.user_id, principal.session_id
    )
    return {
        "message": f"Successfully revoked {count} other session(s)",
        "revoked_count": count,
    }
