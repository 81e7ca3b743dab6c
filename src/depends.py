from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.api.error import ClientError
from src.app.services.auth_service import AuthService
from src.app.use_cases.auth import Principal
from src.domain.errors import UNAUTHENTICATED_MESSAGE
from src.domain.result import Error

security = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> Principal:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Principal with user_id, email, role and session_id

    Raises:
        ClientError: 401 for any failure - missing, forged, expired, revoked
            or unverifiable tokens all look the same to the client
    """
    principal = None
    if credentials is not None:
        principal = await auth_service.verify_access_token(credentials.credentials)

    if principal is None:
        raise ClientError(
            Error("UNAUTHENTICATED", UNAUTHENTICATED_MESSAGE),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return principal
