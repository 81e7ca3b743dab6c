from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.auth_service import AuthService
from src.depends import get_auth_service

router = APIRouter(prefix="/admin", tags=["Admin"])


class SweepResponse(BaseModel):
    deleted_count: int


@router.post(
    "/sessions/sweep",
    status_code=status.HTTP_200_OK,
    response_model=SweepResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def sweep_expired_sessions(auth_service: AuthService = Depends(get_auth_service)):
    """
    Sweep Expired Sessions

    Deletes session rows past expiry. Meant for an external scheduler.
    """
    deleted = await auth_service.sweep_expired_sessions()
    return {"deleted_count": deleted}
