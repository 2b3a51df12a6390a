"""
Maintenance Endpoints - System maintenance and cleanup operations
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from pydantic import BaseModel

from app.db.session import get_db
from app.services.cleanup_service import CleanupService
from app.schemas import DataResponse
from app.api.deps import CurrentUser, require_auth, require_capability
from app.core.permissions import Capability

router = APIRouter()
cleanup_service = CleanupService()


class CleanupResult(BaseModel):
    """Cleanup operation result"""
    deleted_count: int
    message: str


@router.post(
    "/cleanup-challenges",
    response_model=DataResponse[CleanupResult],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.RUN_MAINTENANCE))]
)
async def cleanup_challenges(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Clean up expired WebAuthn challenges

    **Authorization:**
    - Admin only

    **Use case:**
    - Abandoned ceremonies leave expired rows behind
    - Should be run daily via scheduled job
    """
    deleted_count = cleanup_service.cleanup_expired_challenges(db, current_user.client_id)

    result = CleanupResult(
        deleted_count=deleted_count,
        message=f"Successfully deleted {deleted_count} expired challenges"
    )

    response = DataResponse(
        success=True,
        message="Challenge cleanup completed",
        data=result
    )

    return response
