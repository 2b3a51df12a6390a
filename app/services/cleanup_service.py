"""
Cleanup Service - Maintenance operations for database hygiene
"""
from sqlalchemy.orm import Session

from app.services.challenge_service import ChallengeService
from atams.logging import get_logger

logger = get_logger(__name__)


class CleanupService:
    def __init__(self) -> None:
        self.challenge_service = ChallengeService()

    def cleanup_expired_challenges(self, db: Session, client_id: int) -> int:
        """
        Delete the tenant's expired WebAuthn challenges

        Returns:
            int: Number of records deleted
        """
        deleted = self.challenge_service.cleanup_expired(db, client_id)
        logger.info(
            "Expired challenges removed",
            extra={'extra_data': {"client_id": client_id, "deleted_count": deleted}}
        )
        return deleted
