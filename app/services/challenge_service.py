"""
Challenge Service - WebAuthn challenge store

At most one live challenge per (employee, purpose). Issuing replaces the
previous one; consuming deletes exactly the value that was verified, so a
superseded or already-used challenge cannot be replayed.
"""
from datetime import datetime, timedelta
from sqlalchemy.orm import Session

from app.core import clock
from app.core.config import settings
from app.core.exceptions import ChallengeExpired
from app.models.webauthn_challenge import WebAuthnChallenge
from app.repositories.webauthn_challenge_repository import WebAuthnChallengeRepository
from atams.exceptions import ConflictException

REGISTER = "register"
AUTHENTICATE = "authenticate"


class ChallengeService:
    def __init__(self) -> None:
        self.challenge_repo = WebAuthnChallengeRepository()
        self.ttl = timedelta(seconds=settings.WEBAUTHN_CHALLENGE_TTL_SECONDS)

    def issue(self, db: Session, client_id: int, employee_id: int, purpose: str, challenge: str) -> WebAuthnChallenge:
        """
        Raises:
            ConflictException: Another request issued a challenge for the same pair concurrently
        """
        expires_at = clock.now_local() + self.ttl
        row = self.challenge_repo.replace_challenge(db, client_id, employee_id, purpose, challenge, expires_at)
        if row is None:
            raise ConflictException("Another challenge was issued concurrently, request a new one")
        return row

    def get_live(self, db: Session, client_id: int, employee_id: int, purpose: str) -> WebAuthnChallenge:
        """
        Raises:
            ChallengeExpired: No unexpired challenge for the pair
        """
        row = self.challenge_repo.get_live(db, client_id, employee_id, purpose, clock.now_local())
        if row is None:
            raise ChallengeExpired()
        return row

    def consume(self, db: Session, client_id: int, employee_id: int, purpose: str, challenge: str) -> None:
        """
        Raises:
            ChallengeExpired: Value already consumed, superseded or expired
        """
        if not self.challenge_repo.consume(db, client_id, employee_id, purpose, challenge, clock.now_local()):
            raise ChallengeExpired()

    def cleanup_expired(self, db: Session, client_id: int, now: datetime = None) -> int:
        return self.challenge_repo.delete_expired(db, client_id, now or clock.now_local())
