"""
WebAuthn Challenge Repository - One live challenge per employee and purpose
"""
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from atams.db import BaseRepository
from atams.transaction import transaction
from app.models.webauthn_challenge import WebAuthnChallenge


class WebAuthnChallengeRepository(BaseRepository[WebAuthnChallenge]):
    def __init__(self):
        super().__init__(WebAuthnChallenge)

    def replace_challenge(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        purpose: str,
        challenge: str,
        expires_at: datetime
    ) -> Optional[WebAuthnChallenge]:
        """
        Delete any challenge for (employee, purpose) and insert the new one in one transaction.
        Returns None if a concurrent issuance inserted first.
        """
        try:
            with transaction(db):
                db.query(WebAuthnChallenge).filter(
                    WebAuthnChallenge.wc_client_id == client_id,
                    WebAuthnChallenge.wc_employee_id == employee_id,
                    WebAuthnChallenge.wc_purpose == purpose
                ).delete(synchronize_session=False)

                row = WebAuthnChallenge(
                    wc_client_id=client_id,
                    wc_employee_id=employee_id,
                    wc_purpose=purpose,
                    wc_challenge=challenge,
                    wc_expires_at=expires_at
                )
                db.add(row)
        except IntegrityError:
            # Rolled back by the transaction context
            return None

        db.refresh(row)
        return row

    def get_live(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        purpose: str,
        now: datetime
    ) -> Optional[WebAuthnChallenge]:
        return db.query(WebAuthnChallenge).filter(
            WebAuthnChallenge.wc_client_id == client_id,
            WebAuthnChallenge.wc_employee_id == employee_id,
            WebAuthnChallenge.wc_purpose == purpose,
            WebAuthnChallenge.wc_expires_at > now
        ).order_by(WebAuthnChallenge.wc_id.desc()).first()

    def consume(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        purpose: str,
        challenge: str,
        now: datetime
    ) -> bool:
        """
        Delete exactly this challenge value if still live.
        Returns False when it was already used, superseded or expired.
        """
        deleted = db.query(WebAuthnChallenge).filter(
            WebAuthnChallenge.wc_client_id == client_id,
            WebAuthnChallenge.wc_employee_id == employee_id,
            WebAuthnChallenge.wc_purpose == purpose,
            WebAuthnChallenge.wc_challenge == challenge,
            WebAuthnChallenge.wc_expires_at > now
        ).delete(synchronize_session=False)
        db.commit()
        return deleted == 1

    def delete_expired(self, db: Session, client_id: int, now: datetime) -> int:
        """Remove the tenant's expired challenges; returns count deleted"""
        deleted = db.query(WebAuthnChallenge).filter(
            WebAuthnChallenge.wc_client_id == client_id,
            WebAuthnChallenge.wc_expires_at <= now
        ).delete(synchronize_session=False)
        db.commit()
        return deleted
