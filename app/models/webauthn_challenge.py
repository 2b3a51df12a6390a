"""
WebAuthn Challenge Model - Short-lived ceremony challenges
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from atams.db import Base


class WebAuthnChallenge(Base):
    """WebAuthn challenge model for hris schema - Table: hris.hr_webauthn_challenges"""
    __tablename__ = "hr_webauthn_challenges"
    __table_args__ = (
        # At most one live challenge per employee and purpose
        UniqueConstraint("wc_employee_id", "wc_purpose", name="uq_hr_webauthn_challenges_employee_purpose"),
        {"schema": "hris"},
    )

    wc_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    wc_client_id = Column(Integer, nullable=False, index=True)
    wc_employee_id = Column(Integer, ForeignKey("hris.hr_employees.em_id"), nullable=False, index=True)
    wc_challenge = Column(String(255), nullable=False)  # base64url
    wc_purpose = Column(String(12), nullable=False)  # 'register' or 'authenticate'
    wc_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    wc_expires_at = Column(DateTime(timezone=True), nullable=False)
