"""
Biometric Credential Model - Registered WebAuthn authenticators
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func
from atams.db import Base


class BiometricCredential(Base):
    """Biometric credential model for hris schema - Table: hris.hr_biometric_credentials"""
    __tablename__ = "hr_biometric_credentials"
    __table_args__ = {"schema": "hris"}

    bc_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    bc_client_id = Column(Integer, nullable=False, index=True)
    bc_employee_id = Column(Integer, ForeignKey("hris.hr_employees.em_id"), nullable=False, index=True)
    bc_credential_id = Column(String(512), nullable=False, unique=True, index=True)  # base64url
    bc_public_key = Column(Text, nullable=False)  # base64url COSE key
    bc_counter = Column(Integer, nullable=False, default=0)
    bc_transports = Column(JSON, nullable=True)
    bc_device_name = Column(String(255), nullable=True)
    bc_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
