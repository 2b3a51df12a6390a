"""
Biometric Credential Repository - Registered WebAuthn authenticators
"""
from typing import Optional, List, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from atams.db import BaseRepository
from app.models.biometric_credential import BiometricCredential


class BiometricCredentialRepository(BaseRepository[BiometricCredential]):
    def __init__(self):
        super().__init__(BiometricCredential)

    def count_for_employee(self, db: Session, client_id: int, employee_id: int) -> int:
        """Count an employee's credentials using native SQL"""
        query = """
            SELECT COUNT(*)
            FROM hris.hr_biometric_credentials
            WHERE bc_client_id = :client_id AND bc_employee_id = :employee_id
        """
        return self.execute_raw_sql_scalar(db, query, {"client_id": client_id, "employee_id": employee_id}) or 0

    def get_for_employee(self, db: Session, client_id: int, employee_id: int) -> List[BiometricCredential]:
        return db.query(BiometricCredential).filter(
            BiometricCredential.bc_client_id == client_id,
            BiometricCredential.bc_employee_id == employee_id
        ).order_by(BiometricCredential.bc_id.asc()).all()

    def get_registered_employee_ids(self, db: Session, client_id: int) -> set:
        rows = db.query(BiometricCredential.bc_employee_id).filter(
            BiometricCredential.bc_client_id == client_id
        ).distinct().all()
        return {row[0] for row in rows}

    def get_by_credential_id(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        credential_id: str
    ) -> Optional[BiometricCredential]:
        return db.query(BiometricCredential).filter(
            BiometricCredential.bc_client_id == client_id,
            BiometricCredential.bc_employee_id == employee_id,
            BiometricCredential.bc_credential_id == credential_id
        ).first()

    def credential_id_exists(self, db: Session, credential_id: str) -> bool:
        """Credential ids are globally unique, whichever tenant registered them"""
        return db.query(BiometricCredential.bc_id).filter(
            BiometricCredential.bc_credential_id == credential_id
        ).first() is not None

    def insert_credential(self, db: Session, credential_data: Dict[str, Any]) -> Optional[BiometricCredential]:
        """
        Store a newly registered credential.
        Returns None if the credential id is already registered.
        """
        try:
            credential = BiometricCredential(**credential_data)
            db.add(credential)
            db.commit()
        except IntegrityError:
            db.rollback()
            return None

        db.refresh(credential)
        return credential

    def advance_counter(self, db: Session, credential_pk: int, new_counter: int) -> bool:
        """
        Store the authenticator's new sign counter.
        The counter never moves backward; returns False when the stored value is higher.
        """
        updated = db.query(BiometricCredential).filter(
            BiometricCredential.bc_id == credential_pk,
            BiometricCredential.bc_counter <= new_counter
        ).update({BiometricCredential.bc_counter: new_counter}, synchronize_session=False)
        db.commit()
        return updated == 1
