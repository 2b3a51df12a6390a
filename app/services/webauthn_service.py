"""
WebAuthn Service - Biometric registration and authentication ceremonies
"""
import json
from typing import Any, Dict, List
from sqlalchemy.orm import Session

from webauthn import (
    generate_registration_options,
    verify_registration_response,
    generate_authentication_options,
    verify_authentication_response,
    options_to_json,
)
from webauthn.helpers import base64url_to_bytes, bytes_to_base64url
from webauthn.helpers.exceptions import WebAuthnException
from webauthn.helpers.structs import (
    AttestationConveyancePreference,
    AuthenticatorAttachment,
    AuthenticatorSelectionCriteria,
    AuthenticatorTransport,
    PublicKeyCredentialDescriptor,
    ResidentKeyRequirement,
    UserVerificationRequirement,
)

from app.core.config import settings
from app.core.exceptions import NoBiometric, CredentialNotFound, VerificationFailed
from app.models.biometric_credential import BiometricCredential
from app.models.employee import Employee
from app.repositories.employee_repository import EmployeeRepository
from app.repositories.biometric_credential_repository import BiometricCredentialRepository
from app.schemas.webauthn import RegistrationVerifyRequest, AuthenticationVerifyRequest, VerificationResponse
from app.services.challenge_service import ChallengeService, REGISTER, AUTHENTICATE
from atams.exceptions import NotFoundException, ConflictException
from atams.logging import get_logger

logger = get_logger(__name__)


def _parse_transports(values) -> List[AuthenticatorTransport]:
    transports = []
    for value in values or []:
        try:
            transports.append(AuthenticatorTransport(value))
        except ValueError:
            # Browsers report transports this library does not know yet
            continue
    return transports


class WebAuthnService:
    def __init__(self) -> None:
        self.employee_repo = EmployeeRepository()
        self.credential_repo = BiometricCredentialRepository()
        self.challenges = ChallengeService()
        self.timeout_ms = settings.WEBAUTHN_CHALLENGE_TTL_SECONDS * 1000

    def _get_employee(self, db: Session, client_id: int, employee_id: int) -> Employee:
        employee = self.employee_repo.get_tenant_employee(db, client_id, employee_id)
        if not employee:
            raise NotFoundException("Employee not found")
        return employee

    def _descriptor(self, credential: BiometricCredential, default_transports=None) -> PublicKeyCredentialDescriptor:
        return PublicKeyCredentialDescriptor(
            id=base64url_to_bytes(credential.bc_credential_id),
            transports=_parse_transports(credential.bc_transports or default_transports)
        )

    def registration_options(self, db: Session, client_id: int, employee_id: int) -> Dict[str, Any]:
        """
        Build PublicKeyCredentialCreationOptions for a platform authenticator
        and store the challenge
        """
        employee = self._get_employee(db, client_id, employee_id)
        existing = self.credential_repo.get_for_employee(db, client_id, employee_id)

        options = generate_registration_options(
            rp_id=settings.WEBAUTHN_RP_ID,
            rp_name=settings.WEBAUTHN_RP_NAME,
            user_id=str(employee.em_id).encode("utf-8"),
            user_name=employee.em_username,
            user_display_name=employee.em_full_name,
            timeout=self.timeout_ms,
            attestation=AttestationConveyancePreference.NONE,
            authenticator_selection=AuthenticatorSelectionCriteria(
                authenticator_attachment=AuthenticatorAttachment.PLATFORM,
                resident_key=ResidentKeyRequirement.DISCOURAGED,
                user_verification=UserVerificationRequirement.REQUIRED,
            ),
            exclude_credentials=[self._descriptor(c) for c in existing],
        )

        self.challenges.issue(db, client_id, employee_id, REGISTER, bytes_to_base64url(options.challenge))
        return json.loads(options_to_json(options))

    def verify_registration(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        request: RegistrationVerifyRequest
    ) -> VerificationResponse:
        """
        Verify an attestation and store the new credential

        Raises:
            ChallengeExpired: No live registration challenge, or it was used meanwhile
            VerificationFailed: Attestation rejected
            ConflictException: Credential id is already registered
        """
        challenge = self.challenges.get_live(db, client_id, employee_id, REGISTER)

        try:
            verification = verify_registration_response(
                credential=request.credential(),
                expected_challenge=base64url_to_bytes(challenge.wc_challenge),
                expected_rp_id=settings.WEBAUTHN_RP_ID,
                expected_origin=settings.WEBAUTHN_ORIGIN,
                require_user_verification=True,
            )
        except WebAuthnException as e:
            logger.warning(
                "Registration verification failed",
                extra={'extra_data': {"employee_id": employee_id, "reason": str(e)}}
            )
            raise VerificationFailed()

        credential_id = bytes_to_base64url(verification.credential_id)
        if self.credential_repo.credential_id_exists(db, credential_id):
            # Authenticator ignored excludeCredentials; the challenge stays usable
            raise ConflictException("Credential already registered")

        self.challenges.consume(db, client_id, employee_id, REGISTER, challenge.wc_challenge)

        device_type = getattr(verification.credential_device_type, "value", verification.credential_device_type)
        credential = self.credential_repo.insert_credential(db, {
            "bc_client_id": client_id,
            "bc_employee_id": employee_id,
            "bc_credential_id": credential_id,
            "bc_public_key": bytes_to_base64url(verification.credential_public_key),
            "bc_counter": verification.sign_count,
            "bc_transports": request.response.get("transports") or [],
            "bc_device_name": request.deviceName or device_type or "Unknown",
        })
        if credential is None:
            raise ConflictException("Credential already registered")

        logger.info(
            "Biometric credential registered",
            extra={'extra_data': {"client_id": client_id, "employee_id": employee_id, "bc_id": credential.bc_id}}
        )
        return VerificationResponse(verified=True)

    def authentication_options(self, db: Session, client_id: int, employee_id: int) -> Dict[str, Any]:
        """
        Raises:
            NoBiometric: Employee has no registered credential
        """
        credentials = self.credential_repo.get_for_employee(db, client_id, employee_id)
        if not credentials:
            raise NoBiometric()

        options = generate_authentication_options(
            rp_id=settings.WEBAUTHN_RP_ID,
            timeout=self.timeout_ms,
            allow_credentials=[self._descriptor(c, default_transports=["internal"]) for c in credentials],
            user_verification=UserVerificationRequirement.REQUIRED,
        )

        self.challenges.issue(db, client_id, employee_id, AUTHENTICATE, bytes_to_base64url(options.challenge))
        return json.loads(options_to_json(options))

    def verify_authentication(
        self,
        db: Session,
        client_id: int,
        employee_id: int,
        request: AuthenticationVerifyRequest
    ) -> VerificationResponse:
        """
        Verify an assertion against a stored credential

        Raises:
            ChallengeExpired: No live authentication challenge, or it was used meanwhile
            CredentialNotFound: Credential id is not registered to this employee
            VerificationFailed: Assertion rejected, or a concurrent assertion advanced the counter first
        """
        challenge = self.challenges.get_live(db, client_id, employee_id, AUTHENTICATE)

        credential = self.credential_repo.get_by_credential_id(db, client_id, employee_id, request.id)
        if not credential:
            raise CredentialNotFound()

        try:
            verification = verify_authentication_response(
                credential=request.credential(),
                expected_challenge=base64url_to_bytes(challenge.wc_challenge),
                expected_rp_id=settings.WEBAUTHN_RP_ID,
                expected_origin=settings.WEBAUTHN_ORIGIN,
                credential_public_key=base64url_to_bytes(credential.bc_public_key),
                credential_current_sign_count=credential.bc_counter,
                require_user_verification=True,
            )
        except WebAuthnException as e:
            logger.warning(
                "Authentication verification failed",
                extra={'extra_data': {"employee_id": employee_id, "bc_id": credential.bc_id, "reason": str(e)}}
            )
            raise VerificationFailed()

        self.challenges.consume(db, client_id, employee_id, AUTHENTICATE, challenge.wc_challenge)

        if not self.credential_repo.advance_counter(db, credential.bc_id, verification.new_sign_count):
            # A concurrent assertion stored a higher counter first
            logger.warning(
                "Stored sign counter ahead of authenticator",
                extra={'extra_data': {"bc_id": credential.bc_id, "new_sign_count": verification.new_sign_count}}
            )
            raise VerificationFailed()

        return VerificationResponse(verified=True)
