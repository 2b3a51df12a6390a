"""
WebAuthn Endpoints - Biometric registration and authentication ceremonies
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, Dict

from app.db.session import get_db
from app.services.webauthn_service import WebAuthnService
from app.schemas import (
    RegistrationVerifyRequest,
    AuthenticationVerifyRequest,
    VerificationResponse,
    DataResponse
)
from app.api.deps import CurrentUser, require_auth, require_capability
from app.core.permissions import Capability

router = APIRouter(dependencies=[Depends(require_capability(Capability.MANAGE_BIOMETRICS))])
webauthn_service = WebAuthnService()


@router.post(
    "/register/options",
    response_model=DataResponse[Dict[str, Any]],
    status_code=status.HTTP_200_OK
)
async def registration_options(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Start biometric registration

    **Authorization:**
    - HR employee only

    **Response:**
    - PublicKeyCredentialCreationOptions (JSON) for navigator.credentials.create()
    """
    options = webauthn_service.registration_options(
        db, current_user.client_id, current_user.employee_id()
    )

    return DataResponse(
        success=True,
        message="Registration options generated",
        data=options
    )


@router.post(
    "/register/verify",
    response_model=DataResponse[VerificationResponse],
    status_code=status.HTTP_200_OK
)
async def verify_registration(
    request: RegistrationVerifyRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Finish biometric registration

    **Errors:**
    - 400: CHALLENGE_EXPIRED, VERIFICATION_FAILED
    """
    result = webauthn_service.verify_registration(
        db, current_user.client_id, current_user.employee_id(), request
    )

    return DataResponse(
        success=True,
        message="Biometric registered",
        data=result
    )


@router.post(
    "/authenticate/options",
    response_model=DataResponse[Dict[str, Any]],
    status_code=status.HTTP_200_OK
)
async def authentication_options(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Start biometric authentication

    **Errors:**
    - 400: NO_BIOMETRIC
    """
    options = webauthn_service.authentication_options(
        db, current_user.client_id, current_user.employee_id()
    )

    return DataResponse(
        success=True,
        message="Authentication options generated",
        data=options
    )


@router.post(
    "/authenticate/verify",
    response_model=DataResponse[VerificationResponse],
    status_code=status.HTTP_200_OK
)
async def verify_authentication(
    request: AuthenticationVerifyRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Finish biometric authentication

    **Errors:**
    - 400: CHALLENGE_EXPIRED, CREDENTIAL_NOT_FOUND, VERIFICATION_FAILED
    """
    result = webauthn_service.verify_authentication(
        db, current_user.client_id, current_user.employee_id(), request
    )

    return DataResponse(
        success=True,
        message="Biometric verified",
        data=result
    )
