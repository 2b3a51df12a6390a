"""
HR Domain Exceptions

Every user-correctable attendance / biometric condition is an AppException
carrying a stable error code in ``details["error"]`` so clients can branch on it:

    {"success": false, "message": "...", "details": {"error": "OUTSIDE_RANGE", "distance": 412, "limit": 100}}
"""
from typing import Optional, Any, Dict
from fastapi import status

from atams.exceptions import AppException


class HrDomainException(AppException):
    """Base class for coded HR errors"""

    code: str = "HR_ERROR"
    http_status: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request could not be processed"

    def __init__(self, message: Optional[str] = None, **details: Any):
        payload: Dict[str, Any] = {"error": self.code}
        payload.update(details)
        super().__init__(message or self.default_message, self.http_status, payload)


class LocationRequired(HrDomainException):
    code = "GPS_REQUIRED"
    default_message = "Location is required"


class NoClinicLocation(HrDomainException):
    code = "NO_CLINIC_LOCATION"
    default_message = "No clinic location configured. Ask admin to set clinic location."


class OutsideRange(HrDomainException):
    code = "OUTSIDE_RANGE"

    def __init__(self, clinic_name: str, distance: int, limit: int):
        super().__init__(
            f"You are {distance}m from {clinic_name}. Max allowed: {limit}m.",
            distance=distance,
            limit=limit,
        )
        self.distance = distance
        self.limit = limit


class NoBiometric(HrDomainException):
    code = "NO_BIOMETRIC"
    default_message = "Register biometrics first"


class AlreadyCheckedIn(HrDomainException):
    code = "ALREADY_CHECKED_IN"
    http_status = status.HTTP_409_CONFLICT
    default_message = "Already checked in today"


class AlreadyCheckedOut(HrDomainException):
    code = "ALREADY_CHECKED_OUT"
    http_status = status.HTTP_409_CONFLICT
    default_message = "Already checked out today"


class NotCheckedIn(HrDomainException):
    code = "NOT_CHECKED_IN"
    default_message = "Must check in first"


class ChallengeExpired(HrDomainException):
    code = "CHALLENGE_EXPIRED"
    default_message = "Challenge expired"


class CredentialNotFound(HrDomainException):
    code = "CREDENTIAL_NOT_FOUND"
    default_message = "Credential not found"


class VerificationFailed(HrDomainException):
    code = "VERIFICATION_FAILED"
    default_message = "Biometric verification failed"
