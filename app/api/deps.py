"""
API Dependencies
Bearer token authentication and capability checks
"""
from dataclasses import dataclass
from typing import Optional, FrozenSet

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.permissions import Capability, capabilities_for
from app.services.token_service import TokenService
from atams.exceptions import UnauthorizedException, ForbiddenException

security = HTTPBearer(auto_error=False)
token_service = TokenService()


@dataclass(frozen=True)
class CurrentUser:
    user_id: int
    role: str
    user_type: Optional[str]
    client_id: int
    hr_employee_id: Optional[int] = None

    @property
    def capabilities(self) -> FrozenSet[Capability]:
        return capabilities_for(self.role, self.user_type)

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def employee_id(self) -> int:
        """Employee the token acts for; only employee tokens carry one"""
        if self.hr_employee_id is None:
            raise ForbiddenException("Token is not bound to an HR employee")
        return self.hr_employee_id


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """
    Verify the bearer token and build the caller's tenant context

    Raises:
        UnauthorizedException: Missing or invalid token
        ForbiddenException: Token carries no tenant
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("No token provided")

    payload = token_service.verify_token(credentials.credentials)

    if payload.get("client_id") is None:
        raise ForbiddenException("Token has no tenant")

    hr_employee_id = payload.get("hr_employee_id")
    return CurrentUser(
        user_id=int(payload.get("id") or payload.get("sub")),
        role=payload.get("role") or "",
        user_type=payload.get("type"),
        client_id=int(payload["client_id"]),
        hr_employee_id=int(hr_employee_id) if hr_employee_id is not None else None,
    )


def require_capability(*capabilities: Capability):
    """
    Route dependency: caller must hold at least one of the capabilities

    Usage:
        @router.get("/", dependencies=[Depends(require_capability(Capability.VIEW_ATTENDANCE))])
    """
    def checker(current_user: CurrentUser = Depends(require_auth)) -> CurrentUser:
        if not any(current_user.can(c) for c in capabilities):
            raise ForbiddenException("Insufficient permissions")
        return current_user

    return checker


__all__ = [
    "CurrentUser",
    "require_auth",
    "require_capability",
]
