"""
WebAuthn ceremony schemas
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class RegistrationVerifyRequest(BaseModel):
    """Body of navigator.credentials.create() plus an optional device label"""
    model_config = ConfigDict(extra="allow")

    id: str
    rawId: str
    type: str = "public-key"
    response: Dict[str, Any]
    deviceName: Optional[str] = Field(None, max_length=255)

    def credential(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"deviceName"}, exclude_none=True)


class AuthenticationVerifyRequest(BaseModel):
    """Body of navigator.credentials.get()"""
    model_config = ConfigDict(extra="allow")

    id: str
    rawId: str
    type: str = "public-key"
    response: Dict[str, Any]

    def credential(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class VerificationResponse(BaseModel):
    verified: bool
