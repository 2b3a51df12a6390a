"""
Token Service - Verifies bearer tokens issued by the platform auth service
"""
import jwt
from typing import Dict, Any

from app.core.config import settings
from atams.exceptions import UnauthorizedException


class TokenService:
    def __init__(self) -> None:
        self.secret = settings.JWT_SECRET
        self.algorithm = settings.JWT_ALGORITHM

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode an access token

        Args:
            token: JWT string from the Authorization header

        Returns:
            dict: Decoded payload

        Raises:
            UnauthorizedException: If token is invalid, expired or lacks a subject
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": True, "verify_aud": False}
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedException("Token expired")
        except jwt.InvalidTokenError as e:
            raise UnauthorizedException(f"Invalid token: {str(e)}")

        if payload.get("id") is None and payload.get("sub") is None:
            raise UnauthorizedException("Invalid token: missing subject")

        return payload
