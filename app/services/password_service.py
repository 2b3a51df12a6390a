"""
Password Service - bcrypt hashing with an explicit encoding tag
"""
import secrets
import bcrypt
from enum import Enum
from typing import Tuple

from app.core.config import settings


class CredentialEncoding(str, Enum):
    PLAIN = "plain"    # legacy rows imported before hashing was enforced
    HASHED = "hashed"


class PasswordService:
    def __init__(self, rounds: int = None) -> None:
        self.rounds = rounds or settings.BCRYPT_ROUNDS

    def encode(self, password: str) -> Tuple[str, CredentialEncoding]:
        """Hash a password for storage; returns the stored value and its tag"""
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8"), CredentialEncoding.HASHED

    def verify(self, password: str, stored: str, encoding: str) -> bool:
        """
        Check a password against a stored value using the tag written beside it

        Login happens in the platform auth service, which reads the same
        hr_employees rows; this is the check it applies. Rows tagged plain
        come from imports made before hashing was enforced.
        """
        if CredentialEncoding(encoding) == CredentialEncoding.HASHED:
            return bcrypt.checkpw(password.encode("utf-8"), stored.encode("utf-8"))
        return secrets.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))

    def generate(self) -> str:
        """Random password handed to an employee after a reset"""
        return secrets.token_urlsafe(6)
