"""
Domain Value Objects

Password and Token wrap primitive validation and formatting rules.
"""

import re

import bcrypt

from config import ApplicationConfig
from src.domain.errors import InvalidPasswordError, InvalidTokenError

_DIGIT = re.compile(r"\d")
# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


class Password:
    """
    Bcrypt-hashed password.

    Business Rules:
    - Plain passwords need MIN_PASSWORD_LENGTH characters and at least one digit
    - Plain passwords are at most MAX_PASSWORD_BYTES bytes once UTF-8 encoded
    - Only the hash is ever kept
    """

    def __init__(self, hashed: str):
        self._hashed = hashed

    @classmethod
    def from_plain(cls, plain: str) -> "Password":
        if not cls.is_valid(plain):
            raise InvalidPasswordError(
                f"Password must be at least {ApplicationConfig.MIN_PASSWORD_LENGTH} "
                f"characters, at most {MAX_PASSWORD_BYTES} bytes and contain a number"
            )
        hashed = bcrypt.hashpw(
            plain.encode("utf-8"), bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
        )
        return cls(hashed.decode("utf-8"))

    @classmethod
    def from_hashed(cls, hashed: str) -> "Password":
        if not hashed or not isinstance(hashed, str):
            raise InvalidPasswordError("Invalid hashed password")
        return cls(hashed)

    @staticmethod
    def is_valid(plain: str) -> bool:
        return (
            isinstance(plain, str)
            and len(plain) >= ApplicationConfig.MIN_PASSWORD_LENGTH
            and len(plain.encode("utf-8")) <= MAX_PASSWORD_BYTES
            and _DIGIT.search(plain) is not None
        )

    def compare(self, plain: str) -> bool:
        try:
            return bcrypt.checkpw(plain.encode("utf-8"), self._hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    @property
    def value(self) -> str:
        return self._hashed


class Token:
    """JWT-shaped token: three dot-separated segments"""

    def __init__(self, token: str):
        if not Token.is_valid(token):
            raise InvalidTokenError("Invalid token format")
        self._token = token

    @staticmethod
    def is_valid(token: str) -> bool:
        return isinstance(token, str) and len(token.split(".")) == 3

    @property
    def value(self) -> str:
        return self._token

    def __eq__(self, other) -> bool:
        return isinstance(other, Token) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self._token)
