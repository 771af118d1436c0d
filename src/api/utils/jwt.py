import uuid
from datetime import UTC, datetime, timedelta
from typing import Optional, Tuple
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def create_access_token(
    user_id: UUID, role: str, session_id: UUID
) -> Tuple[str, datetime]:
    """
    Create JWT access token

    Args:
        user_id: User UUID (sub)
        role: User role (manager, customer)
        session_id: UserSession UUID (sid)

    Returns:
        JWT token string and its expiry (naive UTC)
    """
    now = datetime.now(UTC)
    expires_at = now + timedelta(seconds=ApplicationConfig.JWT_EXPIRES_IN_SEC)
    payload = {
        "sub": str(user_id),
        "role": role,
        "sid": str(session_id),
        "typ": ACCESS_TOKEN_TYPE,
        "exp": expires_at,
        "iat": now,
    }
    token = jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )
    return token, expires_at.replace(tzinfo=None)


def create_refresh_token(user_id: UUID, session_id: UUID) -> Tuple[str, datetime]:
    """
    Create JWT refresh token

    The random jti keeps two tokens issued in the same second distinct.

    Returns:
        JWT token string and its expiry (naive UTC)
    """
    now = datetime.now(UTC)
    expires_at = now + timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRES_DAYS)
    payload = {
        "sub": str(user_id),
        "sid": str(session_id),
        "jti": uuid.uuid4().hex,
        "typ": REFRESH_TOKEN_TYPE,
        "exp": expires_at,
        "iat": now,
    }
    token = jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )
    return token, expires_at.replace(tzinfo=None)


def verify_jwt(token: str, token_type: Optional[str] = None) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string
        token_type: Required "typ" claim (access or refresh), any when None

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
    except JWTError:
        return None
    if token_type is not None and payload.get("typ") != token_type:
        return None
    return payload
