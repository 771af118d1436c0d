"""
Auth Service

Registration, login, access-token refresh and logout.
"""

import logging
from datetime import timedelta
from uuid import UUID

import bcrypt

from config import ApplicationConfig
from src.api.utils.jwt import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    verify_jwt,
)
from src.app.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.user_service import UserService
from src.domain.base import utc_now
from src.domain.entities import RefreshToken, User, UserRole, UserSession
from src.domain.errors import DomainError, DomainValidationError, InvalidTokenError
from src.domain.value_objects import Password, Token
from .dtos import AuthResponse, AuthUserInfo, RegisterCommand

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication orchestration.

    Business Rules:
    - Register and login open a UserSession (7 days) and store a refresh token bound to it
    - Access tokens carry {sub, role, sid} and live JWT_EXPIRES_IN_SEC
    - Login failures never reveal whether the username exists
    - Refresh issues a new access token only; the refresh token is unchanged
    - Logout revokes every session and refresh token of the user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.users = UserService(uow)

    async def register(self, command: RegisterCommand) -> Result[AuthResponse]:
        """
        Create an account and sign it in.

        Returns:
            Result[AuthResponse] or Error(VALIDATION_ERROR | USERNAME_ALREADY_EXISTS)
        """
        username = command.username.strip()
        if len(username) < ApplicationConfig.MIN_USERNAME_LENGTH:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"Username must be at least {ApplicationConfig.MIN_USERNAME_LENGTH} characters",
                )
            )

        try:
            role = UserRole.from_value(command.role)
            password = Password.from_plain(command.password)
        except DomainValidationError as e:
            return Return.err(Error(e.code, e.message))

        async with self.uow:
            result = await self.users.create_user(
                username=username,
                password=password,
                age=command.age,
                role=role,
                commit=False,
            )
            if result.is_err():
                logger.warning(f"Registration rejected: {result.error.code}")
                return result

            response = await self._open_session(result.value)
            await self.uow.commit()

        logger.info(f"User registered: {response.user.id} ({response.user.role})")
        return Return.ok(response)

    async def login(self, username: str, password: str) -> Result[AuthResponse]:
        """
        Authenticate with username and password.

        Returns:
            Result[AuthResponse] or Error(INVALID_CREDENTIALS | LOGIN_FAILED)
        """
        invalid = Error("INVALID_CREDENTIALS", "Invalid credentials")
        try:
            async with self.uow:
                user = await self.users.find_by_username(username)

                # Constant-time password verification (prevent timing attacks)
                if user is None:
                    bcrypt.checkpw(
                        b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
                    )
                    return Return.err(invalid)

                if not user.password.compare(password):
                    return Return.err(invalid)

                response = await self._open_session(user)
                await self.uow.commit()
        except DomainError as e:
            logger.warning(f"Login rejected: {e.code}")
            return Return.err(invalid)
        except Exception:
            logger.exception("Login failed")
            return Return.err(Error("LOGIN_FAILED", "Login failed"))

        logger.info(f"User logged in: {response.user.id}")
        return Return.ok(response)

    async def refresh_token(self, refresh_token: str) -> Result[AuthResponse]:
        """
        Issue a new access token for a stored, active refresh token.

        Malformed, unknown, revoked and expired tokens all answer
        INVALID_REFRESH_TOKEN, as does a token whose user is gone.
        """
        invalid = Error("INVALID_REFRESH_TOKEN", "Invalid or expired refresh token")
        try:
            token = Token(refresh_token)
        except InvalidTokenError:
            return Return.err(invalid)

        async with self.uow:
            stored = await self.uow.refresh_tokens.get_by_token(token.value)
            if stored is None or not stored.is_valid(utc_now()):
                return Return.err(invalid)

            user = await self.users.find_by_id(stored.user_id)
            if user is None:
                return Return.err(invalid)

            access_token, expires_at = create_access_token(
                user.id, user.role.value, stored.session_id
            )
            return Return.ok(
                AuthResponse(
                    access_token=access_token,
                    refresh_token=token.value,
                    expires_at=expires_at,
                    user=_user_info(user),
                )
            )

    async def logout(self, access_token: str) -> Result[None]:
        """
        Revoke all sessions and refresh tokens of the token's user.

        Returns:
            Result[None] or Error(INVALID_TOKEN)
        """
        invalid = Error("INVALID_TOKEN", "Invalid or expired token")
        payload = verify_jwt(access_token, ACCESS_TOKEN_TYPE)
        if payload is None:
            return Return.err(invalid)

        try:
            user_id = UUID(payload["sub"])
            session_id = UUID(payload["sid"])
        except (KeyError, TypeError, ValueError):
            return Return.err(invalid)

        async with self.uow:
            user_session = await self.uow.user_sessions.get_by_id(session_id)
            if (
                user_session is None
                or user_session.is_revoked
                or user_session.user_id != user_id
            ):
                return Return.err(invalid)

            now = utc_now()
            tokens = await self.uow.refresh_tokens.revoke_all_by_user_id(user_id, now)
            sessions = await self.uow.user_sessions.revoke_all_by_user_id(user_id, now)
            await self.uow.commit()

        logger.info(
            f"User logged out: {user_id} (sessions={sessions}, refresh_tokens={tokens})"
        )
        return Return.ok()

    async def _open_session(self, user: User) -> AuthResponse:
        user_session = await self.uow.user_sessions.create(
            UserSession.create(
                user.id, timedelta(days=ApplicationConfig.USER_SESSION_EXPIRES_DAYS)
            )
        )

        refresh_token, refresh_expires_at = create_refresh_token(user.id, user_session.id)
        await self.uow.refresh_tokens.create(
            RefreshToken.create(
                token=Token(refresh_token),
                user_id=user.id,
                session_id=user_session.id,
                expires_at=refresh_expires_at,
            )
        )

        access_token, expires_at = create_access_token(
            user.id, user.role.value, user_session.id
        )
        return AuthResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=expires_at,
            user=_user_info(user),
        )


def _user_info(user: User) -> AuthUserInfo:
    return AuthUserInfo(
        id=str(user.id), username=user.username, role=user.role.value, age=user.age
    )
