from fastapi import APIRouter, Depends, Response, status
from pydantic import Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthResponse, AuthService, RegisterCommand
from src.app.use_cases.common import CamelModel
from src.depends import get_bearer_token, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])

AUTH_ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "INVALID_REFRESH_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "USERNAME_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
}


class RegisterRequest(CamelModel):
    """
    Register HTTP request payload

    Password strength and role are checked by AuthService so that both
    answer with the same VALIDATION_ERROR body.
    """

    username: str = Field(..., min_length=1, max_length=255, description="Unique username")
    password: str = Field(..., description="Password (min 8 chars, at least one digit)")
    role: str = Field(..., description="manager or customer")
    age: int = Field(..., ge=0, description="User age")


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse
)
async def register(request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Register

    Creates an account and returns an access token, a refresh token and the
    public user fields.

    Raises:
        - 400 Bad Request: Invalid role, weak password, short username
        - 409 Conflict: Username already exists
    """
    command = RegisterCommand(
        username=request.username,
        password=request.password,
        role=request.role,
        age=request.age,
    )
    result = await AuthService(uow).register(command)

    if result.is_err():
        raise_for_error(result.error, AUTH_ERROR_STATUS)

    return result.value


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(request: LoginRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Login

    Raises:
        - 401 Unauthorized: Invalid credentials (unknown user or wrong password)
        - 500 Internal Server Error: Server error
    """
    result = await AuthService(uow).login(request.username, request.password)

    if result.is_err():
        raise_for_error(result.error, AUTH_ERROR_STATUS)

    return result.value


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def refresh(request: RefreshRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Refresh Access Token

    Issues a new access token; the refresh token itself is returned unchanged.

    Raises:
        - 401 Unauthorized: Malformed, unknown, revoked or expired refresh token
    """
    result = await AuthService(uow).refresh_token(request.refresh_token)

    if result.is_err():
        raise_for_error(result.error, AUTH_ERROR_STATUS)

    return result.value


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    token: str = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout (everywhere)

    Revokes every session and refresh token of the user, not only the one
    tied to the presented access token.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token, or session already revoked
    """
    result = await AuthService(uow).logout(token)

    if result.is_err():
        raise_for_error(result.error, AUTH_ERROR_STATUS)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
