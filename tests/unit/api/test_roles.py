from uuid import uuid4

import pytest

from src.api.error import ClientError, ServerError, raise_for_error
from src.api.utils.roles import require_roles
from src.app.result import Error
from src.domain.entities import UserRole


def _current_user(role: str) -> dict:
    return {"user_id": str(uuid4()), "role": role, "session_id": str(uuid4())}


@pytest.mark.asyncio
async def test_allowed_role_passes_through():
    verify_role = require_roles(UserRole.manager)
    current_user = _current_user("manager")

    assert await verify_role(current_user) == current_user


@pytest.mark.asyncio
@pytest.mark.parametrize("role", ["customer", None, "admin"])
async def test_other_roles_are_forbidden(role):
    verify_role = require_roles(UserRole.manager)

    with pytest.raises(ClientError) as exc:
        await verify_role(_current_user(role))

    assert exc.value.status_code == 403
    assert exc.value.base_error.code == "FORBIDDEN"


@pytest.mark.asyncio
async def test_multiple_roles():
    verify_role = require_roles(UserRole.manager, UserRole.customer)

    assert await verify_role(_current_user("customer"))


def test_raise_for_error_maps_code():
    with pytest.raises(ClientError) as exc:
        raise_for_error(Error("MOVIE_NOT_FOUND", "missing"), {"MOVIE_NOT_FOUND": 404})

    assert exc.value.status_code == 404
    assert exc.value.base_error.message == "missing"


def test_raise_for_error_unknown_code_is_server_error():
    with pytest.raises(ServerError):
        raise_for_error(Error("SOMETHING_ELSE", "boom"), {"MOVIE_NOT_FOUND": 404})
