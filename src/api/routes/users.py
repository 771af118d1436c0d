from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.error import ClientError, raise_for_error
from src.api.routes.tickets import TICKET_ERROR_STATUS
from src.api.utils.roles import require_roles
from src.app.result import Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tickets import TicketResponse, TicketService
from src.app.use_cases.users import UserDetailResponse, UserResponse, UserService
from src.depends import get_current_user, get_unit_of_work
from src.domain.entities import TicketUsageFilter, UserRole

router = APIRouter(prefix="/users", tags=["Users"])

manager_only = [Depends(require_roles(UserRole.manager))]

USER_ERROR_STATUS = {
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=List[UserResponse],
    dependencies=manager_only,
)
async def get_users(uow: UnitOfWork = Depends(get_unit_of_work)):
    """List all Users (manager)"""
    result = await UserService(uow).get_users()

    if result.is_err():
        raise_for_error(result.error, USER_ERROR_STATUS)

    return result.value


@router.get(
    "/{user_id}", status_code=status.HTTP_200_OK, response_model=UserDetailResponse
)
async def get_user(
    user_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get User with ticket history

    Authorization:
    - Managers can view any user
    - Customers can only view themselves

    Raises:
        - 403 Forbidden: Customer viewing another user
        - 404 Not Found: User not found
    """
    if (
        current_user["role"] != UserRole.manager.value
        and current_user["user_id"] != str(user_id)
    ):
        raise ClientError(
            Error("FORBIDDEN", "You can only view your own account"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    result = await UserService(uow).get_user_by_id(user_id)

    if result.is_err():
        raise_for_error(result.error, USER_ERROR_STATUS)

    return result.value


@router.get(
    "/{user_id}/tickets",
    status_code=status.HTTP_200_OK,
    response_model=List[TicketResponse],
    dependencies=manager_only,
)
async def get_user_tickets(
    user_id: UUID,
    filter_by_use: TicketUsageFilter = Query(TicketUsageFilter.all, alias="filterByUse"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    A User's Tickets (manager)

    Raises:
        - 404 Not Found: User not found
    """
    result = await TicketService(uow).get_user_tickets(user_id, filter_by_use)

    if result.is_err():
        raise_for_error(result.error, TICKET_ERROR_STATUS)

    return result.value


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=manager_only
)
async def delete_user(user_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Delete User (manager)

    Tickets, sessions and refresh tokens of the user are deleted with it.

    Raises:
        - 404 Not Found: User not found
    """
    result = await UserService(uow).delete_user(user_id)

    if result.is_err():
        raise_for_error(result.error, USER_ERROR_STATUS)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
