from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import Field

from src.api.error import ClientError, raise_for_error
from src.api.utils.roles import require_roles
from src.app.result import Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import CamelModel
from src.app.use_cases.tickets import TicketResponse, TicketService
from src.depends import get_current_user, get_unit_of_work
from src.domain.entities import TicketUsageFilter, UserRole

router = APIRouter(prefix="/tickets", tags=["Tickets"])

manager_only = [Depends(require_roles(UserRole.manager))]

TICKET_ERROR_STATUS = {
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "MOVIE_SESSION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TICKET_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TICKET_ALREADY_PURCHASED": status.HTTP_409_CONFLICT,
    "TICKET_ALREADY_USED": status.HTTP_409_CONFLICT,
}


class BuyTicketRequest(CamelModel):
    user_id: UUID = Field(..., description="Buyer; must be the authenticated user")
    session_id: UUID = Field(..., description="Movie session")


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=List[TicketResponse],
    dependencies=manager_only,
)
async def get_tickets(uow: UnitOfWork = Depends(get_unit_of_work)):
    """List all Tickets (manager)"""
    result = await TicketService(uow).get_tickets()

    if result.is_err():
        raise_for_error(result.error, TICKET_ERROR_STATUS)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TicketResponse)
async def buy_ticket(
    request: BuyTicketRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Buy Ticket

    Users can only buy tickets for their own account.

    Raises:
        - 403 Forbidden: userId is not the authenticated user
        - 404 Not Found: User or session not found
        - 409 Conflict: Ticket already purchased for this session
    """
    if str(request.user_id) != current_user["user_id"]:
        raise ClientError(
            Error("FORBIDDEN", "Users can only buy tickets for their own account"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    result = await TicketService(uow).buy_ticket(request.user_id, request.session_id)

    if result.is_err():
        raise_for_error(result.error, TICKET_ERROR_STATUS)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=List[TicketResponse])
async def get_my_tickets(
    filter_by_use: TicketUsageFilter = Query(TicketUsageFilter.all, alias="filterByUse"),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """My Tickets (all, used, unused)"""
    result = await TicketService(uow).get_user_tickets(
        UUID(current_user["user_id"]), filter_by_use
    )

    if result.is_err():
        raise_for_error(result.error, TICKET_ERROR_STATUS)

    return result.value


@router.post(
    "/{ticket_id}/use",
    status_code=status.HTTP_200_OK,
    response_model=TicketResponse,
    dependencies=manager_only,
)
async def use_ticket(ticket_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Use Ticket (manager)

    Raises:
        - 404 Not Found: Ticket not found
        - 409 Conflict: Ticket already used
    """
    result = await TicketService(uow).use_ticket(ticket_id)

    if result.is_err():
        raise_for_error(result.error, TICKET_ERROR_STATUS)

    return result.value


@router.delete(
    "/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=manager_only
)
async def delete_ticket(ticket_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Delete Ticket (manager)

    Raises:
        - 404 Not Found: Ticket not found
    """
    result = await TicketService(uow).delete_ticket(ticket_id)

    if result.is_err():
        raise_for_error(result.error, TICKET_ERROR_STATUS)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
