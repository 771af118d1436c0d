"""
User Service

Reads users, creates them for registration and deletes them.
"""

import logging
from typing import List, Optional
from uuid import UUID

from src.app.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tickets.ticket_service import TicketService
from src.domain.entities import TicketUsageFilter, User, UserRole
from src.domain.errors import DomainValidationError, DuplicateEntryError
from src.domain.value_objects import Password
from .dtos import UserDetailResponse, UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """
    User orchestration.

    Business Rules:
    - Usernames are unique (pre-check plus unique index)
    - A user's detail view carries their full ticket history
    - Deleting a user cascades to tickets, sessions and refresh tokens in the database
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get_users(self) -> Result[List[UserResponse]]:
        async with self.uow:
            users = await self.uow.users.list_all()
            return Return.ok([UserResponse.from_entity(user) for user in users])

    async def get_user_by_id(self, user_id: UUID) -> Result[UserDetailResponse]:
        """
        Get a user with their tickets.

        Returns:
            Result[UserDetailResponse] or Error(USER_NOT_FOUND)
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(_user_not_found(user_id))

            tickets_result = await TicketService(self.uow).get_user_tickets(
                user_id, TicketUsageFilter.all
            )
            if tickets_result.is_err():
                return tickets_result

            base = UserResponse.from_entity(user)
            return Return.ok(
                UserDetailResponse(**base.model_dump(), tickets=tickets_result.value)
            )

    async def create_user(
        self,
        username: str,
        password: Password,
        age: int,
        role: UserRole = UserRole.customer,
        commit: bool = True,
    ) -> Result[User]:
        """
        Create a user.

        With commit=False the caller owns the transaction (registration creates
        the user and its first session atomically).

        Returns:
            Result[User] or Error(USERNAME_ALREADY_EXISTS | VALIDATION_ERROR)
        """
        async with self.uow:
            existing = await self.uow.users.get_by_username(username)
            if existing is not None:
                return Return.err(_username_taken(username))

            try:
                user = User.create(username=username, password=password, age=age, role=role)
                user = await self.uow.users.create(user)
            except DomainValidationError as e:
                return Return.err(Error(e.code, e.message))
            except DuplicateEntryError:
                return Return.err(_username_taken(username))

            if commit:
                await self.uow.commit()

            logger.info(f"User created: {user.id} ({user.role.value})")
            return Return.ok(user)

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Entity lookup for callers that already hold a unit-of-work scope"""
        async with self.uow:
            return await self.uow.users.get_by_id(user_id)

    async def find_by_username(self, username: str) -> Optional[User]:
        """Entity lookup for callers that already hold a unit-of-work scope"""
        async with self.uow:
            return await self.uow.users.get_by_username(username)

    async def delete_user(self, user_id: UUID) -> Result[None]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(_user_not_found(user_id))

            await self.uow.users.delete(user_id)
            await self.uow.commit()

        logger.info(f"User deleted: {user_id}")
        return Return.ok()


def _user_not_found(user_id: UUID) -> Error:
    return Error("USER_NOT_FOUND", f"User with ID {user_id} not found")


def _username_taken(username: str) -> Error:
    return Error("USERNAME_ALREADY_EXISTS", f"Username {username} already exists")
