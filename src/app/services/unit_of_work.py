from abc import ABC, abstractmethod

from src.app.repositories.movie_repository import IMovieRepository
from src.app.repositories.movie_session_repository import IMovieSessionRepository
from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.app.repositories.ticket_repository import ITicketRepository
from src.app.repositories.user_repository import IUserRepository
from src.app.repositories.user_session_repository import IUserSessionRepository


class UnitOfWork(ABC):
    """
    Abstract UnitOfWork - defines repository access and transaction management.

    `async with uow:` opens the transactional scope. Work is kept only if
    commit() is called inside it; leaving the outermost scope rolls back
    everything else. Nested scopes share the outer transaction.
    """

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    movies: IMovieRepository
    movie_sessions: IMovieSessionRepository
    tickets: ITicketRepository
    refresh_tokens: IRefreshTokenRepository
    user_sessions: IUserSessionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
