from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.movie_repository import MovieRepository
from src.adapter.repositories.movie_session_repository import MovieSessionRepository
from src.adapter.repositories.refresh_token_repository import RefreshTokenRepository
from src.adapter.repositories.ticket_repository import TicketRepository
from src.adapter.repositories.user_repository import UserRepository
from src.adapter.repositories.user_session_repository import UserSessionRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._depth = 0

    async def __aenter__(self):
        if self._depth == 0:
            # Initialize all repositories with the session
            self.users = UserRepository(self.session)
            self.movies = MovieRepository(self.session)
            self.movie_sessions = MovieSessionRepository(self.session)
            self.tickets = TicketRepository(self.session)
            self.refresh_tokens = RefreshTokenRepository(self.session)
            self.user_sessions = UserSessionRepository(self.session)
        self._depth += 1
        return self

    async def __aexit__(self, *args):
        self._depth -= 1
        # Nested scopes (UserService -> TicketService) share the outer transaction
        if self._depth == 0:
            await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
