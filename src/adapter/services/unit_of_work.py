from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.user_repository import UserRepository
from src.adapter.services.db_errors import translate_db_errors
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        self.users = UserRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # No-op after a successful commit; discards flushed work otherwise
        await self.rollback()

    async def commit(self):
        with translate_db_errors():
            await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
