from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.db_errors import translate_db_errors
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        with translate_db_errors():
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        with translate_db_errors():
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        with translate_db_errors():
            await self.session.flush()
            await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        with translate_db_errors():
            await self.session.flush()
            await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """Hard-delete a user"""
        with translate_db_errors():
            await self.session.delete(user)
            await self.session.flush()
