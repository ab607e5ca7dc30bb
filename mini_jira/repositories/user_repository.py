from typing import List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from mini_jira.models.user import User, UserRole


class UserRepository:
    """Queries over the users table"""

    @staticmethod
    async def create(
        db: AsyncSession,
        email: str,
        password_hash: str,
        name: str,
        role: UserRole = UserRole.MEMBER
    ) -> User:
        user = User(
            email=email,
            password_hash=password_hash,
            name=name,
            role=role
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
        query = select(User).where(User.id == user_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[User]:
        query = select(User).where(User.email == email)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_all(db: AsyncSession) -> List[User]:
        query = select(User).order_by(User.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update_role(
        db: AsyncSession,
        user_id: int,
        role: UserRole
    ) -> Optional[User]:
        """Change a user's global role"""
        stmt = update(User).where(User.id == user_id).values(
            role=role,
            updated_at=datetime.utcnow()
        )
        await db.execute(stmt)
        await db.commit()
        return await UserRepository.get_by_id(db, user_id)
