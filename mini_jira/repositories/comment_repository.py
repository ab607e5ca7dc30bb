from typing import List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from mini_jira.models.comment import Comment


class CommentRepository:
    """CRUD operations for task comments"""

    @staticmethod
    async def create(
        db: AsyncSession,
        task_id: int,
        author_id: int,
        content: str
    ) -> Comment:
        comment = Comment(task_id=task_id, author_id=author_id, content=content)
        db.add(comment)
        await db.commit()
        await db.refresh(comment)
        return comment

    @staticmethod
    async def get_by_id(db: AsyncSession, comment_id: int) -> Optional[Comment]:
        query = select(Comment).where(Comment.id == comment_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_task_id(db: AsyncSession, task_id: int) -> List[Comment]:
        query = (
            select(Comment)
            .where(Comment.task_id == task_id)
            .order_by(Comment.created_at, Comment.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update(db: AsyncSession, comment_id: int, content: str) -> Optional[Comment]:
        stmt = update(Comment).where(Comment.id == comment_id).values(
            content=content,
            updated_at=datetime.utcnow()
        )
        await db.execute(stmt)
        await db.commit()
        return await CommentRepository.get_by_id(db, comment_id)

    @staticmethod
    async def delete(db: AsyncSession, comment_id: int) -> bool:
        stmt = delete(Comment).where(Comment.id == comment_id)
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount > 0
