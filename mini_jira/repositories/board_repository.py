from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from mini_jira.models.board import Board
from mini_jira.repositories.column_repository import ColumnRepository

DEFAULT_BOARD_NAME = "Main Board"


class BoardRepository:
    """CRUD operations for boards"""

    @staticmethod
    async def add_with_default_columns(
        db: AsyncSession,
        project_id: int,
        name: str
    ) -> Board:
        """Stage a board and its default columns without committing"""
        board = Board(project_id=project_id, name=name)
        db.add(board)
        await db.flush()
        await ColumnRepository.add_defaults(db, board.id)
        return board

    @staticmethod
    async def create(db: AsyncSession, project_id: int, name: str) -> Board:
        """Create a board with the To Do / In Progress / Done columns"""
        board = await BoardRepository.add_with_default_columns(db, project_id, name)
        await db.commit()
        await db.refresh(board)
        return board

    @staticmethod
    async def get_by_id(db: AsyncSession, board_id: int) -> Optional[Board]:
        query = select(Board).where(Board.id == board_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_project_id(db: AsyncSession, project_id: int) -> List[Board]:
        query = (
            select(Board)
            .where(Board.project_id == project_id)
            .order_by(Board.created_at, Board.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update(db: AsyncSession, board_id: int, **changes) -> Optional[Board]:
        update_data = {field: value for field, value in changes.items() if field == "name"}
        if not update_data:
            return await BoardRepository.get_by_id(db, board_id)

        stmt = update(Board).where(Board.id == board_id).values(**update_data)
        await db.execute(stmt)
        await db.commit()

        return await BoardRepository.get_by_id(db, board_id)

    @staticmethod
    async def delete(db: AsyncSession, board_id: int) -> bool:
        """Delete a board; columns and tasks cascade in the database"""
        stmt = delete(Board).where(Board.id == board_id)
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount > 0
