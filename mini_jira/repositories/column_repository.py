from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func

from mini_jira.models.board import BoardColumn
from mini_jira.logs import log_function

DEFAULT_COLUMN_COLOR = "#6b7280"

DEFAULT_COLUMNS = (
    ("To Do", "#6b7280"),
    ("In Progress", "#f59e0b"),
    ("Done", "#10b981"),
)


def next_column_position(board_id: int):
    """Scalar subquery yielding MAX(position) + 1 for a board, or 0 when empty"""
    return (
        select(func.coalesce(func.max(BoardColumn.position), -1) + 1)
        .where(BoardColumn.board_id == board_id)
        .correlate(None)
        .scalar_subquery()
    )


class ColumnRepository:
    """CRUD and ordering for board columns"""

    @staticmethod
    async def add(
        db: AsyncSession,
        board_id: int,
        name: str,
        color: Optional[str] = None,
        position: Optional[int] = None
    ) -> BoardColumn:
        """Stage a column; appended to the end of the board unless a position is given"""
        column = BoardColumn(
            board_id=board_id,
            name=name,
            color=color or DEFAULT_COLUMN_COLOR,
            position=position if position is not None else next_column_position(board_id)
        )
        db.add(column)
        await db.flush()
        await db.refresh(column)
        return column

    @staticmethod
    async def add_defaults(db: AsyncSession, board_id: int) -> List[BoardColumn]:
        return [
            await ColumnRepository.add(db, board_id, name, color, position)
            for position, (name, color) in enumerate(DEFAULT_COLUMNS)
        ]

    @staticmethod
    async def create(
        db: AsyncSession,
        board_id: int,
        name: str,
        color: Optional[str] = None
    ) -> BoardColumn:
        column = await ColumnRepository.add(db, board_id, name, color)
        await db.commit()
        return column

    @staticmethod
    async def get_by_id(db: AsyncSession, column_id: int) -> Optional[BoardColumn]:
        query = select(BoardColumn).where(BoardColumn.id == column_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_board_id(db: AsyncSession, board_id: int) -> List[BoardColumn]:
        query = (
            select(BoardColumn)
            .where(BoardColumn.board_id == board_id)
            .order_by(BoardColumn.position, BoardColumn.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def count_by_board_id(db: AsyncSession, board_id: int) -> int:
        query = select(func.count(BoardColumn.id)).where(BoardColumn.board_id == board_id)
        result = await db.execute(query)
        return result.scalar() or 0

    @staticmethod
    async def update(db: AsyncSession, column_id: int, **changes) -> Optional[BoardColumn]:
        """Apply a partial update to name/color"""
        update_data = {
            field: value for field, value in changes.items()
            if field in ("name", "color")
        }
        if not update_data:
            return await ColumnRepository.get_by_id(db, column_id)

        stmt = update(BoardColumn).where(BoardColumn.id == column_id).values(**update_data)
        await db.execute(stmt)
        await db.commit()

        return await ColumnRepository.get_by_id(db, column_id)

    @staticmethod
    async def delete(db: AsyncSession, column_id: int) -> bool:
        stmt = delete(BoardColumn).where(BoardColumn.id == column_id)
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount > 0

    @staticmethod
    @log_function()
    async def reorder(
        db: AsyncSession,
        board_id: int,
        column_ids: List[int]
    ) -> None:
        """Assign positions by list order within a board.

        The list is not checked against the board's columns: omitted columns
        keep their old position and ids from other boards match no row.
        """
        for position, column_id in enumerate(column_ids):
            stmt = (
                update(BoardColumn)
                .where(BoardColumn.id == column_id, BoardColumn.board_id == board_id)
                .values(position=position)
                .execution_options(synchronize_session="fetch")
            )
            await db.execute(stmt)

        await db.commit()
