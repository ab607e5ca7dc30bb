from typing import List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.orm import selectinload

from mini_jira.models.task import Task, TaskType, TaskPriority
from mini_jira.logs import debug_logger, log_function

UPDATABLE_FIELDS = (
    "title",
    "description",
    "status",
    "priority",
    "assignee_id",
    "deadline",
    "position",
)


def next_task_position(board_id: int, parent_id: Optional[int] = None):
    """Scalar subquery for the next position in a task's ordering scope.

    Top-level tasks are ordered per board, subtasks per parent.
    """
    query = select(func.coalesce(func.max(Task.position), -1) + 1)
    if parent_id is None:
        query = query.where(Task.board_id == board_id, Task.parent_id.is_(None))
    else:
        query = query.where(Task.parent_id == parent_id)
    return query.correlate(None).scalar_subquery()


class TaskRepository:
    """CRUD operations for tasks and subtasks"""

    @staticmethod
    @log_function()
    async def create(
        db: AsyncSession,
        board_id: int,
        type: TaskType,
        title: str,
        reporter_id: int,
        description: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[TaskPriority] = None,
        assignee_id: Optional[int] = None,
        parent_id: Optional[int] = None,
        deadline: Optional[datetime] = None
    ) -> Task:
        """Create a task at the end of its ordering scope.

        The position is computed inside the INSERT statement itself.
        """
        task = Task(
            board_id=board_id,
            type=type,
            title=title,
            description=description,
            status=status or "todo",
            priority=priority or TaskPriority.MEDIUM,
            assignee_id=assignee_id,
            reporter_id=reporter_id,
            parent_id=parent_id,
            deadline=deadline,
            position=next_task_position(board_id, parent_id)
        )
        db.add(task)
        await db.flush()
        await db.commit()
        await db.refresh(task)

        debug_logger.info(f"Created task {task.id} on board {board_id} at position {task.position}")
        return task

    @staticmethod
    async def get_by_id(db: AsyncSession, task_id: int) -> Optional[Task]:
        query = select(Task).where(Task.id == task_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_id_with_labels(db: AsyncSession, task_id: int) -> Optional[Task]:
        query = (
            select(Task)
            .where(Task.id == task_id)
            .options(selectinload(Task.labels))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_board_id(db: AsyncSession, board_id: int) -> List[Task]:
        """Top-level tasks of a board; subtasks are never included"""
        query = (
            select(Task)
            .where(Task.board_id == board_id, Task.parent_id.is_(None))
            .order_by(Task.position, Task.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def get_subtasks(db: AsyncSession, parent_id: int) -> List[Task]:
        query = (
            select(Task)
            .where(Task.parent_id == parent_id)
            .order_by(Task.position, Task.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    @log_function()
    async def update(db: AsyncSession, task_id: int, **changes) -> Optional[Task]:
        """Apply a partial update. Fields passed as None are cleared"""
        update_data = {
            field: value for field, value in changes.items()
            if field in UPDATABLE_FIELDS
        }
        if not update_data:
            return await TaskRepository.get_by_id(db, task_id)

        update_data["updated_at"] = datetime.utcnow()

        debug_logger.debug(f"Updating task {task_id}: {update_data}")
        stmt = update(Task).where(Task.id == task_id).values(**update_data)
        await db.execute(stmt)
        await db.commit()

        return await TaskRepository.get_by_id(db, task_id)

    @staticmethod
    @log_function()
    async def delete(db: AsyncSession, task_id: int) -> bool:
        """Delete a task; subtasks, comments and label links cascade"""
        stmt = delete(Task).where(Task.id == task_id)
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount > 0
