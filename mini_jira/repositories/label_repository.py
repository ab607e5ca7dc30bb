from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from mini_jira.models.label import Label, task_labels

DEFAULT_LABEL_COLOR = "#6366f1"


class LabelRepository:
    """CRUD for project labels and their task links"""

    @staticmethod
    async def create(
        db: AsyncSession,
        project_id: int,
        name: str,
        color: Optional[str] = None
    ) -> Label:
        label = Label(
            project_id=project_id,
            name=name,
            color=color or DEFAULT_LABEL_COLOR
        )
        db.add(label)
        await db.commit()
        await db.refresh(label)
        return label

    @staticmethod
    async def get_by_id(db: AsyncSession, label_id: int) -> Optional[Label]:
        query = select(Label).where(Label.id == label_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_project_id(db: AsyncSession, project_id: int) -> List[Label]:
        query = select(Label).where(Label.project_id == project_id).order_by(Label.name)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update(db: AsyncSession, label_id: int, **changes) -> Optional[Label]:
        update_data = {
            field: value for field, value in changes.items()
            if field in ("name", "color")
        }
        if not update_data:
            return await LabelRepository.get_by_id(db, label_id)

        stmt = update(Label).where(Label.id == label_id).values(**update_data)
        await db.execute(stmt)
        await db.commit()

        return await LabelRepository.get_by_id(db, label_id)

    @staticmethod
    async def delete(db: AsyncSession, label_id: int) -> bool:
        stmt = delete(Label).where(Label.id == label_id)
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount > 0

    @staticmethod
    async def add_to_task(db: AsyncSession, task_id: int, label_id: int) -> None:
        """Link a label to a task; an existing link is left as is"""
        query = select(task_labels.c.task_id).where(
            task_labels.c.task_id == task_id,
            task_labels.c.label_id == label_id
        )
        result = await db.execute(query)
        if result.first():
            return

        await db.execute(task_labels.insert().values(task_id=task_id, label_id=label_id))
        await db.commit()

    @staticmethod
    async def remove_from_task(db: AsyncSession, task_id: int, label_id: int) -> bool:
        stmt = delete(task_labels).where(
            task_labels.c.task_id == task_id,
            task_labels.c.label_id == label_id
        )
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount > 0

    @staticmethod
    async def get_task_labels(db: AsyncSession, task_id: int) -> List[Label]:
        query = (
            select(Label)
            .join(task_labels, task_labels.c.label_id == Label.id)
            .where(task_labels.c.task_id == task_id)
            .order_by(Label.name)
        )
        result = await db.execute(query)
        return list(result.scalars().all())
