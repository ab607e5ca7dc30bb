from typing import List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from mini_jira.models.project import Project, ProjectRole, project_members
from mini_jira.models.user import User
from mini_jira.repositories.board_repository import BoardRepository, DEFAULT_BOARD_NAME
from mini_jira.logs import debug_logger, log_function


class ProjectRepository:
    """CRUD operations and membership for projects"""

    @staticmethod
    @log_function()
    async def create(
        db: AsyncSession,
        name: str,
        key: str,
        owner_id: int,
        description: Optional[str] = None
    ) -> Project:
        """Create a project with its owner as admin and a default board.

        Project, membership, board and default columns are written in one
        transaction.
        """
        project = Project(
            name=name,
            key=key,
            description=description,
            owner_id=owner_id
        )
        db.add(project)
        await db.flush()

        await ProjectRepository._write_member(db, project.id, owner_id, ProjectRole.ADMIN)
        await BoardRepository.add_with_default_columns(db, project.id, DEFAULT_BOARD_NAME)

        await db.commit()
        await db.refresh(project)

        debug_logger.info(f"Created project {project.key} (id {project.id}) for user {owner_id}")
        return project

    @staticmethod
    async def get_by_id(db: AsyncSession, project_id: int) -> Optional[Project]:
        query = select(Project).where(Project.id == project_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_key(db: AsyncSession, key: str) -> Optional[Project]:
        query = select(Project).where(Project.key == key)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def get_by_user_id(db: AsyncSession, user_id: int) -> List[Project]:
        """Projects the user is a member of"""
        query = (
            select(Project)
            .join(project_members, project_members.c.project_id == Project.id)
            .where(project_members.c.user_id == user_id)
            .order_by(Project.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update(db: AsyncSession, project_id: int, **changes) -> Optional[Project]:
        """Apply a partial update to name/description"""
        update_data = {
            field: value for field, value in changes.items()
            if field in ("name", "description")
        }
        if not update_data:
            return await ProjectRepository.get_by_id(db, project_id)

        update_data["updated_at"] = datetime.utcnow()

        stmt = update(Project).where(Project.id == project_id).values(**update_data)
        await db.execute(stmt)
        await db.commit()

        return await ProjectRepository.get_by_id(db, project_id)

    @staticmethod
    @log_function()
    async def delete(db: AsyncSession, project_id: int) -> bool:
        """Delete a project; boards, labels and membership go with it"""
        stmt = delete(Project).where(Project.id == project_id)
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount > 0

    @staticmethod
    async def _write_member(
        db: AsyncSession,
        project_id: int,
        user_id: int,
        role: ProjectRole
    ) -> None:
        # Insert-or-replace: at most one row per (project, user)
        await db.execute(
            delete(project_members).where(
                project_members.c.project_id == project_id,
                project_members.c.user_id == user_id
            )
        )
        await db.execute(
            project_members.insert().values(
                project_id=project_id,
                user_id=user_id,
                role=role
            )
        )

    @staticmethod
    async def add_member(
        db: AsyncSession,
        project_id: int,
        user_id: int,
        role: ProjectRole = ProjectRole.MEMBER
    ) -> None:
        """Add a member, or replace the role of an existing one"""
        await ProjectRepository._write_member(db, project_id, user_id, role)
        await db.commit()

    @staticmethod
    async def remove_member(db: AsyncSession, project_id: int, user_id: int) -> bool:
        stmt = delete(project_members).where(
            project_members.c.project_id == project_id,
            project_members.c.user_id == user_id
        )
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount > 0

    @staticmethod
    async def get_members(db: AsyncSession, project_id: int) -> List[dict]:
        """Members of a project with their name and email"""
        query = (
            select(
                project_members.c.project_id,
                project_members.c.user_id,
                project_members.c.role,
                User.name,
                User.email,
            )
            .join(User, User.id == project_members.c.user_id)
            .where(project_members.c.project_id == project_id)
            .order_by(project_members.c.user_id)
        )
        result = await db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    @staticmethod
    async def get_member_role(
        db: AsyncSession,
        project_id: int,
        user_id: int
    ) -> Optional[ProjectRole]:
        query = select(project_members.c.role).where(
            project_members.c.project_id == project_id,
            project_members.c.user_id == user_id
        )
        result = await db.execute(query)
        row = result.first()
        return row.role if row else None
