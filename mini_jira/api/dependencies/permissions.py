from typing import Dict, Optional

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mini_jira.api.dependencies.auth import get_current_user
from mini_jira.db.database import get_async_session
from mini_jira.models.project import ProjectRole
from mini_jira.models.user import User
from mini_jira.repositories.project_repository import ProjectRepository


class ProjectAccess:
    """
    Project role checks for one request

    Roles are looked up in project_members on first use and memoized for the
    lifetime of this object, which FastAPI scopes to a single request.
    The global user role never grants project access.
    """

    def __init__(self, db: AsyncSession, user: User):
        self.db = db
        self.user = user
        self._roles: Dict[int, Optional[ProjectRole]] = {}

    async def role(self, project_id: int) -> Optional[ProjectRole]:
        if project_id not in self._roles:
            self._roles[project_id] = await ProjectRepository.get_member_role(
                self.db, project_id, self.user.id
            )
        return self._roles[project_id]

    def forget(self, project_id: int) -> None:
        """Drop a memoized role after membership changes"""
        self._roles.pop(project_id, None)

    async def require_member(self, project_id: int) -> ProjectRole:
        role = await self.role(project_id)
        if role is None:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not a member of this project"
            )
        return role

    async def require_admin(self, project_id: int) -> ProjectRole:
        role = await self.role(project_id)
        if role != ProjectRole.ADMIN:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Project admin access required"
            )
        return role

    async def require_task_delete(self, project_id: int, reporter_id: int) -> None:
        """Members may delete their own tasks; admins may delete any"""
        role = await self.require_member(project_id)
        if role != ProjectRole.ADMIN and reporter_id != self.user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only admin or task creator can delete"
            )


async def get_project_access(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> ProjectAccess:
    return ProjectAccess(db, current_user)
