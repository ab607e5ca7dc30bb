from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mini_jira.db.database import get_async_session
from mini_jira.api.dependencies.auth import get_current_user
from mini_jira.api.dependencies.permissions import ProjectAccess, get_project_access
from mini_jira.models.project import ProjectRole
from mini_jira.models.user import User
from mini_jira.repositories.project_repository import ProjectRepository
from mini_jira.repositories.board_repository import BoardRepository
from mini_jira.repositories.label_repository import LabelRepository
from mini_jira.repositories.user_repository import UserRepository
from mini_jira.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectDetail,
    MemberCreate,
    MemberResponse,
)
from mini_jira.schemas.response import ApiResponse, success_response

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
)


@router.get("", response_model=ApiResponse[List[ProjectResponse]])
async def list_projects(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Projects the current user is a member of"""
    projects = await ProjectRepository.get_by_user_id(db, current_user.id)
    return success_response(projects)


@router.post("", response_model=ApiResponse[ProjectResponse], status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    """Create a project; the creator becomes its admin and gets a default board"""
    existing = await ProjectRepository.get_by_key(db, project_data.key)
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Project key already exists"
        )

    project = await ProjectRepository.create(
        db=db,
        name=project_data.name,
        key=project_data.key,
        owner_id=current_user.id,
        description=project_data.description
    )
    return success_response(project, "Project created")


@router.get("/{project_id}", response_model=ApiResponse[ProjectDetail])
async def get_project(
    project_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Project with members, boards and labels (members only)"""
    await access.require_member(project_id)

    project = await ProjectRepository.get_by_id(db, project_id)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )

    return success_response({
        "project": project,
        "members": await ProjectRepository.get_members(db, project_id),
        "boards": await BoardRepository.get_by_project_id(db, project_id),
        "labels": await LabelRepository.get_by_project_id(db, project_id),
    })


@router.patch("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Update name/description (project admins only)"""
    await access.require_admin(project_id)

    project = await ProjectRepository.update(
        db, project_id, **project_data.model_dump(exclude_none=True)
    )
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )
    return success_response(project, "Project updated")


@router.delete("/{project_id}", response_model=ApiResponse)
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Delete a project with everything in it (project admins only)"""
    await access.require_admin(project_id)

    deleted = await ProjectRepository.delete(db, project_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )
    return success_response(None, "Project deleted successfully")


@router.get("/{project_id}/members", response_model=ApiResponse[List[MemberResponse]])
async def list_members(
    project_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    await access.require_member(project_id)

    members = await ProjectRepository.get_members(db, project_id)
    return success_response(members)


@router.post("/{project_id}/members", response_model=ApiResponse[List[MemberResponse]], status_code=status.HTTP_201_CREATED)
async def add_member(
    project_id: int,
    member_data: MemberCreate,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Add a member or change an existing member's role (project admins only)"""
    await access.require_admin(project_id)

    user = await UserRepository.get_by_id(db, member_data.user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    project = await ProjectRepository.get_by_id(db, project_id)
    if project and project.owner_id == member_data.user_id and member_data.role != ProjectRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot change project owner role"
        )

    await ProjectRepository.add_member(db, project_id, member_data.user_id, member_data.role)
    access.forget(project_id)

    members = await ProjectRepository.get_members(db, project_id)
    return success_response(members, "Member added successfully")


@router.delete("/{project_id}/members/{user_id}", response_model=ApiResponse)
async def remove_member(
    project_id: int,
    user_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Remove a member (project admins only). The owner cannot be removed"""
    await access.require_admin(project_id)

    project = await ProjectRepository.get_by_id(db, project_id)
    if project and project.owner_id == user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot remove project owner"
        )

    await ProjectRepository.remove_member(db, project_id, user_id)
    access.forget(project_id)
    return success_response(None, "Member removed successfully")
