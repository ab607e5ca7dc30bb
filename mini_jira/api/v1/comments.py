from typing import List, Tuple

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mini_jira.db.database import get_async_session
from mini_jira.api.dependencies.auth import get_current_user
from mini_jira.api.dependencies.permissions import ProjectAccess, get_project_access
from mini_jira.api.v1.tasks import get_task_or_404, require_task_member
from mini_jira.models.comment import Comment
from mini_jira.models.project import ProjectRole
from mini_jira.models.user import User
from mini_jira.repositories.comment_repository import CommentRepository
from mini_jira.schemas.comment import CommentCreate, CommentUpdate, CommentResponse
from mini_jira.schemas.response import ApiResponse, success_response

router = APIRouter(tags=["comments"])


async def get_comment_with_role(
    db: AsyncSession,
    comment_id: int,
    access: ProjectAccess
) -> Tuple[Comment, ProjectRole]:
    comment = await CommentRepository.get_by_id(db, comment_id)
    if not comment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found"
        )

    task = await get_task_or_404(db, comment.task_id)
    _, role = await require_task_member(db, task, access)
    return comment, role


@router.get("/tasks/{task_id}/comments", response_model=ApiResponse[List[CommentResponse]])
async def list_comments(
    task_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    task = await get_task_or_404(db, task_id)
    await require_task_member(db, task, access)

    comments = await CommentRepository.get_by_task_id(db, task_id)
    return success_response(comments)


@router.post("/tasks/{task_id}/comments", response_model=ApiResponse[CommentResponse], status_code=status.HTTP_201_CREATED)
async def create_comment(
    task_id: int,
    comment_data: CommentCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
    access: ProjectAccess = Depends(get_project_access),
):
    task = await get_task_or_404(db, task_id)
    await require_task_member(db, task, access)

    comment = await CommentRepository.create(
        db,
        task_id=task_id,
        author_id=current_user.id,
        content=comment_data.content
    )
    return success_response(comment, "Comment added")


@router.patch("/comments/{comment_id}", response_model=ApiResponse[CommentResponse])
async def update_comment(
    comment_id: int,
    comment_data: CommentUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
    access: ProjectAccess = Depends(get_project_access),
):
    """Edit a comment (author only)"""
    comment, _ = await get_comment_with_role(db, comment_id, access)
    if comment.author_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the author can edit this comment"
        )

    updated = await CommentRepository.update(db, comment_id, comment_data.content)
    return success_response(updated, "Comment updated")


@router.delete("/comments/{comment_id}", response_model=ApiResponse)
async def delete_comment(
    comment_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
    access: ProjectAccess = Depends(get_project_access),
):
    """Delete a comment (author or project admin)"""
    comment, role = await get_comment_with_role(db, comment_id, access)
    if comment.author_id != current_user.id and role != ProjectRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the author or a project admin can delete this comment"
        )

    await CommentRepository.delete(db, comment_id)
    return success_response(None, "Comment deleted successfully")
