from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mini_jira.db.database import get_async_session
from mini_jira.api.dependencies.auth import get_current_user
from mini_jira.api.dependencies.permissions import ProjectAccess, get_project_access
from mini_jira.api.v1.boards import get_board_or_404
from mini_jira.models.user import User
from mini_jira.models.task import Task, TaskType
from mini_jira.repositories.board_repository import BoardRepository
from mini_jira.repositories.task_repository import TaskRepository
from mini_jira.repositories.label_repository import LabelRepository
from mini_jira.repositories.comment_repository import CommentRepository
from mini_jira.repositories.user_repository import UserRepository
from mini_jira.schemas.task import (
    TaskCreate,
    SubtaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskDetail,
)
from mini_jira.schemas.label import LabelResponse
from mini_jira.schemas.response import ApiResponse, success_response

router = APIRouter(tags=["tasks"])

# Columns that cannot be cleared by sending null
NON_NULLABLE_FIELDS = ("title", "status", "priority", "position")


async def get_task_or_404(db: AsyncSession, task_id: int, detail: str = "Task not found") -> Task:
    task = await TaskRepository.get_by_id(db, task_id)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail
        )
    return task


async def require_task_member(db: AsyncSession, task: Task, access: ProjectAccess):
    """Resolve the task's project through its board and require membership"""
    board = await BoardRepository.get_by_id(db, task.board_id)
    if not board:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a member of this project"
        )
    role = await access.require_member(board.project_id)
    return board, role


async def check_assignee(db: AsyncSession, assignee_id: Optional[int]) -> None:
    if assignee_id is None:
        return
    if not await UserRepository.get_by_id(db, assignee_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assignee not found"
        )


@router.get("/boards/{board_id}/tasks", response_model=ApiResponse[List[TaskResponse]])
async def list_tasks(
    board_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Top-level tasks of a board by position"""
    board = await get_board_or_404(db, board_id)
    await access.require_member(board.project_id)

    tasks = await TaskRepository.get_by_board_id(db, board_id)
    return success_response(tasks)


@router.post("/boards/{board_id}/tasks", response_model=ApiResponse[TaskResponse], status_code=status.HTTP_201_CREATED)
async def create_task(
    board_id: int,
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
    access: ProjectAccess = Depends(get_project_access),
):
    """Create a task at the end of the board; the caller is the reporter"""
    board = await get_board_or_404(db, board_id)
    await access.require_member(board.project_id)
    await check_assignee(db, task_data.assignee_id)

    task = await TaskRepository.create(
        db=db,
        board_id=board_id,
        type=task_data.type,
        title=task_data.title,
        reporter_id=current_user.id,
        description=task_data.description,
        status=task_data.status,
        priority=task_data.priority,
        assignee_id=task_data.assignee_id,
        deadline=task_data.deadline,
    )
    return success_response(task, "Task created")


@router.get("/tasks/{task_id}", response_model=ApiResponse[TaskDetail])
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Task with its labels, subtasks and comments"""
    task = await TaskRepository.get_by_id_with_labels(db, task_id)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    await require_task_member(db, task, access)

    return success_response({
        "task": task,
        "subtasks": await TaskRepository.get_subtasks(db, task_id),
        "comments": await CommentRepository.get_by_task_id(db, task_id),
    })


@router.patch("/tasks/{task_id}", response_model=ApiResponse[TaskResponse])
async def update_task(
    task_id: int,
    task_data: TaskUpdate,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Partial update by any project member. Status is not checked against columns"""
    task = await get_task_or_404(db, task_id)
    await require_task_member(db, task, access)

    changes = {
        field: value for field, value in task_data.model_dump(exclude_unset=True).items()
        if value is not None or field not in NON_NULLABLE_FIELDS
    }
    await check_assignee(db, changes.get("assignee_id"))

    updated = await TaskRepository.update(db, task_id, **changes)
    return success_response(updated, "Task updated")


@router.delete("/tasks/{task_id}", response_model=ApiResponse)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Delete a task and its subtasks (reporter or project admin)"""
    task = await get_task_or_404(db, task_id)
    board, _ = await require_task_member(db, task, access)
    await access.require_task_delete(board.project_id, task.reporter_id)

    await TaskRepository.delete(db, task_id)
    return success_response(None, "Task deleted successfully")


@router.get("/tasks/{task_id}/subtasks", response_model=ApiResponse[List[TaskResponse]])
async def list_subtasks(
    task_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    task = await get_task_or_404(db, task_id)
    await require_task_member(db, task, access)

    subtasks = await TaskRepository.get_subtasks(db, task_id)
    return success_response(subtasks)


@router.post("/tasks/{task_id}/subtasks", response_model=ApiResponse[TaskResponse], status_code=status.HTTP_201_CREATED)
async def create_subtask(
    task_id: int,
    subtask_data: SubtaskCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
    access: ProjectAccess = Depends(get_project_access),
):
    """Create a subtask; positions are counted per parent"""
    parent = await get_task_or_404(db, task_id, detail="Parent task not found")
    await require_task_member(db, parent, access)
    await check_assignee(db, subtask_data.assignee_id)

    subtask = await TaskRepository.create(
        db=db,
        board_id=parent.board_id,
        type=TaskType.SUBTASK,
        title=subtask_data.title,
        reporter_id=current_user.id,
        description=subtask_data.description,
        status=subtask_data.status,
        priority=subtask_data.priority,
        assignee_id=subtask_data.assignee_id,
        parent_id=parent.id,
        deadline=subtask_data.deadline,
    )
    return success_response(subtask, "Subtask created")


@router.post("/tasks/{task_id}/labels/{label_id}", response_model=ApiResponse[List[LabelResponse]])
async def add_label_to_task(
    task_id: int,
    label_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Attach a project label to a task; attaching twice is a no-op"""
    task = await get_task_or_404(db, task_id)
    board, _ = await require_task_member(db, task, access)

    label = await LabelRepository.get_by_id(db, label_id)
    if not label:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Label not found"
        )
    if label.project_id != board.project_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Label belongs to another project"
        )

    await LabelRepository.add_to_task(db, task_id, label_id)
    labels = await LabelRepository.get_task_labels(db, task_id)
    return success_response(labels, "Label added")


@router.delete("/tasks/{task_id}/labels/{label_id}", response_model=ApiResponse[List[LabelResponse]])
async def remove_label_from_task(
    task_id: int,
    label_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    task = await get_task_or_404(db, task_id)
    await require_task_member(db, task, access)

    await LabelRepository.remove_from_task(db, task_id, label_id)
    labels = await LabelRepository.get_task_labels(db, task_id)
    return success_response(labels, "Label removed")
