from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mini_jira.db.database import get_async_session
from mini_jira.api.dependencies.permissions import ProjectAccess, get_project_access
from mini_jira.models.board import Board
from mini_jira.models.task import Task
from mini_jira.repositories.board_repository import BoardRepository
from mini_jira.repositories.column_repository import ColumnRepository
from mini_jira.repositories.task_repository import TaskRepository
from mini_jira.schemas.board import BoardCreate, BoardUpdate, BoardResponse, BoardDetail
from mini_jira.schemas.task import TaskResponse
from mini_jira.schemas.response import ApiResponse, success_response

router = APIRouter(tags=["boards"])


async def get_board_or_404(db: AsyncSession, board_id: int) -> Board:
    """Load a board; existence is checked before any membership check"""
    board = await BoardRepository.get_by_id(db=db, board_id=board_id)
    if not board:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Board not found"
        )
    return board


async def task_with_subtasks(db: AsyncSession, task: Task) -> dict:
    data = TaskResponse.model_validate(task).model_dump()
    data["subtasks"] = await TaskRepository.get_subtasks(db, task.id)
    return data


@router.get("/projects/{project_id}/boards", response_model=ApiResponse[List[BoardResponse]])
async def list_boards(
    project_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    await access.require_member(project_id)

    boards = await BoardRepository.get_by_project_id(db, project_id)
    return success_response(boards)


@router.post("/projects/{project_id}/boards", response_model=ApiResponse[BoardResponse], status_code=status.HTTP_201_CREATED)
async def create_board(
    project_id: int,
    board_data: BoardCreate,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Create a board with default columns (project admins only)"""
    await access.require_admin(project_id)

    board = await BoardRepository.create(db, project_id, board_data.name)
    return success_response(board, "Board created")


@router.get("/boards/{board_id}", response_model=ApiResponse[BoardDetail])
async def get_board(
    board_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Board with its columns and top-level tasks, each carrying its subtasks"""
    board = await get_board_or_404(db, board_id)
    await access.require_member(board.project_id)

    columns = await ColumnRepository.get_by_board_id(db, board_id)
    tasks = await TaskRepository.get_by_board_id(db, board_id)

    return success_response({
        "board": board,
        "columns": columns,
        "tasks": [await task_with_subtasks(db, task) for task in tasks],
    })


@router.patch("/boards/{board_id}", response_model=ApiResponse[BoardResponse])
async def update_board(
    board_id: int,
    board_data: BoardUpdate,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    board = await get_board_or_404(db, board_id)
    await access.require_admin(board.project_id)

    updated = await BoardRepository.update(db, board_id, name=board_data.name)
    return success_response(updated, "Board updated")


@router.delete("/boards/{board_id}", response_model=ApiResponse)
async def delete_board(
    board_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Delete a board with its columns and tasks (project admins only)"""
    board = await get_board_or_404(db, board_id)
    await access.require_admin(board.project_id)

    await BoardRepository.delete(db, board_id)
    return success_response(None, "Board deleted successfully")
