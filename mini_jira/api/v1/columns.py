from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mini_jira.db.database import get_async_session
from mini_jira.api.dependencies.permissions import ProjectAccess, get_project_access
from mini_jira.api.v1.boards import get_board_or_404
from mini_jira.models.board import Board, BoardColumn
from mini_jira.repositories.column_repository import ColumnRepository
from mini_jira.schemas.column import ColumnCreate, ColumnUpdate, ColumnResponse, ColumnReorder
from mini_jira.schemas.response import ApiResponse, success_response
from mini_jira.logs import debug_logger

router = APIRouter(tags=["columns"])


async def check_board_access(
    board_id: int,
    db: AsyncSession,
    access: ProjectAccess,
    require_modify: bool = False
) -> Board:
    """
    Load a board and check the caller's project role

    Args:
        board_id: ID of the board to check
        db: Database session
        access: Per-request project access checker
        require_modify: If True, requires project admin, otherwise any member
    """
    board = await get_board_or_404(db, board_id)

    if require_modify:
        await access.require_admin(board.project_id)
    else:
        await access.require_member(board.project_id)

    return board


async def get_column_for_update(
    column_id: int,
    db: AsyncSession,
    access: ProjectAccess
) -> BoardColumn:
    column = await ColumnRepository.get_by_id(db=db, column_id=column_id)
    if not column:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Column not found"
        )

    await check_board_access(column.board_id, db, access, require_modify=True)
    return column


@router.get("/boards/{board_id}/columns", response_model=ApiResponse[List[ColumnResponse]])
async def get_columns(
    board_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Columns of a board by position (all project members)"""
    await check_board_access(board_id, db, access, require_modify=False)

    columns = await ColumnRepository.get_by_board_id(db=db, board_id=board_id)
    return success_response(columns)


@router.post("/boards/{board_id}/columns", response_model=ApiResponse[ColumnResponse], status_code=status.HTTP_201_CREATED)
async def create_column(
    board_id: int,
    column_create: ColumnCreate,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Append a column to a board (project admins only)"""
    await check_board_access(board_id, db, access, require_modify=True)

    column = await ColumnRepository.create(
        db=db,
        board_id=board_id,
        name=column_create.name,
        color=column_create.color
    )
    return success_response(column, "Column created")


@router.patch("/boards/{board_id}/columns/reorder", response_model=ApiResponse[List[ColumnResponse]])
async def reorder_columns(
    board_id: int,
    column_order: ColumnReorder,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Set column positions from a list of ids (project admins only)"""
    await check_board_access(board_id, db, access, require_modify=True)

    await ColumnRepository.reorder(
        db=db,
        board_id=board_id,
        column_ids=column_order.column_ids
    )
    debug_logger.debug(f"Board {board_id} columns reordered: {column_order.column_ids}")

    columns = await ColumnRepository.get_by_board_id(db=db, board_id=board_id)
    return success_response(columns, "Columns reordered successfully")


@router.patch("/columns/{column_id}", response_model=ApiResponse[ColumnResponse])
async def update_column(
    column_id: int,
    column_update: ColumnUpdate,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Rename or recolor a column (project admins only)"""
    await get_column_for_update(column_id, db, access)

    updated_column = await ColumnRepository.update(
        db, column_id, **column_update.model_dump(exclude_none=True)
    )
    return success_response(updated_column, "Column updated")


@router.delete("/columns/{column_id}", response_model=ApiResponse)
async def delete_column(
    column_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    """Delete a column (project admins only); a board keeps at least one column"""
    column = await get_column_for_update(column_id, db, access)

    remaining = await ColumnRepository.count_by_board_id(db, column.board_id)
    if remaining <= 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Board must have at least one column"
        )

    await ColumnRepository.delete(db=db, column_id=column_id)
    return success_response(None, "Column deleted successfully")
