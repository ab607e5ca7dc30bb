from datetime import datetime
from typing import List
from pydantic import BaseModel, Field

from mini_jira.schemas.column import ColumnResponse
from mini_jira.schemas.task import TaskTree


class BoardCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class BoardUpdate(BoardCreate):
    pass


class BoardResponse(BaseModel):
    id: int
    project_id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class BoardDetail(BaseModel):
    """Board with its columns and top-level tasks (each with subtasks)"""
    board: BoardResponse
    columns: List[ColumnResponse] = []
    tasks: List[TaskTree] = []
