from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, validator

from mini_jira.models.task import TaskType, TaskPriority
from mini_jira.schemas.comment import CommentResponse
from mini_jira.schemas.label import LabelResponse


def strip_timezone(value):
    """Deadlines are stored as naive UTC"""
    if isinstance(value, str) and value.endswith('Z'):
        value = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


class SubtaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: str = Field("todo", min_length=1, max_length=50)
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee_id: Optional[int] = None
    deadline: Optional[datetime] = None

    @validator('deadline')
    def parse_deadline(cls, value):
        return strip_timezone(value)


class TaskCreate(SubtaskCreate):
    type: TaskType


class TaskUpdate(BaseModel):
    """Partial update; only fields present in the request are applied"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = Field(None, min_length=1, max_length=50)
    priority: Optional[TaskPriority] = None
    assignee_id: Optional[int] = None
    deadline: Optional[datetime] = None
    position: Optional[int] = Field(None, ge=0)

    @validator('deadline')
    def parse_deadline(cls, value):
        return strip_timezone(value)


class TaskResponse(BaseModel):
    id: int
    board_id: int
    type: TaskType
    title: str
    description: Optional[str] = None
    status: str
    priority: TaskPriority
    assignee_id: Optional[int] = None
    reporter_id: int
    parent_id: Optional[int] = None
    deadline: Optional[datetime] = None
    position: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TaskTree(TaskResponse):
    subtasks: List[TaskResponse] = []


class TaskWithLabels(TaskResponse):
    labels: List[LabelResponse] = []


class TaskDetail(BaseModel):
    task: TaskWithLabels
    subtasks: List[TaskResponse] = []
    comments: List[CommentResponse] = []
