from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, validator

from mini_jira.models.project import ProjectRole
from mini_jira.schemas.board import BoardResponse
from mini_jira.schemas.label import LabelResponse


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    key: str = Field(..., min_length=2, max_length=10)
    description: Optional[str] = None

    @validator("key")
    def uppercase_key(cls, value):
        return value.upper()


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class ProjectResponse(BaseModel):
    id: int
    name: str
    key: str
    description: Optional[str] = None
    owner_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MemberCreate(BaseModel):
    user_id: int
    role: ProjectRole = ProjectRole.MEMBER


class MemberResponse(BaseModel):
    project_id: int
    user_id: int
    role: ProjectRole
    name: str
    email: str


class ProjectDetail(BaseModel):
    project: ProjectResponse
    members: List[MemberResponse] = []
    boards: List[BoardResponse] = []
    labels: List[LabelResponse] = []
