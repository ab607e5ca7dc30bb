from typing import Optional
from pydantic import BaseModel, Field

from mini_jira.schemas.column import HEX_COLOR_PATTERN


class LabelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class LabelUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class LabelResponse(BaseModel):
    id: int
    project_id: int
    name: str
    color: str

    class Config:
        from_attributes = True
