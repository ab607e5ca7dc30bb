from typing import List, Optional
from pydantic import BaseModel, Field

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class ColumnCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class ColumnUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class ColumnResponse(BaseModel):
    id: int
    board_id: int
    name: str
    color: str
    position: int

    class Config:
        from_attributes = True


class ColumnReorder(BaseModel):
    """Column ids in the desired order"""
    column_ids: List[int]
