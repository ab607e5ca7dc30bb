from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from mini_jira.db.base import Base


class Board(Base):
    """Board inside a project"""

    __tablename__ = "boards"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class BoardColumn(Base):
    """Ordered lane of a board; position is 0-based and dense per board"""

    __tablename__ = "board_columns"

    id = Column(Integer, primary_key=True, index=True)
    board_id = Column(Integer, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    color = Column(String(7), nullable=False, default="#6b7280")
    position = Column(Integer, nullable=False, default=0)
