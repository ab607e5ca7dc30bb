from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
import enum

from mini_jira.db.base import Base
from mini_jira.models.label import task_labels


class TaskType(enum.Enum):
    ISSUE = "issue"
    BUGFIX = "bugfix"
    STORY = "story"
    SUBTASK = "subtask"


class TaskPriority(enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Task(Base):
    """Work item on a board. Subtasks point at their parent through parent_id"""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    board_id = Column(Integer, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(TaskType), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Free-form; matches a column name by convention only
    status = Column(String(50), nullable=False, default="todo")
    priority = Column(Enum(TaskPriority), nullable=False, default=TaskPriority.MEDIUM)
    assignee_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    reporter_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    parent_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True, index=True)
    deadline = Column(DateTime, nullable=True)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    labels = relationship("Label", secondary=task_labels, lazy="raise", passive_deletes=True)
