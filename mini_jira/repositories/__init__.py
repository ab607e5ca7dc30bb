from mini_jira.repositories.user_repository import UserRepository
from mini_jira.repositories.project_repository import ProjectRepository
from mini_jira.repositories.board_repository import BoardRepository
from mini_jira.repositories.column_repository import ColumnRepository
from mini_jira.repositories.task_repository import TaskRepository
from mini_jira.repositories.label_repository import LabelRepository
from mini_jira.repositories.comment_repository import CommentRepository

__all__ = [
    "UserRepository",
    "ProjectRepository",
    "BoardRepository",
    "ColumnRepository",
    "TaskRepository",
    "LabelRepository",
    "CommentRepository",
]
