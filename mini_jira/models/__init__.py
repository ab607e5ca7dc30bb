from mini_jira.models.user import User, UserRole
from mini_jira.models.project import Project, ProjectRole, project_members
from mini_jira.models.board import Board, BoardColumn
from mini_jira.models.task import Task, TaskType, TaskPriority
from mini_jira.models.label import Label, task_labels
from mini_jira.models.comment import Comment
