"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import TaskRepository
from .catalog_repo import CategoryRepository, ProjectRepository
from .task_cache import TaskCache
from .identity import IdentityProvider

__all__ = [
    "TaskRepository",
    "CategoryRepository",
    "ProjectRepository",
    "TaskCache",
    "IdentityProvider",
]
