"""Category and project repository interfaces."""

from typing import Protocol

from cadence.core.categories import Category
from cadence.core.projects import Project


class CategoryRepository(Protocol):
    """Owner-scoped task categories."""

    def fetch_categories(self, active_only: bool = True) -> list[Category]:
        """Fetch categories, by default only Active ones."""
        ...

    def create_category(self, payload: dict) -> Category:
        ...

    def update_category(self, category_id: str, changes: dict) -> None:
        ...


class ProjectRepository(Protocol):
    """Owner-scoped projects."""

    def fetch_projects(self, active_only: bool = False) -> list[Project]:
        """Fetch projects with their linked task statuses."""
        ...

    def create_project(self, payload: dict) -> Project:
        ...

    def update_project(self, project_id: str, changes: dict) -> None:
        ...

    def delete_project(self, project_id: str) -> None:
        ...
