"""Supabase REST adapter - owner-scoped CRUD against the hosted database."""

import logging

import requests

from cadence.config import Config, Session, load_config
from cadence.core.categories import Category
from cadence.core.projects import Project, ProjectStatus
from cadence.core.tasks import Task, format_instant, utcnow
from cadence.ports import IdentityProvider

from .supabase_auth import AuthenticationError, AuthServiceUnavailable, SupabaseAuth, ensure_session

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the data store cannot be reached or rejects a request."""

    pass


class SupabaseStore:
    """
    Supabase PostgREST adapter.

    Implements TaskRepository, CategoryRepository and ProjectRepository.
    Every query is filtered by the signed-in user's id; row-level security
    enforces the same on the server.
    """

    def __init__(
        self,
        config: Config | None = None,
        session: Session | None = None,
        auth: IdentityProvider | None = None,
    ):
        self.config = config or load_config()
        self.auth = auth or SupabaseAuth(self.config)
        self.session = session
        self._http = requests.Session()

    @property
    def owner_id(self) -> str:
        """Signed-in user id. Read from the stored session without a token refresh."""
        session = self.session or Session.load()
        if not session.is_authenticated:
            raise AuthenticationError("Not signed in. Run 'cadence login' first.")
        self.session = session
        return session.user_id

    def _current_session(self) -> Session:
        try:
            self.session = ensure_session(self.auth, self.session)
        except AuthServiceUnavailable as e:
            raise StoreError(str(e)) from e
        return self.session

    def _request(
        self,
        method: str,
        table: str,
        params: dict | None = None,
        payload: dict | list | None = None,
        returning: bool = False,
    ) -> list:
        """Make an authenticated REST request and return decoded rows."""
        session = self._current_session()
        headers = {
            "apikey": self.config.supabase_anon_key,
            "Authorization": f"Bearer {session.access_token}",
        }
        if returning:
            headers["Prefer"] = "return=representation"

        try:
            resp = self._http.request(
                method,
                f"{self.config.supabase_url}/rest/v1/{table}",
                params=params,
                json=payload,
                headers=headers,
            )
            if resp.status_code == 401:
                raise AuthenticationError("Session rejected by the store. Run 'cadence login'.")
            resp.raise_for_status()
            return resp.json() if resp.content else []
        except (requests.RequestException, ValueError) as e:
            logger.debug(f"{method} {table} failed: {e}")
            raise StoreError(f"{method} {table} failed: {e}") from e

    def _scoped(self, **filters: str) -> dict:
        params = {"user_id": f"eq.{self.owner_id}"}
        params.update(filters)
        return params

    # ---- tasks ----

    def fetch_tasks(self) -> list[Task]:
        """Fetch all tasks, newest first."""
        rows = self._request("GET", "tasks", self._scoped(select="*", order="created_at.desc"))
        return [Task.from_api(r) for r in rows]

    def create_task(self, payload: dict) -> Task:
        rows = self._request("POST", "tasks", payload=[payload], returning=True)
        return Task.from_api(rows[0])

    def update_task(self, task_id: str, changes: dict) -> None:
        changes = {**changes, "updated_at": format_instant(utcnow())}
        self._request("PATCH", "tasks", self._scoped(id=f"eq.{task_id}"), payload=changes)

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", "tasks", self._scoped(id=f"eq.{task_id}"))

    # ---- categories ----

    def fetch_categories(self, active_only: bool = True) -> list[Category]:
        filters = {"select": "*", "order": "created_at.desc"}
        if active_only:
            filters["status"] = "eq.Active"
        rows = self._request("GET", "task_types", self._scoped(**filters))
        return [Category.from_api(r) for r in rows]

    def create_category(self, payload: dict) -> Category:
        row = {"user_id": self.owner_id, "status": "Active", **payload}
        rows = self._request("POST", "task_types", payload=[row], returning=True)
        return Category.from_api(rows[0])

    def update_category(self, category_id: str, changes: dict) -> None:
        self._request("PATCH", "task_types", self._scoped(id=f"eq.{category_id}"), payload=changes)

    # ---- projects ----

    def fetch_projects(self, active_only: bool = False) -> list[Project]:
        """Fetch projects with embedded task statuses for progress."""
        filters = {"select": "*,tasks(id,status)", "order": "created_at.desc"}
        if active_only:
            filters["status"] = f"eq.{ProjectStatus.ACTIVE.value}"
        rows = self._request("GET", "projects", self._scoped(**filters))
        return [Project.from_api(r) for r in rows]

    def create_project(self, payload: dict) -> Project:
        now = format_instant(utcnow())
        row = {"user_id": self.owner_id, "created_at": now, "updated_at": now, **payload}
        rows = self._request("POST", "projects", payload=[row], returning=True)
        return Project.from_api(rows[0])

    def update_project(self, project_id: str, changes: dict) -> None:
        changes = {**changes, "updated_at": format_instant(utcnow())}
        self._request("PATCH", "projects", self._scoped(id=f"eq.{project_id}"), payload=changes)

    def delete_project(self, project_id: str) -> None:
        self._request("DELETE", "projects", self._scoped(id=f"eq.{project_id}"))
