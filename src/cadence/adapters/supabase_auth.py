"""Supabase auth adapter - HTTP client for the hosted identity provider."""

import logging
import time

import requests

from cadence.config import Config, Session, load_config
from cadence.ports import IdentityProvider

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when authentication fails."""

    pass


class AuthServiceUnavailable(AuthenticationError):
    """Raised when the auth service cannot be reached."""

    pass


class SupabaseAuth:
    """
    Supabase GoTrue adapter.

    Implements IdentityProvider protocol. Exchanges credentials for sessions
    and refreshes them. No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None):
        self.config = config or load_config()
        self._session = requests.Session()

    @property
    def _base(self) -> str:
        if not self.config.supabase_url or not self.config.supabase_anon_key:
            raise AuthenticationError(
                "Missing Supabase credentials. Add SUPABASE_URL and SUPABASE_ANON_KEY to cadence.conf"
            )
        return f"{self.config.supabase_url}/auth/v1"

    def _headers(self, access_token: str = "") -> dict:
        headers = {"apikey": self.config.supabase_anon_key}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    def _post(self, path: str, payload: dict, access_token: str = "") -> requests.Response:
        try:
            return self._session.post(
                f"{self._base}{path}",
                json=payload,
                headers=self._headers(access_token),
            )
        except requests.RequestException as e:
            raise AuthServiceUnavailable(f"Could not reach auth service: {e}") from e

    @staticmethod
    def _error_text(resp: requests.Response) -> str:
        try:
            data = resp.json()
        except ValueError:
            return resp.text
        return data.get("error_description") or data.get("msg") or data.get("message") or resp.text

    @staticmethod
    def _session_from(data: dict, previous: Session | None = None) -> Session:
        user = data.get("user") or {}
        meta = user.get("user_metadata") or {}
        expires_at = data.get("expires_at") or int(time.time()) + data.get("expires_in", 3600)
        session = Session(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token", ""),
            expires_at=int(expires_at),
            user_id=user.get("id", ""),
            email=user.get("email", ""),
            display_name=meta.get("display_name") or meta.get("full_name") or "",
            avatar_url=meta.get("avatar_url", ""),
        )
        if previous and not session.user_id:
            session.user_id = previous.user_id
            session.email = previous.email
            session.display_name = previous.display_name
            session.avatar_url = previous.avatar_url
        return session

    def sign_in(self, email: str, password: str) -> Session:
        """Sign in with email and password."""
        resp = self._post("/token?grant_type=password", {"email": email, "password": password})
        if resp.status_code != 200:
            raise AuthenticationError(f"Sign in failed: {self._error_text(resp)}")
        logger.info(f"Signed in as {email}")
        return self._session_from(resp.json())

    def sign_up(self, email: str, password: str, full_name: str) -> Session:
        """Create an account. The display name is stored in user metadata."""
        resp = self._post(
            "/signup",
            {
                "email": email,
                "password": password,
                "data": {"full_name": full_name, "display_name": full_name},
            },
        )
        if resp.status_code != 200:
            raise AuthenticationError(f"Sign up failed: {self._error_text(resp)}")

        data = resp.json()
        if "access_token" not in data:
            # Email confirmation pending: no session issued yet
            raise AuthenticationError("Check your email to confirm the account, then sign in.")
        return self._session_from(data)

    def refresh(self, session: Session) -> Session:
        """Refresh the access token."""
        if not session.refresh_token:
            raise AuthenticationError("No refresh token. Run 'cadence login' first.")

        resp = self._post("/token?grant_type=refresh_token", {"refresh_token": session.refresh_token})
        if resp.status_code != 200:
            raise AuthenticationError(f"Token refresh failed: {self._error_text(resp)}")
        logger.debug("Refreshed access token")
        return self._session_from(resp.json(), previous=session)

    def sign_out(self, session: Session) -> None:
        """Revoke the session server-side. Local state is cleared by the caller."""
        if not session.access_token:
            return
        resp = self._post("/logout", {}, access_token=session.access_token)
        if resp.status_code not in (200, 204):
            logger.warning(f"Sign out failed: {self._error_text(resp)}")


def ensure_session(auth: IdentityProvider, session: Session | None = None) -> Session:
    """Load the stored session, refreshing it if it expires within 5 minutes."""
    session = session or Session.load()
    if not session.is_authenticated:
        raise AuthenticationError("Not signed in. Run 'cadence login' first.")
    if session.expires_soon():
        session = auth.refresh(session)
        session.save()
    return session
