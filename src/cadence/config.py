"""Configuration management for Cadence."""

import json
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

CADENCE_HOME = Path(os.environ.get("CADENCE_HOME", Path.home() / ".cadence"))
CONFIG_FILE = CADENCE_HOME / "config" / "cadence.conf"
SESSION_FILE = CADENCE_HOME / "config" / ".session.json"
DATA_DIR = CADENCE_HOME / "data"


@dataclass
class Config:
    """Cadence configuration."""

    supabase_url: str = ""
    supabase_anon_key: str = ""
    timezone: str = ""
    due_soon_hours: int = 2
    upcoming_days: int = 7
    cache_dir: str = ""
    default_sort: str = "due_at"

    @property
    def cache_path(self) -> Path:
        if self.cache_dir:
            return Path(self.cache_dir).expanduser()
        return DATA_DIR / "cache"

    @property
    def tzinfo(self) -> ZoneInfo | None:
        """Configured display timezone, or None for the system local zone."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown TIMEZONE {self.timezone!r}, using system local time")
            return None


@dataclass
class Session:
    """Authenticated user session issued by the identity provider."""

    access_token: str = ""
    refresh_token: str = ""
    expires_at: int = 0
    user_id: str = ""
    email: str = ""
    display_name: str = ""
    avatar_url: str = ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token and self.user_id)

    def expires_soon(self, margin: int = 300) -> bool:
        """True when the access token expires within `margin` seconds."""
        return bool(self.expires_at) and time.time() >= self.expires_at - margin

    @property
    def first_name(self) -> str:
        name = self.display_name or (self.email.split("@")[0] if self.email else "") or "there"
        return name.split(" ")[0]

    def save(self) -> None:
        """Save session to file."""
        SESSION_FILE.parent.mkdir(parents=True, exist_ok=True)
        SESSION_FILE.write_text(
            json.dumps(
                {
                    "access_token": self.access_token,
                    "refresh_token": self.refresh_token,
                    "expires_at": self.expires_at,
                    "user_id": self.user_id,
                    "email": self.email,
                    "display_name": self.display_name,
                    "avatar_url": self.avatar_url,
                }
            )
        )
        SESSION_FILE.chmod(0o600)

    @classmethod
    def load(cls) -> "Session":
        """Load session from file."""
        if not SESSION_FILE.exists():
            return cls()
        try:
            data = json.loads(SESSION_FILE.read_text())
            return cls(
                access_token=data.get("access_token", ""),
                refresh_token=data.get("refresh_token", ""),
                expires_at=data.get("expires_at", 0),
                user_id=data.get("user_id", ""),
                email=data.get("email", ""),
                display_name=data.get("display_name", ""),
                avatar_url=data.get("avatar_url", ""),
            )
        except (json.JSONDecodeError, KeyError):
            return cls()

    @staticmethod
    def clear() -> None:
        """Forget the stored session."""
        if SESSION_FILE.exists():
            SESSION_FILE.unlink()


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}")
        return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from cadence.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value[:1] in ("'", '"'):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "supabase_url":
                config.supabase_url = value.rstrip("/")
            case "supabase_anon_key":
                config.supabase_anon_key = value
            case "timezone":
                config.timezone = value
            case "due_soon_hours":
                config.due_soon_hours = _parse_int(key, value, config.due_soon_hours)
            case "upcoming_days":
                config.upcoming_days = _parse_int(key, value, config.upcoming_days)
            case "cache_dir":
                config.cache_dir = value
            case "default_sort":
                config.default_sort = value
            case _:
                logger.debug(f"Ignoring unknown config key {key.upper()}")

    return config
