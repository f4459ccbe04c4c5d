"""Adapters - I/O implementations of ports."""

from .supabase_auth import SupabaseAuth, AuthenticationError, AuthServiceUnavailable
from .supabase_api import SupabaseStore, StoreError
from .file_cache import FileTaskCache

__all__ = [
    "SupabaseAuth",
    "AuthenticationError",
    "AuthServiceUnavailable",
    "SupabaseStore",
    "StoreError",
    "FileTaskCache",
]
