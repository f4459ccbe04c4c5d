"""Identity provider interface."""

from typing import Protocol

from cadence.config import Session


class IdentityProvider(Protocol):
    """Hosted authentication service."""

    def sign_in(self, email: str, password: str) -> Session:
        ...

    def sign_up(self, email: str, password: str, full_name: str) -> Session:
        ...

    def refresh(self, session: Session) -> Session:
        ...

    def sign_out(self, session: Session) -> None:
        ...
