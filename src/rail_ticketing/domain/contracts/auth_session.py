"""Protocol for the signed-in passenger's session."""

from typing import Protocol


class AuthSession(Protocol):
    """Read-only view of the authenticated user."""

    def current_user_id(self) -> str | None:
        """Identifier of the signed-in user, or None when signed out."""
        ...

    def email(self) -> str | None:
        """E-mail address of the signed-in user."""
        ...
