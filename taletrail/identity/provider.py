"""Protocol for the hosted identity service (accounts live there, roles live in user_profiles)."""

from typing import Protocol

from taletrail.core.models import Identity, UserId


class IdentityProvider(Protocol):
    def get_current_user(self, access_token: str) -> Identity | None:
        """Resolve a bearer token to an identity, None if the token is not valid."""
        ...

    def list_users(self) -> list[Identity]: ...

    def create_user(self, email: str, password: str) -> Identity:
        """Create a confirmed account. Raises ConflictError if the email is already registered."""
        ...

    def delete_user(self, user_id: UserId) -> None: ...
