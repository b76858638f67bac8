"""Unit tests for taletrail/identity/supabase_provider.py"""

from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from supabase import AuthApiError, AuthRetryableError

from taletrail.core.config import Settings
from taletrail.core.exceptions import (
    ConflictError,
    IdentityServiceError,
    InitializationError,
)
from taletrail.core.models import Identity
from taletrail.identity.supabase_provider import (
    SupabaseIdentityProvider,
    create_supabase_client,
)


# --- MOCK DEPENDENCIES ----
class MockAdminAuth:
    """Mock the admin part of the auth API using a dictionary of users."""

    def __init__(self) -> None:
        self.users: dict[str, Any] = {}
        self.error: Exception | None = None

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    def list_users(self) -> list[Any]:
        self._check()
        return list(self.users.values())

    def create_user(self, attributes: dict[str, Any]) -> Any:
        self._check()
        user = SimpleNamespace(id=f"uid-{len(self.users) + 1}", email=attributes["email"])
        self.users[user.id] = user
        return SimpleNamespace(user=user)

    def delete_user(self, user_id: str) -> None:
        self._check()
        self.users.pop(user_id)


class MockAuth:
    def __init__(self) -> None:
        self.admin = MockAdminAuth()
        self.tokens: dict[str, Any] = {}
        self.error: Exception | None = None

    def get_user(self, jwt: str) -> Any:
        if self.error is not None:
            raise self.error
        if jwt not in self.tokens:
            raise AuthApiError("invalid JWT: unable to parse or verify signature", 401, "bad_jwt")
        return SimpleNamespace(user=self.tokens[jwt])


class MockClient:
    def __init__(self) -> None:
        self.auth = MockAuth()


@pytest.fixture
def supabase_client() -> MockClient:
    return MockClient()


@pytest.fixture
def provider(supabase_client: MockClient) -> SupabaseIdentityProvider:
    return SupabaseIdentityProvider(supabase_client)


UNREACHABLE = [
    httpx.ConnectError("connection refused"),
    httpx.ReadTimeout("timed out"),
    AuthRetryableError("connection refused", 0),
]


# --- CLIENT ---
def test_client_requires_configuration() -> None:
    settings = Settings("sqlite://", False, None, None, None, None, None, "INFO")
    with pytest.raises(InitializationError, match="Supabase is not configured."):
        create_supabase_client(settings)


# --- CURRENT USER ---
def test_get_current_user(provider: SupabaseIdentityProvider, supabase_client: MockClient) -> None:
    supabase_client.auth.tokens["good-token"] = SimpleNamespace(id="uid-1", email="ada@example.com")
    assert provider.get_current_user("good-token") == Identity(id="uid-1", email="ada@example.com")


def test_rejected_token_is_no_user(provider: SupabaseIdentityProvider) -> None:
    assert provider.get_current_user("forged-token") is None


@pytest.mark.parametrize("error", UNREACHABLE)
def test_unreachable_service_on_token_check(
    provider: SupabaseIdentityProvider, supabase_client: MockClient, error: Exception
) -> None:
    """An outage is a server error, not a rejected token."""
    supabase_client.auth.error = error
    with pytest.raises(IdentityServiceError, match="Failed to verify access token"):
        provider.get_current_user("good-token")


# --- ADMINISTRATION ---
def test_create_list_delete(provider: SupabaseIdentityProvider) -> None:
    created = provider.create_user("ada@example.com", "secret1")
    assert provider.list_users() == [created]

    provider.delete_user(created.id)
    assert provider.list_users() == []


def test_create_existing_email(provider: SupabaseIdentityProvider, supabase_client: MockClient) -> None:
    supabase_client.auth.admin.error = AuthApiError(
        "A user with this email address has already been registered", 422, "email_exists"
    )
    with pytest.raises(ConflictError):
        provider.create_user("ada@example.com", "secret1")


def test_other_auth_errors(provider: SupabaseIdentityProvider, supabase_client: MockClient) -> None:
    supabase_client.auth.admin.error = AuthApiError("User not allowed", 403, "not_admin")

    with pytest.raises(IdentityServiceError, match="Failed to create user"):
        provider.create_user("ada@example.com", "secret1")
    with pytest.raises(IdentityServiceError, match="Failed to list users"):
        provider.list_users()
    with pytest.raises(IdentityServiceError, match="Failed to delete user"):
        provider.delete_user("uid-1")


@pytest.mark.parametrize("error", UNREACHABLE)
def test_unreachable_service_on_administration(
    provider: SupabaseIdentityProvider, supabase_client: MockClient, error: Exception
) -> None:
    supabase_client.auth.admin.error = error
    with pytest.raises(IdentityServiceError):
        provider.list_users()
    with pytest.raises(IdentityServiceError):
        provider.create_user("ada@example.com", "secret1")
    with pytest.raises(IdentityServiceError):
        provider.delete_user("uid-1")
