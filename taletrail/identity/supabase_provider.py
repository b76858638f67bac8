"""IdentityProvider implemented with the Supabase auth API."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

import httpx
from supabase import AuthError, AuthRetryableError, Client, create_client

from taletrail.core.config import Settings
from taletrail.core.exceptions import (
    ConflictError,
    IdentityServiceError,
    InitializationError,
)
from taletrail.core.models import Identity, UserId

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_CODE = "email_exists"


def create_supabase_client(settings: Settings) -> Client:
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise InitializationError("Supabase is not configured.")
    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def _to_identity(user: Any) -> Identity:
    return Identity(id=str(user.id), email=user.email)


def _is_duplicate_email(exc: AuthError) -> bool:
    message = str(exc)
    return (
        getattr(exc, "code", None) == DUPLICATE_EMAIL_CODE
        or "already registered" in message
        or "already been registered" in message
    )


@contextmanager
def unreachable_as(message: str) -> Iterator[None]:
    """Transport failures (and the auth client's retryable wrapper around them) become IdentityServiceError."""
    try:
        yield
    except (httpx.HTTPError, AuthRetryableError) as exc:
        logger.exception(message)
        raise IdentityServiceError(message) from exc


class SupabaseIdentityProvider:
    """Thin wrapper around the auth part of a (request-scoped) Supabase client."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_current_user(self, access_token: str) -> Identity | None:
        try:
            with unreachable_as("Failed to verify access token"):
                response = self.client.auth.get_user(access_token)
        except AuthError as exc:
            logger.info("Rejected access token: %s", exc)
            return None
        if response is None or response.user is None:
            return None
        return _to_identity(response.user)

    def list_users(self) -> list[Identity]:
        try:
            with unreachable_as("Failed to list users"):
                users = self.client.auth.admin.list_users()
        except AuthError as exc:
            logger.exception("Listing auth users failed")
            raise IdentityServiceError("Failed to list users") from exc
        return [_to_identity(user) for user in users]

    def create_user(self, email: str, password: str) -> Identity:
        try:
            with unreachable_as("Failed to create user"):
                response = self.client.auth.admin.create_user(
                    {"email": email, "password": password, "email_confirm": True}
                )
        except AuthError as exc:
            if _is_duplicate_email(exc):
                raise ConflictError("User with this email already exists") from exc
            logger.exception("Creating auth user failed")
            raise IdentityServiceError("Failed to create user") from exc
        return _to_identity(response.user)

    def delete_user(self, user_id: UserId) -> None:
        try:
            with unreachable_as("Failed to delete user"):
                self.client.auth.admin.delete_user(user_id)
        except AuthError as exc:
            logger.exception("Deleting auth user %s failed", user_id)
            raise IdentityServiceError("Failed to delete user") from exc
