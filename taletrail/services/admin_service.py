"""User administration (admin only): accounts live in the identity service, roles in user_profiles."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from taletrail.api.models import (
    CleanupResponse,
    CreateUserRequest,
    UpdateRoleRequest,
    UserProfileResponse,
)
from taletrail.core.exceptions import (
    ConflictError,
    IdentityServiceError,
    InternalError,
    InvalidRequestError,
    NotFoundError,
)
from taletrail.core.models import Identity, UserId, UserProfileModel
from taletrail.db.repository import ProfileRepository
from taletrail.identity.provider import IdentityProvider
from taletrail.services.authorization import AuthorizationGate
from taletrail.services.store_errors import store_errors

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        identity_provider: IdentityProvider,
        profiles: ProfileRepository,
        gate: AuthorizationGate,
    ) -> None:
        self.identity_provider = identity_provider
        self.profiles = profiles
        self.gate = gate

    def list_users(self, identity: Identity) -> list[UserProfileResponse]:
        self.gate.require_admin(identity)
        with store_errors("Failed to fetch users"):
            profiles = self.profiles.list_profiles()
        return [self._create_profile_response(profile) for profile in profiles]

    def create_user(
        self, identity: Identity, request: CreateUserRequest
    ) -> UserProfileResponse:
        """Create the account, then its profile. The account is removed again if the profile cannot be stored."""
        self.gate.require_admin(identity)
        email = request.email

        with store_errors("Failed to check existing users"):
            existing_profile = self.profiles.find_by_email(email)
        if existing_profile is not None:
            raise ConflictError(f"User with email {existing_profile.email} already exists")

        for account in self.identity_provider.list_users():
            if account.email and account.email.lower() == email.lower():
                raise ConflictError(f"User with email {account.email} already exists")

        account = self.identity_provider.create_user(email, request.password)
        try:
            profile = self.profiles.create_profile(
                UserProfileModel(id=account.id, email=email, role=request.role.value)
            )
        except IntegrityError as exc:
            self.identity_provider.delete_user(account.id)
            raise ConflictError("User with this email already exists") from exc
        except SQLAlchemyError as exc:
            logger.exception("Storing profile for %s failed", account.id)
            self.identity_provider.delete_user(account.id)
            raise InternalError("Failed to create user") from exc

        logger.info("Admin %s created user %s (%s)", identity.id, account.id, request.role)
        return self._create_profile_response(profile)

    def update_user_role(
        self, identity: Identity, user_id: UserId, request: UpdateRoleRequest
    ) -> UserProfileResponse:
        self.gate.require_admin(identity)
        if request.role is None:
            raise InvalidRequestError("Role is required")
        with store_errors("Failed to update user role"):
            profile = self.profiles.update_role(user_id, request.role.value)
        if profile is None:
            raise NotFoundError("User not found")
        return self._create_profile_response(profile)

    def delete_user(self, identity: Identity, user_id: UserId) -> None:
        self.gate.require_admin(identity)
        self.identity_provider.delete_user(user_id)
        with store_errors("Failed to delete user"):
            self.profiles.delete_profile(user_id)
        logger.info("Admin %s deleted user %s", identity.id, user_id)

    def cleanup_orphans(self, identity: Identity) -> CleanupResponse:
        """Delete accounts that have no profile. Accounts that fail to delete are skipped."""
        self.gate.require_admin(identity)
        accounts = self.identity_provider.list_users()
        with store_errors("Failed to clean up users"):
            profile_ids = self.profiles.list_profile_ids()

        deleted_users: list[str] = []
        for account in accounts:
            if account.id in profile_ids:
                continue
            try:
                self.identity_provider.delete_user(account.id)
            except IdentityServiceError:
                logger.warning("Could not delete orphaned user %s", account.id)
                continue
            deleted_users.append(account.email or account.id)

        return CleanupResponse(
            message=f"Cleaned up {len(deleted_users)} orphaned users",
            deleted_users=deleted_users,
        )

    # -- Internal helpers --
    @staticmethod
    def _create_profile_response(profile: UserProfileModel) -> UserProfileResponse:
        return UserProfileResponse(
            id=profile.id,
            email=profile.email,
            role=profile.role,
            created_at=profile.created_at,
        )
