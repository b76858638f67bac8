"""
Admin checks.

Games are only ever accessible to their owner (the repositories scope every query by user id), the admin role
grants access to template management and user administration, and nothing else.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from taletrail.core.exceptions import AuthorizationError
from taletrail.core.models import Identity
from taletrail.core.shared_types import Role
from taletrail.db.repository import ProfileRepository

logger = logging.getLogger(__name__)


class AuthorizationGate:
    def __init__(self, profiles: ProfileRepository) -> None:
        self.profiles = profiles

    def is_admin(self, identity: Optional[Identity]) -> bool:
        """True iff the caller's profile has the admin role. Fails closed."""
        if identity is None:
            return False
        try:
            profile = self.profiles.get_profile(identity.id)
        except SQLAlchemyError:
            logger.warning("Role lookup failed for user %s", identity.id, exc_info=True)
            return False
        return profile is not None and profile.role == Role.ADMIN

    def require_admin(self, identity: Optional[Identity]) -> bool:
        if not self.is_admin(identity):
            raise AuthorizationError("Admin access required")
        return True
