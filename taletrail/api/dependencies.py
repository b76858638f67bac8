"""
Request-scoped wiring for the routers.

Every request gets its own database session, identity client and services. Tests replace
get_db and get_identity_provider through app.dependency_overrides.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taletrail.ai.service import AIService, create_ai_service
from taletrail.core.config import Settings, get_settings
from taletrail.core.exceptions import UnauthenticatedError
from taletrail.core.models import Identity
from taletrail.db.database import get_db
from taletrail.db.sql_repository import (
    SQLGameRepository,
    SQLProfileRepository,
    SQLTemplateRepository,
)
from taletrail.identity.provider import IdentityProvider
from taletrail.identity.supabase_provider import (
    SupabaseIdentityProvider,
    create_supabase_client,
)
from taletrail.services.admin_service import AdminService
from taletrail.services.authorization import AuthorizationGate
from taletrail.services.game_service import GameService
from taletrail.services.generation_service import AIServiceFactory, GenerationService
from taletrail.services.template_service import TemplateService

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_provider(
    settings: Settings = Depends(get_settings),
) -> IdentityProvider:
    return SupabaseIdentityProvider(create_supabase_client(settings))


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()
    return credentials.credentials


def get_current_identity(
    # resolved in order: a missing token is rejected before the identity client is built
    access_token: str = Depends(get_access_token),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> Identity:
    identity = identity_provider.get_current_user(access_token)
    if identity is None:
        raise UnauthenticatedError()
    return identity


def get_authorization_gate(db: Session = Depends(get_db)) -> AuthorizationGate:
    return AuthorizationGate(SQLProfileRepository(db))


def get_game_service(db: Session = Depends(get_db)) -> GameService:
    return GameService(SQLGameRepository(db))


def get_template_service(
    db: Session = Depends(get_db),
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> TemplateService:
    return TemplateService(SQLTemplateRepository(db), gate)


def get_admin_service(
    db: Session = Depends(get_db),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> AdminService:
    return AdminService(identity_provider, SQLProfileRepository(db), gate)


def get_ai_factory(settings: Settings = Depends(get_settings)) -> AIServiceFactory:
    def factory(provider: str) -> AIService:
        return create_ai_service(provider, settings)

    return factory


def get_generation_service(
    templates: TemplateService = Depends(get_template_service),
    ai_factory: AIServiceFactory = Depends(get_ai_factory),
) -> GenerationService:
    return GenerationService(templates, ai_factory)
