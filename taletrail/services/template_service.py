"""Game template catalog: readable by every signed-in user, written by admins only."""

from typing import Optional
from uuid import UUID

from taletrail.api.models import TemplateRequest, TemplateResponse
from taletrail.core.exceptions import NotFoundError
from taletrail.core.models import GameTemplateModel, Identity
from taletrail.db.repository import TemplateRepository
from taletrail.services.authorization import AuthorizationGate
from taletrail.services.store_errors import store_errors

TEMPLATE_NOT_FOUND = "Template not found"


class TemplateService:
    def __init__(self, repository: TemplateRepository, gate: AuthorizationGate) -> None:
        self.repo = repository
        self.gate = gate

    def list_templates(
        self, theme: Optional[str] = None, difficulty: Optional[str] = None
    ) -> list[TemplateResponse]:
        with store_errors("Failed to fetch game templates"):
            templates = self.repo.list_templates(theme=theme, difficulty=difficulty)
        return [self._create_template_response(template) for template in templates]

    def get_template(self, template_id: UUID) -> TemplateResponse:
        return self._create_template_response(self.fetch_template(template_id))

    def create_template(
        self, identity: Identity, request: TemplateRequest
    ) -> TemplateResponse:
        self.gate.require_admin(identity)
        with store_errors("Failed to create template"):
            template = self.repo.create_template(self._to_model(request))
        return self._create_template_response(template)

    def update_template(
        self, template_id: UUID, identity: Identity, request: TemplateRequest
    ) -> TemplateResponse:
        self.gate.require_admin(identity)
        with store_errors("Failed to update template"):
            template = self.repo.update_template(template_id, self._to_model(request))
        if template is None:
            raise NotFoundError(TEMPLATE_NOT_FOUND)
        return self._create_template_response(template)

    def delete_template(self, template_id: UUID, identity: Identity) -> None:
        self.gate.require_admin(identity)
        with store_errors("Failed to delete template"):
            deleted = self.repo.delete_template(template_id)
        if not deleted:
            raise NotFoundError(TEMPLATE_NOT_FOUND)

    def fetch_template(self, template_id: UUID) -> GameTemplateModel:
        with store_errors("Failed to fetch template"):
            template = self.repo.get_template(template_id)
        if template is None:
            raise NotFoundError(TEMPLATE_NOT_FOUND)
        return template

    # -- Internal helpers --
    @staticmethod
    def _to_model(request: TemplateRequest) -> GameTemplateModel:
        return GameTemplateModel(
            name=request.name,
            theme=request.theme.value,
            description=request.description,
            story_framework=request.story_framework,
            character_types=request.character_types,
            puzzle_types=request.puzzle_types,
            difficulty=request.difficulty.value,
        )

    @staticmethod
    def _create_template_response(model: GameTemplateModel) -> TemplateResponse:
        return TemplateResponse(
            id=model.id,
            name=model.name,
            theme=model.theme,
            description=model.description,
            story_framework=model.story_framework,
            character_types=model.character_types,
            puzzle_types=model.puzzle_types,
            difficulty=model.difficulty,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
