from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from taletrail.api.dependencies import get_current_identity, get_template_service
from taletrail.api.models import SuccessResponse, TemplateRequest, TemplateResponse
from taletrail.core.models import Identity
from taletrail.core.shared_types import Difficulty, Theme
from taletrail.services.template_service import TemplateService

templates_router = APIRouter(prefix="/api/game-templates", tags=["templates"])


@templates_router.get("", response_model=list[TemplateResponse])
def list_templates(
    theme: Optional[Theme] = None,
    difficulty: Optional[Difficulty] = None,
    _: Identity = Depends(get_current_identity),
    service: TemplateService = Depends(get_template_service),
) -> list[TemplateResponse]:
    return service.list_templates(theme=theme, difficulty=difficulty)


@templates_router.get("/{template_id}", response_model=TemplateResponse)
def get_template(
    template_id: UUID,
    _: Identity = Depends(get_current_identity),
    service: TemplateService = Depends(get_template_service),
) -> TemplateResponse:
    return service.get_template(template_id)


@templates_router.post(
    "", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED
)
def create_template(
    request: TemplateRequest,
    identity: Identity = Depends(get_current_identity),
    service: TemplateService = Depends(get_template_service),
) -> TemplateResponse:
    return service.create_template(identity, request)


@templates_router.put("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: UUID,
    request: TemplateRequest,
    identity: Identity = Depends(get_current_identity),
    service: TemplateService = Depends(get_template_service),
) -> TemplateResponse:
    return service.update_template(template_id, identity, request)


@templates_router.delete("/{template_id}", response_model=SuccessResponse)
def delete_template(
    template_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: TemplateService = Depends(get_template_service),
) -> SuccessResponse:
    service.delete_template(template_id, identity)
    return SuccessResponse()
