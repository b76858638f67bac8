from fastapi import APIRouter, Depends

from taletrail.api.dependencies import get_current_identity, get_generation_service
from taletrail.api.models import (
    GeneratedContent,
    GeneratedFromTemplateResponse,
    GenerationRequest,
    TemplateGenerationRequest,
)
from taletrail.core.models import Identity
from taletrail.services.generation_service import GenerationService

generation_router = APIRouter(prefix="/api", tags=["generation"])


@generation_router.post("/generate-game", response_model=GeneratedContent)
def generate_game(
    request: GenerationRequest,
    _: Identity = Depends(get_current_identity),
    service: GenerationService = Depends(get_generation_service),
) -> GeneratedContent:
    return service.generate_game(request)


@generation_router.post(
    "/generate-from-template", response_model=GeneratedFromTemplateResponse
)
def generate_from_template(
    request: TemplateGenerationRequest,
    _: Identity = Depends(get_current_identity),
    service: GenerationService = Depends(get_generation_service),
) -> GeneratedFromTemplateResponse:
    return service.generate_from_template(request)
