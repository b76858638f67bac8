"""Orchestration of AI content generation (free-form or based on a template)."""

import logging
from typing import Callable

from taletrail.ai.prompts import build_template_instructions
from taletrail.ai.service import AIService
from taletrail.api.models import (
    GeneratedContent,
    GeneratedFromTemplateResponse,
    GenerationRequest,
    TemplateGenerationRequest,
)
from taletrail.core.exceptions import InvalidRequestError
from taletrail.services.template_service import TemplateService

logger = logging.getLogger(__name__)

AIServiceFactory = Callable[[str], AIService]

# Template-based games do not let the caller choose these (yet)
TEMPLATE_PUB_COUNT = 5
TEMPLATE_PUZZLES_PER_PUB = 2
TEMPLATE_DURATION_MINUTES = 120


class GenerationService:
    def __init__(self, templates: TemplateService, ai_factory: AIServiceFactory) -> None:
        self.templates = templates
        self.ai_factory = ai_factory

    def generate_game(self, request: GenerationRequest) -> GeneratedContent:
        if not (request.theme and request.city and request.difficulty):
            raise InvalidRequestError("Missing required fields")
        ai_service = self.ai_factory(request.provider)
        return ai_service.generate_game_content(request)

    def generate_from_template(
        self, request: TemplateGenerationRequest
    ) -> GeneratedFromTemplateResponse:
        if request.template_id is None or not request.city:
            raise InvalidRequestError("Template ID and city are required")

        template = self.templates.fetch_template(request.template_id)
        logger.info("Generating game from template %r", template.name)
        ai_service = self.ai_factory(request.provider)

        generation_request = GenerationRequest(
            theme=template.theme,
            city=request.city,
            city_area=request.city_area,
            difficulty=template.difficulty,
            pub_count=TEMPLATE_PUB_COUNT,
            puzzles_per_pub=TEMPLATE_PUZZLES_PER_PUB,
            estimated_duration=TEMPLATE_DURATION_MINUTES,
            custom_instructions=build_template_instructions(
                template, request.custom_instructions
            ),
            provider=request.provider,
        )
        content = ai_service.generate_game_content(generation_request)
        return GeneratedFromTemplateResponse.model_validate(
            {
                **content.model_dump(by_alias=True),
                "template": {
                    "id": template.id,
                    "name": template.name,
                    "description": template.description,
                },
            }
        )
