"""
AI content generation.

One small client per provider (same `complete` signature), selected by name in create_ai_service().
Clients are created per request, nothing is kept between calls.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import anthropic
import httpx
import openai
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from taletrail.ai.parsing import parse_generated_content
from taletrail.ai.prompts import SYSTEM_PROMPT, build_game_prompt
from taletrail.api.models import GeneratedContent, GenerationRequest
from taletrail.core.config import Settings
from taletrail.core.exceptions import GenerationError, InitializationError
from taletrail.core.shared_types import AIProvider

logger = logging.getLogger(__name__)

DEFAULT_MODELS: dict[AIProvider, str] = {
    AIProvider.OPENAI: "gpt-4o-mini",
    AIProvider.ANTHROPIC: "claude-3-5-sonnet-latest",
    AIProvider.GOOGLE: "gemini-2.0-flash",
}
TEMPERATURE = 0.8
MAX_TOKENS = 4000


class TextGenerator(Protocol):
    def complete(self, system_prompt: str, prompt: str) -> str: ...


@dataclass(frozen=True)
class AIConfig:
    provider: AIProvider
    api_key: str
    model: str


class OpenAITextGenerator:
    def __init__(self, config: AIConfig) -> None:
        self.config = config
        self.client = openai.OpenAI(api_key=config.api_key)

    def complete(self, system_prompt: str, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
        except openai.OpenAIError as exc:
            raise GenerationError(f"OpenAI generation failed: {exc}") from exc
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise GenerationError("No content generated from OpenAI")
        return content


class AnthropicTextGenerator:
    def __init__(self, config: AIConfig) -> None:
        self.config = config
        self.client = anthropic.Anthropic(api_key=config.api_key)

    def complete(self, system_prompt: str, prompt: str) -> str:
        try:
            response = self.client.messages.create(
                model=self.config.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                system=system_prompt,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AnthropicError as exc:
            raise GenerationError(f"Anthropic generation failed: {exc}") from exc
        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        if not text:
            raise GenerationError("No content generated from Anthropic")
        return text


class GoogleTextGenerator:
    def __init__(self, config: AIConfig) -> None:
        self.config = config
        self.client = genai.Client(api_key=config.api_key)

    def complete(self, system_prompt: str, prompt: str) -> str:
        try:
            response = self.client.models.generate_content(
                model=self.config.model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    temperature=TEMPERATURE,
                    max_output_tokens=MAX_TOKENS,
                ),
            )
        except (genai_errors.APIError, httpx.HTTPError) as exc:
            raise GenerationError(f"Google AI generation failed: {exc}") from exc
        # None when the candidate was blocked
        text = response.text
        if not text:
            raise GenerationError("No content generated from Google AI")
        return text


GENERATORS: dict[AIProvider, type] = {
    AIProvider.OPENAI: OpenAITextGenerator,
    AIProvider.ANTHROPIC: AnthropicTextGenerator,
    AIProvider.GOOGLE: GoogleTextGenerator,
}


class AIService:
    def __init__(self, generator: TextGenerator, provider: Optional[AIProvider] = None) -> None:
        self.generator = generator
        self.provider = provider

    def generate_game_content(self, request: GenerationRequest) -> GeneratedContent:
        prompt = build_game_prompt(request)
        logger.info(
            "Generating %s game for %s with %s", request.theme, request.city, self.provider
        )
        content = self.generator.complete(SYSTEM_PROMPT, prompt)
        return parse_generated_content(content)


def _api_key(provider: AIProvider, settings: Settings) -> Optional[str]:
    keys = {
        AIProvider.OPENAI: settings.openai_api_key,
        AIProvider.ANTHROPIC: settings.anthropic_api_key,
        AIProvider.GOOGLE: settings.google_ai_api_key,
    }
    return keys[provider]


def create_ai_service(provider: str, settings: Settings) -> AIService:
    try:
        selected = AIProvider(provider)
    except ValueError as exc:
        raise InitializationError(f"Unsupported AI provider: {provider}") from exc

    api_key = _api_key(selected, settings)
    if not api_key:
        raise InitializationError(
            f"API key not found for provider: {selected}. Please check your environment variables."
        )
    config = AIConfig(provider=selected, api_key=api_key, model=DEFAULT_MODELS[selected])
    return AIService(GENERATORS[selected](config), provider=selected)
