"""Turn raw model output into GeneratedContent."""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from taletrail.api.models import GeneratedContent
from taletrail.core.exceptions import GenerationError

logger = logging.getLogger(__name__)

FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
OUTERMOST_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
TRAILING_COMMA = re.compile(r",\s*([}\]])")

REQUIRED_KEYS = ("story", "locations", "puzzles")


def extract_json(text: str) -> str:
    """JSON from a ```json fence if there is one, else the outermost {...} of the text."""
    fenced = FENCED_JSON.search(text)
    if fenced:
        return fenced.group(1)
    outermost = OUTERMOST_OBJECT.search(text)
    if outermost:
        return outermost.group(0)
    raise GenerationError("No JSON found in AI response")


def _loads(json_string: str) -> Any:
    try:
        return json.loads(json_string)
    except json.JSONDecodeError:
        # second chance: models like to leave trailing commas
        try:
            return json.loads(TRAILING_COMMA.sub(r"\1", json_string))
        except json.JSONDecodeError as exc:
            logger.error("Unparseable AI response: %.500s", json_string)
            raise GenerationError(f"Failed to parse AI response: {exc.msg}") from exc


def parse_generated_content(text: str) -> GeneratedContent:
    parsed = _loads(extract_json(text))
    if not isinstance(parsed, dict) or any(key not in parsed for key in REQUIRED_KEYS):
        raise GenerationError(
            "Invalid response structure from AI - missing required fields"
        )
    try:
        return GeneratedContent.model_validate(parsed)
    except ValidationError as exc:
        logger.error("AI response does not match the expected structure: %s", exc)
        raise GenerationError("Invalid response structure from AI") from exc
