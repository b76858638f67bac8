"""Prompt text sent to the AI providers."""

from taletrail.api.models import GenerationRequest
from taletrail.core.models import GameTemplateModel
from taletrail.core.shared_types import PuzzleType, VenueType

SYSTEM_PROMPT = (
    "You are an experienced game designer who writes mystery and adventure pub crawl games. "
    "Your games combine a compelling story, fair but challenging puzzles and real local knowledge "
    "of the city they are played in. Every element serves the story."
)

RESPONSE_FORMAT = """{
  "story": {
    "title": "Game Title",
    "intro": {"title": "Welcome Title", "content": "Introduction and setup", "mapsLink": "Google Maps link to the first pub"},
    "resolution": {"title": "Resolution Title", "content": "Final resolution"},
    "characterTypes": ["detective", "witness", "suspect"]
  },
  "locations": [
    {
      "order": 1,
      "placeholderName": "{PUB_1}",
      "venueType": "traditional-pub",
      "narrative": "Story context for this pub",
      "transitionText": "Story bridge to the next location",
      "mapsLink": "Google Maps link",
      "walkingTime": "5-10 minutes to next pub",
      "areaDescription": "Short description of the neighbourhood"
    }
  ],
  "puzzles": [
    {
      "title": "Puzzle Title",
      "narrative": "Puzzle setup connected to the story",
      "type": "logic",
      "content": "The puzzle itself, with clear instructions",
      "answer": "Exact answer",
      "clues": ["subtle hint", "more obvious hint", "very clear hint"],
      "difficulty": 3,
      "order": 1,
      "localContext": "How the puzzle relates to the city"
    }
  ]
}"""


def _area_requirement(request: GenerationRequest) -> str:
    if request.city_area:
        return (
            f"Every pub MUST be in the {request.city_area} area of {request.city}. "
            f"Use fewer pubs rather than leaving {request.city_area}."
        )
    return f"Use the most popular, well documented pub crawl route in {request.city}."


def build_game_prompt(request: GenerationRequest) -> str:
    lines = [
        "Generate a complete pub crawl mystery game.",
        "",
        f"Theme: {request.theme}",
        f"City: {request.city}",
    ]
    if request.city_area:
        lines.append(f"City area / neighbourhood: {request.city_area}")
    lines += [
        f"Difficulty: {request.difficulty}",
        f"Number of pubs: {request.pub_count}",
        f"Puzzles per pub: {request.puzzles_per_pub}",
        f"Estimated duration: {request.estimated_duration} minutes",
    ]
    if request.custom_instructions:
        lines.append(f"Custom instructions: {request.custom_instructions}")

    lines += [
        "",
        "ROUTE:",
        "- Use real, existing pubs that are part of established pub crawl routes. Do not invent venues.",
        f"- {_area_requirement(request)}",
        "- Keep walking distance between consecutive pubs between 5 and 15 minutes.",
        f"- Venue types: {', '.join(venue.value for venue in VenueType)}.",
        "",
        "STORY AND PUZZLES:",
        "- Each location escalates the mystery and ends with a bridge to the next one.",
        "- Each puzzle reveals new information and is tied to its location and the city.",
        f"- Puzzle types: {', '.join(puzzle.value for puzzle in PuzzleType)}. Vary them.",
        f"- Match the {request.difficulty} difficulty; puzzle difficulty is 1-5.",
        "- Every answer must be specific and unambiguous; give 3 progressive clues.",
        "- Refer to pubs only through their placeholders ({PUB_1}, {PUB_2}, ...).",
        "",
        "Respond with ONLY a JSON object in exactly this format, no markdown, no text around it:",
        RESPONSE_FORMAT,
    ]
    return "\n".join(lines)


def build_template_instructions(
    template: GameTemplateModel, custom_instructions: str | None = None
) -> str:
    character_types = ", ".join(template.character_types)
    puzzle_types = ", ".join(template.puzzle_types)
    instructions = [
        "TEMPLATE-BASED GENERATION:",
        f"Template: {template.name}",
        f"Theme: {template.theme}",
        f"Story Framework: {template.story_framework}",
        f"Character Types: {character_types}",
        f"Puzzle Types: {puzzle_types}",
        f"Difficulty: {template.difficulty}",
        "",
        f'1. Follow the story framework: "{template.story_framework}"',
        f"2. Include these character types: {character_types}",
        f"3. Use these puzzle types: {puzzle_types}",
        f"4. Maintain the {template.difficulty} difficulty level",
        "5. Adapt the story to the chosen city and area while keeping the core framework",
    ]
    if custom_instructions:
        instructions += ["", f"Additional Instructions: {custom_instructions}"]
    return "\n".join(instructions)
