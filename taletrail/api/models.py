"""Requests and Response models (JSON keys are camelCase, python attributes snake_case)"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from taletrail.core.shared_types import AIProvider, Difficulty, Role, Theme


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContentModel(CamelModel):
    """Part of a stored game document. Keys we do not know about are kept as they are."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


# --- GAME CONTENT ---
class SplashScreen(ContentModel):
    title: str = ""
    content: str = ""
    maps_link: Optional[str] = None
    video_link: Optional[str] = None
    image_link: Optional[str] = None


class Puzzle(ContentModel):
    id: Optional[str] = None
    title: str = ""
    narrative: str = ""
    type: str = ""
    content: str = ""
    answer: str = ""
    clues: list[str] = Field(default_factory=list)
    difficulty: int = Field(default=1, ge=1, le=5)
    order: int = 0
    local_context: Optional[str] = None
    video_link: Optional[str] = None
    image_link: Optional[str] = None


class PubLocation(ContentModel):
    id: Optional[str] = None
    order: int = 0
    placeholder_name: str = ""
    actual_name: Optional[str] = None
    venue_type: Optional[str] = None
    narrative: str = ""
    puzzles: list[Puzzle] = Field(default_factory=list)
    transition_text: str = ""
    maps_link: Optional[str] = None
    video_link: Optional[str] = None
    image_link: Optional[str] = None
    walking_time: Optional[str] = None
    area_description: Optional[str] = None


class GameContent(ContentModel):
    intro: Optional[SplashScreen] = None
    locations: list[PubLocation] = Field(default_factory=list)
    resolution: Optional[SplashScreen] = None

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RouteInfoPayload(CamelModel):
    total_distance: str
    total_time: str
    is_valid: bool


# --- GAME REQUESTS ---
class CreateGameRequest(CamelModel):
    """Allow-list of the fields a caller may set. Anything else in the body is ignored."""

    title: str = Field(min_length=1)
    theme: Theme
    city: str = Field(min_length=1)
    difficulty: Difficulty
    estimated_duration: int = Field(default=120, gt=0)
    pub_count: int = Field(default=5, ge=0)
    puzzles_per_pub: int = Field(default=2, ge=0)
    content: GameContent = Field(default_factory=GameContent)
    location_placeholders: dict[str, Any] = Field(default_factory=dict)


class UpdateGameRequest(CamelModel):
    """Partial update. Only fields present (and not null) in the body are applied."""

    title: Optional[str] = Field(default=None, min_length=1)
    theme: Optional[Theme] = None
    city: Optional[str] = Field(default=None, min_length=1)
    difficulty: Optional[Difficulty] = None
    estimated_duration: Optional[int] = Field(default=None, gt=0)
    pub_count: Optional[int] = Field(default=None, ge=0)
    puzzles_per_pub: Optional[int] = Field(default=None, ge=0)
    content: Optional[GameContent] = None
    location_placeholders: Optional[dict[str, Any]] = None

    def changes(self) -> dict[str, Any]:
        """Field name -> new value, for the fields the caller actually sent."""
        changed: dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, GameContent):
                value = value.to_document()
            elif isinstance(value, (Theme, Difficulty)):
                value = value.value
            changed[name] = value
        return changed


class UpdateRouteInfoRequest(CamelModel):
    route_info: Optional[RouteInfoPayload] = None


class DuplicateGameRequest(CamelModel):
    game_id: Optional[UUID] = None


# --- GAME RESPONSES ---
class GameResponse(CamelModel):
    id: UUID
    user_id: str
    title: str
    theme: str
    city: str
    difficulty: str
    estimated_duration: int
    pub_count: int
    puzzles_per_pub: int
    content: GameContent
    location_placeholders: dict[str, Any]
    route_info: Optional[RouteInfoPayload] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SuccessResponse(BaseModel):
    success: bool = True


# --- TEMPLATES ---
class TemplateRequest(CamelModel):
    """Templates are always written as a whole (create and update)."""

    name: str = Field(min_length=1)
    theme: Theme
    description: str = Field(min_length=1)
    story_framework: str = Field(min_length=1)
    character_types: list[str] = Field(min_length=1)
    puzzle_types: list[str] = Field(min_length=1)
    difficulty: Difficulty


class TemplateResponse(CamelModel):
    id: UUID
    name: str
    theme: str
    description: str
    story_framework: str
    character_types: list[str]
    puzzle_types: list[str]
    difficulty: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- USER ADMINISTRATION ---
class CreateUserRequest(CamelModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    role: Role

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        value = value.strip()
        if "@" not in value:
            raise ValueError(f"{value!r} is not an email address.")
        return value


class UpdateRoleRequest(CamelModel):
    role: Optional[Role] = None


class UserProfileResponse(CamelModel):
    id: str
    email: str
    role: str
    created_at: Optional[datetime] = None


class CleanupResponse(CamelModel):
    message: str
    deleted_users: list[str]


# --- CONTENT GENERATION ---
class GenerationRequest(CamelModel):
    theme: Optional[Theme] = None
    city: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    city_area: Optional[str] = None
    pub_count: int = Field(default=5, ge=1, le=20)
    puzzles_per_pub: int = Field(default=2, ge=1, le=10)
    estimated_duration: int = Field(default=120, gt=0)
    custom_instructions: Optional[str] = None
    provider: AIProvider = AIProvider.OPENAI


class TemplateGenerationRequest(CamelModel):
    template_id: Optional[UUID] = None
    city: Optional[str] = None
    city_area: Optional[str] = None
    provider: AIProvider = AIProvider.GOOGLE
    custom_instructions: Optional[str] = None


class GeneratedStory(ContentModel):
    title: str
    intro: SplashScreen
    resolution: SplashScreen
    character_types: list[str] = Field(default_factory=list)


class GeneratedContent(ContentModel):
    story: GeneratedStory
    locations: list[PubLocation]
    puzzles: list[Puzzle]


class TemplateSummary(CamelModel):
    id: UUID
    name: str
    description: str


class GeneratedFromTemplateResponse(GeneratedContent):
    template: TemplateSummary
