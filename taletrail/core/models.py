"""
Boundary layer data model(s).

These objects can be used to communicate with the Services.
Hence, both the API layer (higher) and the db / identity layers (lower) use models defined here to send to/receive from a Service
(Decouples the data model specific to the DB layer or API layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

# Type aliases to make the models easier to read
UserId = str
JSONDocument = dict[str, Any]


@dataclass(frozen=True)
class Identity:
    """An authenticated caller, as reported by the identity service."""

    id: UserId
    email: Optional[str] = None


@dataclass(frozen=True)
class RouteInfo:
    """Distance / time summary of a game's location sequence."""

    total_distance: str
    total_time: str
    is_valid: bool


@dataclass
class GameModel:
    """Transport-safe representation of a game used between API, Service and DB layers."""

    user_id: UserId
    title: str
    theme: str
    city: str
    difficulty: str
    estimated_duration: int
    pub_count: int
    puzzles_per_pub: int
    content: JSONDocument = field(default_factory=dict)
    location_placeholders: JSONDocument = field(default_factory=dict)
    route_info: Optional[RouteInfo] = None
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def locations(self) -> list[Any]:
        return self.content.get("locations") or []


@dataclass
class UserProfileModel:
    id: UserId
    email: str
    role: str
    created_at: Optional[datetime] = None


@dataclass
class GameTemplateModel:
    name: str
    theme: str
    description: str
    story_framework: str
    character_types: list[str]
    puzzle_types: list[str]
    difficulty: str
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
