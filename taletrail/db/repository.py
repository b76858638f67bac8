"""Protocol repositories (implemented with SQL Alchemy in sql_repository.py, mocked with dictionaries in the tests)"""

from typing import Any, Optional, Protocol
from uuid import UUID

from taletrail.core.models import (
    GameModel,
    GameTemplateModel,
    RouteInfo,
    UserId,
    UserProfileModel,
)


class GameRepository(Protocol):
    """Persistence of games. Every lookup is scoped to the owner."""

    def list_games(self, user_id: UserId) -> list[GameModel]:
        """All games of a user, newest first."""
        ...

    def search_games(self, user_id: UserId, query: str) -> list[GameModel]:
        """Games of a user whose title, city or theme contain the query (case-insensitive)."""
        ...

    def get_game(self, game_id: UUID, user_id: UserId) -> GameModel | None:
        """Get game by ID, if the record exists and belongs to the user."""
        ...

    def create_game(self, game: GameModel) -> GameModel:
        """Store new game and return the stored data, including the newly assigned ID."""
        ...

    def update_game(
        self, game_id: UUID, user_id: UserId, changes: dict[str, Any]
    ) -> GameModel | None:
        """Apply a partial update (keys are GameModel field names) to an owned record."""
        ...

    def update_route_info(
        self, game_id: UUID, user_id: UserId, route_info: RouteInfo
    ) -> bool:
        """Persist route info on an owned record. False if there is no such record."""
        ...

    def delete_game(self, game_id: UUID, user_id: UserId) -> bool:
        """Remove an owned game's record. False if there is no such record."""
        ...


class ProfileRepository(Protocol):
    def get_profile(self, user_id: UserId) -> UserProfileModel | None: ...

    def list_profiles(self) -> list[UserProfileModel]: ...

    def list_profile_ids(self) -> set[UserId]: ...

    def find_by_email(self, email: str) -> UserProfileModel | None:
        """Case-insensitive email lookup."""
        ...

    def create_profile(self, profile: UserProfileModel) -> UserProfileModel: ...

    def update_role(self, user_id: UserId, role: str) -> UserProfileModel | None: ...

    def delete_profile(self, user_id: UserId) -> bool: ...


class TemplateRepository(Protocol):
    def list_templates(
        self, theme: Optional[str] = None, difficulty: Optional[str] = None
    ) -> list[GameTemplateModel]:
        """Templates ordered by name, optionally filtered."""
        ...

    def get_template(self, template_id: UUID) -> GameTemplateModel | None: ...

    def create_template(self, template: GameTemplateModel) -> GameTemplateModel: ...

    def update_template(
        self, template_id: UUID, template: GameTemplateModel
    ) -> GameTemplateModel | None: ...

    def delete_template(self, template_id: UUID) -> bool: ...
