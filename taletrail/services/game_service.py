"""Orchestration of communication from the games router to the domain and persistence layers (and the reverse direction)."""

import logging
from dataclasses import replace
from uuid import UUID

from taletrail.api.models import (
    CreateGameRequest,
    DuplicateGameRequest,
    GameContent,
    GameResponse,
    RouteInfoPayload,
    UpdateGameRequest,
)
from taletrail.core.exceptions import (
    CreationFailedError,
    InvalidRequestError,
    NotFoundError,
)
from taletrail.core.models import GameModel, Identity, RouteInfo
from taletrail.db.repository import GameRepository
from taletrail.services.store_errors import store_errors
from taletrail.trail.route import (
    estimate_route,
    with_route_info,
    with_route_info_for_games,
)

logger = logging.getLogger(__name__)

GAME_NOT_FOUND = "Game not found"


class GameService:
    """Owner-scoped CRUD on games.

    A game that exists but belongs to someone else is reported exactly like a game that does not exist.
    """

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def list_games(
        self, identity: Identity, estimate_routes: bool = False
    ) -> list[GameResponse]:
        with store_errors("Failed to fetch games"):
            games = self.repo.list_games(identity.id)
        if estimate_routes:
            games = with_route_info_for_games(games)
        return [self._create_game_response(game) for game in games]

    def search_games(self, identity: Identity, query: str) -> list[GameResponse]:
        query = query.strip()
        if not query:
            return self.list_games(identity)
        with store_errors("Failed to search games"):
            games = self.repo.search_games(identity.id, query)
        return [self._create_game_response(game) for game in games]

    def get_game(self, game_id: UUID, identity: Identity) -> GameResponse:
        return self._create_game_response(self._fetch_game(game_id, identity))

    def create_game(
        self, identity: Identity, request: CreateGameRequest
    ) -> GameResponse:
        """Store a new game owned by the caller, with route info estimated from its locations."""
        new_game = with_route_info(
            GameModel(
                user_id=identity.id,
                title=request.title,
                theme=request.theme.value,
                city=request.city,
                difficulty=request.difficulty.value,
                estimated_duration=request.estimated_duration,
                pub_count=request.pub_count,
                puzzles_per_pub=request.puzzles_per_pub,
                content=request.content.to_document(),
                location_placeholders=request.location_placeholders,
            )
        )
        with store_errors("Failed to create game", CreationFailedError):
            stored_game = self.repo.create_game(new_game)
        logger.info("User %s created game %s", identity.id, stored_game.id)
        return self._create_game_response(stored_game)

    def update_game(
        self, game_id: UUID, identity: Identity, request: UpdateGameRequest
    ) -> GameResponse:
        """
        Apply a partial update.
        ----
        Sending `content` replaces the whole content document, and the route info gets re-estimated
        from the new locations in the same write (overwriting route info saved through update_route_info).
        """
        changes = request.changes()
        if "content" in changes:
            changes["route_info"] = estimate_route(changes["content"].get("locations") or [])

        with store_errors("Failed to update game"):
            if not changes:
                updated = self.repo.get_game(game_id, identity.id)
            else:
                updated = self.repo.update_game(game_id, identity.id, changes)
        if updated is None:
            raise NotFoundError(GAME_NOT_FOUND)
        return self._create_game_response(updated)

    def update_route_info(
        self, game_id: UUID, identity: Identity, route_info: RouteInfoPayload | None
    ) -> bool:
        """Persist route info computed elsewhere, as is. False when the caller owns no such game."""
        if route_info is None:
            raise InvalidRequestError("Route info is required")
        with store_errors("Failed to update route info"):
            saved = self.repo.update_route_info(
                game_id,
                identity.id,
                RouteInfo(
                    total_distance=route_info.total_distance,
                    total_time=route_info.total_time,
                    is_valid=route_info.is_valid,
                ),
            )
        logger.info("Route info for game %s saved: %s", game_id, saved)
        return saved

    def delete_game(self, game_id: UUID, identity: Identity) -> bool:
        with store_errors("Failed to delete game"):
            return self.repo.delete_game(game_id, identity.id)

    def duplicate_game(
        self, identity: Identity, request: DuplicateGameRequest
    ) -> GameResponse:
        if request.game_id is None:
            raise InvalidRequestError("Game ID is required")
        original = self._fetch_game(request.game_id, identity)
        copy = replace(
            original,
            id=None,
            title=f"{original.title} (Copy)",
            user_id=identity.id,
            created_at=None,
            updated_at=None,
        )
        with store_errors("Failed to duplicate game", CreationFailedError):
            stored_copy = self.repo.create_game(copy)
        return self._create_game_response(stored_copy)

    # -- Internal helpers --
    def _create_game_response(self, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse."""
        route_info = None
        if model.route_info is not None:
            route_info = RouteInfoPayload(
                total_distance=model.route_info.total_distance,
                total_time=model.route_info.total_time,
                is_valid=model.route_info.is_valid,
            )
        return GameResponse(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            theme=model.theme,
            city=model.city,
            difficulty=model.difficulty,
            estimated_duration=model.estimated_duration,
            pub_count=model.pub_count,
            puzzles_per_pub=model.puzzles_per_pub,
            content=GameContent.model_validate(model.content),
            location_placeholders=model.location_placeholders,
            route_info=route_info,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _fetch_game(self, game_id: UUID, identity: Identity) -> GameModel:
        """Attempt to find the caller's game in the repository and raise error if it fails."""
        with store_errors("Failed to fetch game"):
            game_model = self.repo.get_game(game_id, identity.id)
        if game_model is None:
            raise NotFoundError(GAME_NOT_FOUND)
        return game_model
