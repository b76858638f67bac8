"""Unit tests for taletrail/services/game_service.py"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Generator
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import OperationalError

from taletrail.api.models import (
    CreateGameRequest,
    DuplicateGameRequest,
    GameResponse,
    RouteInfoPayload,
    UpdateGameRequest,
)
from taletrail.core.exceptions import (
    CreationFailedError,
    InternalError,
    InvalidRequestError,
    NotFoundError,
)
from taletrail.core.models import GameModel, Identity, RouteInfo
from taletrail.services.game_service import GameService
from tests.fakes import game_payload

OWNER = Identity(id="owner-id", email="owner@example.com")
STRANGER = Identity(id="stranger-id", email="stranger@example.com")


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the GameRepository using a dictionary of game models."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}

    def list_games(self, user_id: str) -> list[GameModel]:
        return [game for game in self._games.values() if game.user_id == user_id]

    def search_games(self, user_id: str, query: str) -> list[GameModel]:
        return [
            game
            for game in self.list_games(user_id)
            if query.lower() in f"{game.title} {game.city} {game.theme}".lower()
        ]

    def get_game(self, game_id: UUID, user_id: str) -> GameModel | None:
        game = self._games.get(game_id)
        if game is None or game.user_id != user_id:
            return None
        return game

    def create_game(self, game: GameModel) -> GameModel:
        now = datetime.now(timezone.utc)
        stored = replace(game, id=uuid4(), created_at=now, updated_at=now)
        self._games[stored.id] = stored
        return stored

    def update_game(self, game_id: UUID, user_id: str, changes: dict[str, Any]) -> GameModel | None:
        game = self.get_game(game_id, user_id)
        if game is None:
            return None
        self._games[game_id] = replace(game, **changes)
        return self._games[game_id]

    def update_route_info(self, game_id: UUID, user_id: str, route_info: RouteInfo) -> bool:
        return self.update_game(game_id, user_id, {"route_info": route_info}) is not None

    def delete_game(self, game_id: UUID, user_id: str) -> bool:
        if self.get_game(game_id, user_id) is None:
            return False
        del self._games[game_id]
        return True

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()


class BrokenRepository(MockRepository):
    """Every call fails like a lost database connection."""

    def _fail(self, *args: Any, **kwargs: Any) -> Any:
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    list_games = get_game = create_game = update_game = delete_game = _fail


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> GameService:
    return GameService(mock_repository)


def create(service: GameService, identity: Identity = OWNER, **overrides: Any) -> GameResponse:
    return service.create_game(identity, CreateGameRequest.model_validate(game_payload(**overrides)))


# --- CREATE ---
def test_create_game_sets_owner_and_route(service: GameService, mock_repository: MockRepository) -> None:
    response = create(service)

    assert isinstance(response, GameResponse)
    assert isinstance(response.id, UUID)
    assert response.user_id == OWNER.id
    assert response.route_info == RouteInfoPayload(total_distance="0.9 miles", total_time="15 min", is_valid=True)

    stored = mock_repository.get_game(response.id, OWNER.id)
    assert stored is not None
    assert stored.theme == "mystery"
    assert stored.content["locations"][0]["placeholderName"] == "{PUB_1}"


def test_create_then_get_round_trip(service: GameService) -> None:
    """All payload fields survive, the owner is the creator."""
    payload = game_payload()
    created = create(service)
    fetched = service.get_game(created.id, OWNER)

    assert fetched == created
    assert fetched.user_id == OWNER.id
    assert fetched.title == payload["title"]
    assert fetched.city == payload["city"]
    assert fetched.estimated_duration == payload["estimatedDuration"]
    assert fetched.location_placeholders == payload["locationPlaceholders"]
    assert fetched.content.to_document() == payload["content"]


def test_create_ignores_user_id_in_payload(service: GameService) -> None:
    """Owner always comes from the identity, never from the body."""
    response = create(service, userId=STRANGER.id)
    assert response.user_id == OWNER.id


def test_create_with_broken_store() -> None:
    with pytest.raises(CreationFailedError, match="Failed to create game"):
        create(GameService(BrokenRepository()))


# --- READ ---
def test_get_someone_elses_game(service: GameService) -> None:
    created = create(service)
    with pytest.raises(NotFoundError):
        service.get_game(created.id, STRANGER)
    with pytest.raises(NotFoundError):
        service.get_game(uuid4(), OWNER)


def test_list_games(service: GameService) -> None:
    create(service, title="mine")
    create(service, STRANGER, title="theirs")

    assert [game.title for game in service.list_games(OWNER)] == ["mine"]
    assert [game.title for game in service.list_games(STRANGER)] == ["theirs"]


def test_list_games_with_estimated_routes(service: GameService, mock_repository: MockRepository) -> None:
    created = create(service)
    mock_repository.update_route_info(created.id, OWNER.id, RouteInfo("9 km", "2 hours", True))

    assert service.list_games(OWNER)[0].route_info.total_distance == "9 km"
    assert service.list_games(OWNER, estimate_routes=True)[0].route_info.total_distance == "0.9 miles"
    # not persisted
    assert mock_repository.get_game(created.id, OWNER.id).route_info.total_distance == "9 km"


def test_search_games(service: GameService) -> None:
    create(service, title="Smugglers", city="Whitby")
    create(service, title="Ale and Arson", city="Leeds")

    assert [game.title for game in service.search_games(OWNER, "whitby")] == ["Smugglers"]
    assert len(service.search_games(OWNER, "   ")) == 2


def test_store_failure_is_generic() -> None:
    with pytest.raises(InternalError) as error:
        GameService(BrokenRepository()).list_games(OWNER)
    assert "connection refused" not in error.value.message


# --- UPDATE ---
def test_partial_update(service: GameService) -> None:
    created = create(service)
    updated = service.update_game(created.id, OWNER, UpdateGameRequest.model_validate({"title": "New title"}))

    assert updated.title == "New title"
    assert updated.city == created.city
    assert updated.route_info == created.route_info


def test_update_content_recomputes_route(service: GameService) -> None:
    created = create(service, location_count=3)
    new_content = game_payload(location_count=5)["content"]
    updated = service.update_game(created.id, OWNER, UpdateGameRequest.model_validate({"content": new_content}))

    assert len(updated.content.locations) == 5
    assert updated.route_info == RouteInfoPayload(total_distance="1.5 miles", total_time="25 min", is_valid=True)


def test_update_with_null_fields_changes_nothing(service: GameService) -> None:
    created = create(service)
    updated = service.update_game(created.id, OWNER, UpdateGameRequest.model_validate({"title": None}))
    assert updated == created


def test_update_someone_elses_game(service: GameService, mock_repository: MockRepository) -> None:
    created = create(service)
    with pytest.raises(NotFoundError):
        service.update_game(created.id, STRANGER, UpdateGameRequest.model_validate({"title": "hijacked"}))
    assert mock_repository.get_game(created.id, OWNER.id).title == created.title


# --- ROUTE INFO ---
def test_update_route_info(service: GameService) -> None:
    created = create(service)
    route = RouteInfoPayload(total_distance="1.1 miles", total_time="22 min", is_valid=True)

    assert service.update_route_info(created.id, OWNER, route) is True
    assert service.get_game(created.id, OWNER).route_info == route


def test_update_route_info_not_owned(service: GameService, mock_repository: MockRepository) -> None:
    created = create(service)
    route = RouteInfoPayload(total_distance="1.1 miles", total_time="22 min", is_valid=True)

    assert service.update_route_info(created.id, STRANGER, route) is False
    assert service.update_route_info(uuid4(), OWNER, route) is False
    assert mock_repository.get_game(created.id, OWNER.id).route_info == RouteInfo("0.9 miles", "15 min", True)


def test_update_route_info_is_required(service: GameService) -> None:
    created = create(service)
    with pytest.raises(InvalidRequestError, match="Route info is required"):
        service.update_route_info(created.id, OWNER, None)


# --- DELETE ---
def test_delete_game(service: GameService) -> None:
    created = create(service)

    assert service.delete_game(created.id, STRANGER) is False
    assert service.delete_game(created.id, OWNER) is True
    with pytest.raises(NotFoundError):
        service.get_game(created.id, OWNER)
    assert service.delete_game(created.id, OWNER) is False


# --- DUPLICATE ---
def test_duplicate_game(service: GameService) -> None:
    created = create(service)
    copy = service.duplicate_game(OWNER, DuplicateGameRequest(game_id=created.id))

    assert copy.id != created.id
    assert copy.title == f"{created.title} (Copy)"
    assert copy.user_id == OWNER.id
    assert copy.content == created.content
    assert len(service.list_games(OWNER)) == 2


def test_duplicate_requires_ownership(service: GameService) -> None:
    created = create(service)
    with pytest.raises(NotFoundError):
        service.duplicate_game(STRANGER, DuplicateGameRequest(game_id=created.id))
    with pytest.raises(InvalidRequestError):
        service.duplicate_game(OWNER, DuplicateGameRequest())
