from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from taletrail.api.dependencies import get_current_identity, get_game_service
from taletrail.api.models import (
    CreateGameRequest,
    DuplicateGameRequest,
    GameResponse,
    SuccessResponse,
    UpdateGameRequest,
    UpdateRouteInfoRequest,
)
from taletrail.core.exceptions import InternalError, NotFoundError
from taletrail.core.models import Identity
from taletrail.services.game_service import GAME_NOT_FOUND, GameService

games_router = APIRouter(prefix="/api/games", tags=["games"])


@games_router.get("", response_model=list[GameResponse])
def list_games(
    estimate_routes: bool = Query(default=False, alias="estimateRoutes"),
    identity: Identity = Depends(get_current_identity),
    service: GameService = Depends(get_game_service),
) -> list[GameResponse]:
    return service.list_games(identity, estimate_routes=estimate_routes)


@games_router.get("/search", response_model=list[GameResponse])
def search_games(
    q: str = Query(default=""),
    identity: Identity = Depends(get_current_identity),
    service: GameService = Depends(get_game_service),
) -> list[GameResponse]:
    return service.search_games(identity, q)


@games_router.post("", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
def create_game(
    request: CreateGameRequest,
    identity: Identity = Depends(get_current_identity),
    service: GameService = Depends(get_game_service),
) -> GameResponse:
    return service.create_game(identity, request)


@games_router.post(
    "/duplicate", response_model=GameResponse, status_code=status.HTTP_201_CREATED
)
def duplicate_game(
    request: DuplicateGameRequest,
    identity: Identity = Depends(get_current_identity),
    service: GameService = Depends(get_game_service),
) -> GameResponse:
    return service.duplicate_game(identity, request)


@games_router.get("/{game_id}", response_model=GameResponse)
def get_game(
    game_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: GameService = Depends(get_game_service),
) -> GameResponse:
    return service.get_game(game_id, identity)


@games_router.put("/{game_id}", response_model=GameResponse)
def update_game(
    game_id: UUID,
    request: UpdateGameRequest,
    identity: Identity = Depends(get_current_identity),
    service: GameService = Depends(get_game_service),
) -> GameResponse:
    return service.update_game(game_id, identity, request)


@games_router.put("/{game_id}/route-info", response_model=SuccessResponse)
def update_route_info(
    game_id: UUID,
    request: UpdateRouteInfoRequest,
    identity: Identity = Depends(get_current_identity),
    service: GameService = Depends(get_game_service),
) -> SuccessResponse:
    if not service.update_route_info(game_id, identity, request.route_info):
        raise InternalError("Failed to update route info")
    return SuccessResponse()


@games_router.delete("/{game_id}", response_model=SuccessResponse)
def delete_game(
    game_id: UUID,
    identity: Identity = Depends(get_current_identity),
    service: GameService = Depends(get_game_service),
) -> SuccessResponse:
    if not service.delete_game(game_id, identity):
        raise NotFoundError(GAME_NOT_FOUND)
    return SuccessResponse()
