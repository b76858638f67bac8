"""
Walking route estimation for a game's pub sequence.

No routing API is involved: the estimate is a linear heuristic on the number of stops
(0.3 miles and 5 minutes of walking per pub). It only depends on how many locations there are,
so reordering the locations does not change the result.
"""

import math
from dataclasses import replace
from typing import Any, Iterable, Sequence

from taletrail.core.models import GameModel, RouteInfo

MILES_PER_PUB = 0.3
MINUTES_PER_PUB = 5

NO_ROUTE = RouteInfo(total_distance="0 miles", total_time="0 minutes", is_valid=False)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _format_miles(tenths: int) -> str:
    """12 -> '1.2', 30 -> '3'"""
    miles = tenths / 10
    if miles.is_integer():
        return str(int(miles))
    return str(miles)


def estimate_route(locations: Sequence[Any]) -> RouteInfo:
    """Approximate distance and walking time for visiting the locations in order."""
    pub_count = len(locations)
    if pub_count < 2:
        return NO_ROUTE

    distance_tenths = _round_half_up(pub_count * MILES_PER_PUB * 10)
    minutes = _round_half_up(pub_count * MINUTES_PER_PUB)
    return RouteInfo(
        total_distance=f"{_format_miles(distance_tenths)} miles",
        total_time=f"{minutes} min",
        is_valid=True,
    )


def with_route_info(game: GameModel) -> GameModel:
    """Copy of the game with route info recomputed from its locations."""
    return replace(game, route_info=estimate_route(game.locations))


def with_route_info_for_games(games: Iterable[GameModel]) -> list[GameModel]:
    return [with_route_info(game) for game in games]
