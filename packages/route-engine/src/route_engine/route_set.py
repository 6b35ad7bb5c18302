from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable, Sequence
from enum import Enum

from route_engine.exceptions import NoRouteFoundError
from route_engine.models import Coordinate, RouteGeometry, RouteSelection, ScoredRoute
from route_engine.providers import RouteProvider
from route_engine.retry import attempt_or_none
from route_engine.scoring import RouteSafetyScorer
from route_engine.waypoints import offset_waypoints

logger = logging.getLogger(__name__)


class RouteSetStage(str, Enum):
    IDLE = "idle"
    GENERATING_ROUTES = "generating_routes"
    SCORING = "scoring"
    SELECTED = "selected"
    FAILED = "failed"


def select_safest_index(scores: Sequence[int]) -> int:
    if not scores:
        raise ValueError("scores must not be empty")
    best = 0
    for index, score in enumerate(scores):
        if score > scores[best]:
            best = index
    return best


def rank_scores(scores: Sequence[int]) -> list[int]:
    """1-based rank per position: highest score first, earlier position on ties."""
    order = sorted(range(len(scores)), key=lambda index: (-scores[index], index))
    ranks = [0] * len(scores)
    for rank, index in enumerate(order, start=1):
        ranks[index] = rank
    return ranks


def distance_km(distance_meters: float) -> float:
    return round(distance_meters / 1000, 2)


def duration_min(duration_seconds: float) -> int:
    # half up, as displayed by the navigator UI
    return math.floor(duration_seconds / 60 + 0.5)


class RouteSetBuilder:
    def __init__(
        self,
        route_provider: RouteProvider,
        scorer: RouteSafetyScorer,
        call_timeout_seconds: float = 10.0,
        retries: int = 1,
        on_failure: Callable[[str], None] | None = None,
    ) -> None:
        self._route_provider = route_provider
        self._scorer = scorer
        self._call_timeout_seconds = call_timeout_seconds
        self._retries = retries
        self._on_failure = on_failure

    async def build(self, source: Coordinate, destination: Coordinate) -> RouteSelection:
        self._log_stage(RouteSetStage.GENERATING_ROUTES)
        first_waypoint, second_waypoint = offset_waypoints(source, destination)
        direct, via_first, via_second = await asyncio.gather(
            self._fetch([source, destination], "direct"),
            self._fetch([source, first_waypoint, destination], "via_waypoint_1"),
            self._fetch([source, second_waypoint, destination], "via_waypoint_2"),
        )
        if direct is None:
            self._log_stage(RouteSetStage.FAILED)
            raise NoRouteFoundError("No route found between source and destination")

        geometries = [direct]
        for label, alternate in (("via_waypoint_1", via_first), ("via_waypoint_2", via_second)):
            if alternate is None:
                logger.info("alternate_route_unavailable", extra={"candidate": label})
                if self._on_failure:
                    self._on_failure("alternate_route_unavailable")
                continue
            geometries.append(alternate)

        self._log_stage(RouteSetStage.SCORING, route_count=len(geometries))
        scores = await asyncio.gather(*(self._scorer.score(geometry) for geometry in geometries))
        selected_index = select_safest_index(scores)
        ranks = rank_scores(scores)
        routes = tuple(
            ScoredRoute(
                geometry=geometry,
                safety_score=score,
                distance_km=distance_km(geometry.distance_meters),
                duration_min=duration_min(geometry.duration_seconds),
                rank=rank,
            )
            for geometry, score, rank in zip(geometries, scores, ranks)
        )
        self._log_stage(RouteSetStage.SELECTED, selected_index=selected_index, scores=list(scores))
        return RouteSelection(routes=routes, selected_index=selected_index)

    async def _fetch(self, waypoints: list[Coordinate], label: str) -> RouteGeometry | None:
        return await attempt_or_none(
            lambda: self._route_provider.route(waypoints),
            timeout_seconds=self._call_timeout_seconds,
            retries=self._retries,
            label=label,
        )

    def _log_stage(self, stage: RouteSetStage, **fields: object) -> None:
        logger.info("route_set_stage", extra={"stage": stage.value, **fields})
