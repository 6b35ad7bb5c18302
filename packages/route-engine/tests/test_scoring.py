from __future__ import annotations

import asyncio

import pytest

from route_engine.exceptions import ProviderError
from route_engine.models import Coordinate, PoiElement, RouteGeometry, SafetyCategory
from route_engine.scoring import SAMPLE_RADII, RouteSafetyScorer, sample_indices


def build_geometry(point_count: int) -> RouteGeometry:
    points = tuple(Coordinate(lat=17.0 + i * 0.001, lng=78.0 + i * 0.001) for i in range(point_count))
    return RouteGeometry(points=points, distance_meters=1000.0, duration_seconds=120.0)


def poi_elements(count: int, center: Coordinate) -> list[PoiElement]:
    return [PoiElement(category=SafetyCategory.STREET_LAMP, coordinate=center) for _ in range(count)]


class ScriptedPoiProvider:
    def __init__(self, counts: list[int | Exception]) -> None:
        self._counts = counts
        self.calls: list[tuple[Coordinate, dict]] = []

    async def search(self, center: Coordinate, radii) -> list[PoiElement]:
        position = len(self.calls)
        self.calls.append((center, dict(radii)))
        outcome = self._counts[position]
        if isinstance(outcome, Exception):
            raise outcome
        return poi_elements(outcome, center)


def test_sample_indices_are_evenly_spaced() -> None:
    assert sample_indices(10) == [0, 2, 4, 6, 8]
    assert sample_indices(7) == [0, 1, 2, 4, 5]
    assert sample_indices(2) == [0, 0, 0, 1, 1]


@pytest.mark.asyncio
async def test_score_sums_element_counts_across_samples() -> None:
    provider = ScriptedPoiProvider([1, 0, 2, 3, 4])
    scorer = RouteSafetyScorer(provider)

    score = await scorer.score(build_geometry(10))

    assert score == 10
    assert len(provider.calls) == 5
    assert provider.calls[0][1] == SAMPLE_RADII
    assert SAMPLE_RADII[SafetyCategory.POLICE] == 500.0
    assert SAMPLE_RADII[SafetyCategory.STREET_LAMP] == 800.0


@pytest.mark.asyncio
async def test_score_samples_the_expected_points() -> None:
    geometry = build_geometry(10)
    provider = ScriptedPoiProvider([0, 0, 0, 0, 0])

    await RouteSafetyScorer(provider).score(geometry)

    sampled = {center for center, _ in provider.calls}
    assert sampled == {geometry.points[i] for i in (0, 2, 4, 6, 8)}


@pytest.mark.asyncio
async def test_score_is_zero_without_nearby_pois() -> None:
    provider = ScriptedPoiProvider([0, 0, 0, 0, 0])
    assert await RouteSafetyScorer(provider).score(build_geometry(5)) == 0


@pytest.mark.asyncio
async def test_failed_sample_contributes_zero_without_aborting() -> None:
    provider = ScriptedPoiProvider([2, ProviderError("overpass down"), 1, ProviderError("again"), 3])

    score = await RouteSafetyScorer(provider).score(build_geometry(20))

    assert score == 6
    assert len(provider.calls) == 5


@pytest.mark.asyncio
async def test_timed_out_sample_contributes_zero() -> None:
    class SlowPoiProvider:
        def __init__(self) -> None:
            self.calls = 0

        async def search(self, center: Coordinate, radii) -> list[PoiElement]:
            self.calls += 1
            if self.calls == 1:
                await asyncio.sleep(1)
            return poi_elements(1, center)

    scorer = RouteSafetyScorer(SlowPoiProvider(), call_timeout_seconds=0.05)
    assert await scorer.score(build_geometry(5)) == 4


@pytest.mark.asyncio
async def test_adding_a_poi_never_lowers_the_score() -> None:
    base = await RouteSafetyScorer(ScriptedPoiProvider([1, 1, 0, 2, 0])).score(build_geometry(8))
    richer = await RouteSafetyScorer(ScriptedPoiProvider([1, 1, 1, 2, 0])).score(build_geometry(8))
    assert richer >= base
    assert richer == base + 1


@pytest.mark.asyncio
async def test_malformed_sample_payload_is_isolated() -> None:
    provider = ScriptedPoiProvider([2, AttributeError("'str' object has no attribute 'get'"), 1, 0, 0])

    score = await RouteSafetyScorer(provider).score(build_geometry(10))

    assert score == 3


@pytest.mark.asyncio
async def test_failed_samples_are_reported() -> None:
    events: list[str] = []
    provider = ScriptedPoiProvider([ProviderError("down"), 1, ProviderError("down"), 1, 1])

    await RouteSafetyScorer(provider, on_failure=events.append).score(build_geometry(10))

    assert events == ["provider_sample_failed", "provider_sample_failed"]


@pytest.mark.asyncio
async def test_zero_retries_fail_loudly_instead_of_scoring_zero() -> None:
    provider = ScriptedPoiProvider([1, 1, 1, 1, 1])

    with pytest.raises(ValueError):
        await RouteSafetyScorer(provider, retries=0).score(build_geometry(10))
    assert provider.calls == []
