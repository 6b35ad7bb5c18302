from datetime import datetime, timezone

from fastapi.testclient import TestClient
from route_engine.exceptions import AddressNotFoundError, NoRouteFoundError

from navigator_api.app import create_app
from navigator_api.dependencies import get_navigation_service
from navigator_api.schemas.navigation import (
    HistoryItem,
    HistoryResult,
    NavigationResult,
    NearbySafetyResult,
    PlaceItem,
    RouteItem,
    SafetyPointItem,
)


class StubNavigationService:
    def __init__(self, failure: Exception | None = None) -> None:
        self._failure = failure
        self.navigate_calls: list[tuple[str | None, str, str]] = []

    async def navigate(self, user_id: str | None, source: str, destination: str) -> NavigationResult:
        self.navigate_calls.append((user_id, source, destination))
        if self._failure is not None:
            raise self._failure
        return NavigationResult(
            source=PlaceItem(display_name="Hyderabad Central, India", lat=17.385, lng=78.4867),
            destination=PlaceItem(display_name="Banjara Hills, India", lat=17.4, lng=78.5),
            routes=[
                RouteItem(
                    label="Route 1",
                    is_safest=True,
                    rank=1,
                    distance_km="3.00",
                    duration_min=7,
                    safety_score=4,
                    coordinates=[(17.385, 78.4867), (17.4, 78.5)],
                )
            ],
            selected_index=0,
            weather=None,
            nearby_safety=[],
            street_light_count=0,
        )

    async def nearby_safety(self, lat: float, lng: float) -> NearbySafetyResult:
        return NearbySafetyResult(
            items=[
                SafetyPointItem(
                    category="police",
                    label="police",
                    name="Banjara Hills PS",
                    distance_meters=120.5,
                    distance_km="0.12",
                    lat=lat,
                    lng=lng,
                )
            ]
        )

    async def current_weather(self, lat: float, lng: float):
        return None

    async def history(self, user_id: str) -> HistoryResult:
        return HistoryResult(
            items=[
                HistoryItem(
                    source=f"{user_id}-source",
                    destination="Banjara Hills, India",
                    created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
                )
            ]
        )


def build_client(service: StubNavigationService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_navigation_service] = lambda: service
    return TestClient(app)


def test_find_routes_response_shape() -> None:
    service = StubNavigationService()
    client = build_client(service)

    response = client.post(
        "/v1/navigation/routes",
        json={"source": "Hyderabad Central", "destination": "Banjara Hills"},
        headers={"x-user-id": "user-7"},
    )
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"]["selected_index"] == 0
    assert body["data"]["routes"][0]["distance_km"] == "3.00"
    assert body["data"]["routes"][0]["duration_min"] == 7
    assert body["data"]["routes"][0]["safety_score"] == 4
    assert body["data"]["weather"] is None
    assert service.navigate_calls == [("user-7", "Hyderabad Central", "Banjara Hills")]


def test_find_routes_without_user_header_passes_no_user() -> None:
    service = StubNavigationService()
    client = build_client(service)

    response = client.post("/v1/navigation/routes", json={"source": "a", "destination": "b"})

    assert response.status_code == 200
    assert service.navigate_calls == [(None, "a", "b")]


def test_find_routes_maps_address_not_found() -> None:
    client = build_client(StubNavigationService(failure=AddressNotFoundError("Atlantis")))

    response = client.post("/v1/navigation/routes", json={"source": "Atlantis", "destination": "Banjara Hills"})
    body = response.json()

    assert response.status_code == 404
    assert body["success"] is False
    assert body["error"]["code"] == "ADDRESS_NOT_FOUND"
    assert "Atlantis" in body["error"]["message"]


def test_find_routes_maps_no_route_found() -> None:
    client = build_client(StubNavigationService(failure=NoRouteFoundError("no direct route")))

    response = client.post("/v1/navigation/routes", json={"source": "a", "destination": "b"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NO_ROUTE_FOUND"


def test_find_routes_rejects_empty_addresses() -> None:
    client = build_client(StubNavigationService())

    response = client.post("/v1/navigation/routes", json={"source": "", "destination": "b"})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_nearby_safety_response_shape() -> None:
    client = build_client(StubNavigationService())

    response = client.get("/v1/navigation/nearby-safety?lat=17.4&lng=78.5")
    body = response.json()

    assert response.status_code == 200
    assert body["data"]["items"][0]["name"] == "Banjara Hills PS"


def test_nearby_safety_rejects_invalid_latitude() -> None:
    client = build_client(StubNavigationService())

    response = client.get("/v1/navigation/nearby-safety?lat=120&lng=78.5")

    assert response.status_code == 422


def test_weather_returns_null_when_unavailable() -> None:
    client = build_client(StubNavigationService())

    response = client.get("/v1/navigation/weather?lat=17.4&lng=78.5")

    assert response.status_code == 200
    assert response.json()["data"] is None


def test_history_uses_user_header() -> None:
    client = build_client(StubNavigationService())

    response = client.get("/v1/navigation/history", headers={"x-user-id": "user-9"})
    body = response.json()

    assert response.status_code == 200
    assert body["data"]["items"][0]["source"] == "user-9-source"
