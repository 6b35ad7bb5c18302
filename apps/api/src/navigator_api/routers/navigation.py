from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Depends, Header, Query
from pydantic import BaseModel
from route_engine.exceptions import (
    AddressNotFoundError,
    NavigationSupersededError,
    NoRouteFoundError,
    ProviderError,
)

from navigator_api.dependencies import get_navigation_service
from navigator_api.errors import ApiError
from navigator_api.response import success_response
from navigator_api.schemas.navigation import NavigationRequest
from navigator_api.services.navigation_service import ANONYMOUS_USER, NavigationService

router = APIRouter(prefix="/v1/navigation", tags=["navigation"])


async def _call_navigation(action: Callable[[], Awaitable[BaseModel | None]]) -> dict:
    try:
        data = await action()
    except AddressNotFoundError as exc:
        raise ApiError("ADDRESS_NOT_FOUND", str(exc), 404) from exc
    except NoRouteFoundError as exc:
        raise ApiError("NO_ROUTE_FOUND", "No routes found", 404) from exc
    except NavigationSupersededError as exc:
        raise ApiError("NAVIGATION_SUPERSEDED", str(exc), 409) from exc
    except ProviderError as exc:
        raise ApiError("UPSTREAM_FAILURE", "Upstream provider failed", 502) from exc
    payload = data.model_dump(mode="json") if data is not None else None
    return success_response(payload, meta={})


@router.post("/routes")
async def find_routes(
    body: NavigationRequest,
    x_user_id: str | None = Header(default=None),
    service: NavigationService = Depends(get_navigation_service),
) -> dict:
    return await _call_navigation(lambda: service.navigate(x_user_id, body.source, body.destination))


@router.get("/nearby-safety")
async def nearby_safety(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    service: NavigationService = Depends(get_navigation_service),
) -> dict:
    return await _call_navigation(lambda: service.nearby_safety(lat, lng))


@router.get("/weather")
async def weather(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    service: NavigationService = Depends(get_navigation_service),
) -> dict:
    return await _call_navigation(lambda: service.current_weather(lat, lng))


@router.get("/history")
async def history(
    x_user_id: str = Header(default=ANONYMOUS_USER),
    service: NavigationService = Depends(get_navigation_service),
) -> dict:
    return await _call_navigation(lambda: service.history(x_user_id))
