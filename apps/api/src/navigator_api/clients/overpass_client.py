from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from route_engine.exceptions import ProviderError
from route_engine.models import Coordinate, PoiElement, SafetyCategory

from navigator_api.clients.base import JsonProviderClient

OSM_TAGS: dict[SafetyCategory, tuple[str, str]] = {
    SafetyCategory.POLICE: ("amenity", "police"),
    SafetyCategory.HOSPITAL: ("amenity", "hospital"),
    SafetyCategory.FIRE_STATION: ("amenity", "fire_station"),
    SafetyCategory.BUS_STATION: ("amenity", "bus_station"),
    SafetyCategory.SCHOOL: ("amenity", "school"),
    SafetyCategory.STREET_LAMP: ("highway", "street_lamp"),
}


def build_overpass_query(center: Coordinate, radii: Mapping[SafetyCategory, float]) -> str:
    clauses = []
    for category, radius in radii.items():
        key, value = OSM_TAGS[category]
        clauses.append(f'  node(around:{radius:g},{center.lat},{center.lng})["{key}"="{value}"];')
    body = "\n".join(clauses)
    return f"[out:json];\n(\n{body}\n);\nout center;"


class OverpassPoiClient(JsonProviderClient):
    provider_name = "overpass"

    async def search(
        self,
        center: Coordinate,
        radii: Mapping[SafetyCategory, float],
    ) -> list[PoiElement]:
        if not radii:
            return []
        payload = await self._request_json("POST", "", data={"data": build_overpass_query(center, radii)})
        elements = payload.get("elements") if isinstance(payload, dict) else None
        if not isinstance(elements, list):
            raise ProviderError("overpass response has no elements")
        wanted = set(radii)
        items = []
        for element in elements:
            item = self._to_item(element)
            if item is not None and item.category in wanted:
                items.append(item)
        return items

    def _to_item(self, element: Any) -> PoiElement | None:
        if not isinstance(element, dict):
            raise ProviderError("overpass element is not an object")
        tags = element.get("tags") or {}
        if not isinstance(tags, dict):
            raise ProviderError("overpass element has malformed tags")
        category = _category_for(tags)
        if category is None:
            return None
        position = element if "lat" in element else element.get("center")
        if not position:
            return None
        try:
            coordinate = Coordinate(lat=float(position["lat"]), lng=float(position["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderError("overpass element has an invalid position") from exc
        return PoiElement(category=category, coordinate=coordinate, name=tags.get("name"))


def _category_for(tags: Mapping[str, str]) -> SafetyCategory | None:
    for category, (key, value) in OSM_TAGS.items():
        if tags.get(key) == value:
            return category
    return None
