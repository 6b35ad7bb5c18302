from __future__ import annotations

import math

from route_engine.exceptions import ProviderError
from route_engine.models import Coordinate, WeatherReport

from navigator_api.clients.base import JsonProviderClient

CLEAR_SKY_CODE = 0


class OpenMeteoWeatherClient(JsonProviderClient):
    provider_name = "open-meteo"

    async def current_weather(self, coordinate: Coordinate) -> WeatherReport:
        payload = await self._request_json(
            "GET",
            "/v1/forecast",
            params={
                "latitude": coordinate.lat,
                "longitude": coordinate.lng,
                "current_weather": "true",
            },
        )
        try:
            current = payload["current_weather"]
            temperature = float(current["temperature"])
            weather_code = int(current["weathercode"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderError("open-meteo returned an unexpected payload") from exc
        return WeatherReport(
            temperature_c=math.floor(temperature + 0.5),
            condition="Clear" if weather_code == CLEAR_SKY_CODE else "Cloudy",
        )
