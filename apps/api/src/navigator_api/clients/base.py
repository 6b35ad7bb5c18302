from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
from route_engine.exceptions import ProviderError


class JsonProviderClient:
    provider_name = "unknown"

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._client_factory = client_factory
        self._headers = headers or {}

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}{path}"
        try:
            factory = self._client_factory or (
                lambda: httpx.AsyncClient(timeout=self._timeout_seconds, headers=self._headers)
            )
            async with factory() as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ProviderError(f"{self.provider_name} timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                f"{self.provider_name} returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"{self.provider_name} request failed") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(f"{self.provider_name} returned invalid JSON") from exc
