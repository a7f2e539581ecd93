"""Common contract and transport helper for station providers."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

import httpx

from ...models.station import Station


class ProviderError(Exception):
    """Raised by the transport helper when a provider cannot be read."""


class StationProvider(Protocol):
    """Capability every external station registry adapter implements.

    ``fetch_nearby`` never raises: failures are logged by the adapter and
    reported as an empty list.
    """

    provider_id: str

    async def fetch_nearby(
        self,
        latitude: float,
        longitude: float,
        radius: float,
        limit: int,
    ) -> List[Station]:
        ...


async def fetch_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 10.0,
) -> Any:
    """Issue a single GET request and return the decoded JSON body.

    Raises:
        ProviderError: on timeouts, transport errors, non-2xx responses and
            bodies that are not valid JSON.
    """
    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout)) as client:
        try:
            response = await client.get(
                url,
                headers=headers or {},
                params=params or {},
            )
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as exc:
            raise ProviderError(f"timed out after {timeout}s: {url}") from exc
        except httpx.HTTPStatusError as exc:
            raise ProviderError(f"HTTP {exc.response.status_code} from {url}") from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"transport error for {url}: {exc}") from exc
        except ValueError as exc:
            raise ProviderError(f"malformed JSON from {url}") from exc
