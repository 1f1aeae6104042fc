from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from src.transforms.countries import Country, parse_countries
from src.utils.logging import get_logger


logger = get_logger(component="collector_api_client")


class APIClientError(Exception):
    pass


class RateLimitError(APIClientError):
    pass


class APITimeoutError(APIClientError):
    pass


class APIServerError(APIClientError):
    pass


class APIDecodeError(APIClientError):
    pass


class APIUnexpectedStatusError(APIClientError):
    def __init__(self, status_code: int, body_text: str | None = None) -> None:
        super().__init__(f"Unexpected status code: {status_code}")
        self.status_code = status_code
        self.body_text = body_text


class APIClient:
    """
    REST Countries client
    - GET-only, no auth
    - Async httpx, one pooled client per process
    - No retries: every failure surfaces as an APIClientError
    """

    def __init__(
        self,
        *,
        base_url: str = "https://restcountries.com/v3.1",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout_seconds)
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def fetch_by_name(self, name: str) -> Country | None:
        """
        Full-text name match. Any non-success status means "no such country"
        and yields None; network and decode failures still raise.
        """
        endpoint = f"/name/{quote(name, safe='')}"
        resp = await self._send(endpoint, params={"fullText": "true"})

        if not resp.is_success:
            logger.warning("country_not_found", name=name, status_code=resp.status_code)
            return None

        countries = self._decode(resp)
        if not countries:
            return None
        if len(countries) > 1:
            # Ambiguous full-text match: only the first record is kept.
            logger.info("country_multiple_matches", name=name, matches=len(countries))
        return countries[0]

    async def fetch_all(self, fields: list[str]) -> list[Country]:
        """All countries, restricted to the given upstream field subset."""
        resp = await self._send("/all", params={"fields": ",".join(fields)})
        self._raise_for_status(resp)
        return self._decode(resp)

    async def _send(self, endpoint: str, params: dict[str, Any] | None = None) -> httpx.Response:
        try:
            return await self._client.get(endpoint, params=params or {})
        except httpx.TimeoutException as e:
            raise APITimeoutError("Request timeout") from e
        except httpx.RequestError as e:
            raise APIClientError(f"Request error: {e}") from e

    @staticmethod
    def _raise_for_status(resp: httpx.Response) -> None:
        if resp.is_success:
            return

        if resp.status_code == 429:
            raise RateLimitError("Too Many Requests (429): rate limit exceeded")

        if resp.status_code >= 500:
            raise APIServerError(f"API server error ({resp.status_code})")

        raise APIUnexpectedStatusError(resp.status_code, body_text=resp.text)

    @staticmethod
    def _decode(resp: httpx.Response) -> list[Country]:
        try:
            return parse_countries(resp.json())
        except ValueError as e:
            raise APIDecodeError(f"Failed to decode countries: {e}") from e
