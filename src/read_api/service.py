from __future__ import annotations

from typing import Protocol

from src.collector.api_client import APIClientError
from src.collector.outcomes import Failed, Found, NotFound, Outcome
from src.transforms.countries import (
    Country,
    Currency,
    extract_currencies,
    transform_countries_by_region,
    transform_country_names,
)
from src.utils.logging import get_logger


logger = get_logger(component="read_api_service")


class CountrySource(Protocol):
    async def fetch_by_name(self, name: str) -> Country | None: ...

    async def fetch_all(self, fields: list[str]) -> list[Country]: ...


class CountryService:
    """
    Read operations over the upstream client. Stateless: every call issues a
    fresh upstream request and nothing is cached between calls.
    """

    def __init__(self, client: CountrySource) -> None:
        self._client = client

    async def get_country_by_name(self, name: str) -> Outcome[Country]:
        try:
            country = await self._client.fetch_by_name(name)
        except APIClientError as e:
            logger.error("country_fetch_failed", name=name, err=str(e), err_type=type(e).__name__)
            return Failed(e)
        if country is None:
            return NotFound()
        return Found(country)

    async def get_all_country_names(self) -> Found[list[str]] | Failed:
        try:
            countries = await self._client.fetch_all(["name"])
        except APIClientError as e:
            logger.error("country_names_fetch_failed", err=str(e), err_type=type(e).__name__)
            return Failed(e)
        return Found(transform_country_names(countries))

    async def get_countries_by_region(self) -> Found[dict[str, list[str]]] | Failed:
        try:
            countries = await self._client.fetch_all(["name", "region"])
        except APIClientError as e:
            logger.error("countries_by_region_fetch_failed", err=str(e), err_type=type(e).__name__)
            return Failed(e)
        return Found(transform_countries_by_region(countries))

    async def get_country_currency(self, name: str) -> Outcome[dict[str, Currency]]:
        # A missing country and a country without currencies look the same to callers.
        outcome = await self.get_country_by_name(name)
        if not isinstance(outcome, Found):
            return outcome
        currencies = extract_currencies(outcome.value)
        if currencies is None:
            return NotFound()
        return Found(currencies)
