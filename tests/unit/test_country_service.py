from __future__ import annotations

import pytest

from src.collector.api_client import APIServerError, APITimeoutError
from src.collector.outcomes import Failed, Found, NotFound
from src.read_api.service import CountryService
from src.transforms.countries import Country, parse_countries


class FakeClient:
    def __init__(self, *, by_name: dict[str, Country] | None = None, all_rows: list[dict] | None = None, error: Exception | None = None) -> None:
        self.by_name = by_name or {}
        self.all_rows = all_rows or []
        self.error = error
        self.calls: list[tuple[str, object]] = []

    async def fetch_by_name(self, name: str) -> Country | None:
        self.calls.append(("fetch_by_name", name))
        if self.error is not None:
            raise self.error
        return self.by_name.get(name)

    async def fetch_all(self, fields: list[str]) -> list[Country]:
        self.calls.append(("fetch_all", list(fields)))
        if self.error is not None:
            raise self.error
        return parse_countries(self.all_rows)


FRANCE = Country.model_validate(
    {
        "name": {"common": "France", "official": "French Republic"},
        "region": "Europe",
        "currencies": {"EUR": {"name": "Euro", "symbol": "€"}},
    }
)
ANTARCTICA = Country.model_validate({"name": {"common": "Antarctica"}, "region": "Antarctic"})


@pytest.mark.asyncio
async def test_get_country_by_name_found():
    fake = FakeClient(by_name={"France": FRANCE})
    outcome = await CountryService(fake).get_country_by_name("France")
    assert outcome == Found(FRANCE)
    assert fake.calls == [("fetch_by_name", "France")]


@pytest.mark.asyncio
async def test_get_country_by_name_absent_is_not_found_not_failure():
    outcome = await CountryService(FakeClient()).get_country_by_name("Atlantis")
    assert isinstance(outcome, NotFound)


@pytest.mark.asyncio
async def test_get_country_by_name_transport_error_is_failed():
    err = APITimeoutError("Request timeout")
    outcome = await CountryService(FakeClient(error=err)).get_country_by_name("France")
    assert isinstance(outcome, Failed)
    assert outcome.error is err


@pytest.mark.asyncio
async def test_get_all_country_names_sorted():
    fake = FakeClient(all_rows=[{"name": {"common": "Peru"}}, {"name": {"common": "Chad"}}, {"name": {"common": "Peru"}}])
    outcome = await CountryService(fake).get_all_country_names()
    assert outcome == Found(["Chad", "Peru", "Peru"])
    assert fake.calls == [("fetch_all", ["name"])]


@pytest.mark.asyncio
async def test_get_all_country_names_empty_upstream():
    outcome = await CountryService(FakeClient()).get_all_country_names()
    assert outcome == Found([])


@pytest.mark.asyncio
async def test_get_all_country_names_failure():
    outcome = await CountryService(FakeClient(error=APIServerError("API server error (502)"))).get_all_country_names()
    assert isinstance(outcome, Failed)


@pytest.mark.asyncio
async def test_get_countries_by_region():
    fake = FakeClient(
        all_rows=[
            {"name": {"common": "Japan"}, "region": "Asia"},
            {"name": {"common": "Germany"}, "region": "Europe"},
            {"name": {"common": "France"}, "region": "Europe"},
            {"name": {"common": "Nowhere"}, "region": ""},
        ]
    )
    outcome = await CountryService(fake).get_countries_by_region()
    assert isinstance(outcome, Found)
    assert outcome.value == {"Europe": ["France", "Germany"], "Asia": ["Japan"]}
    assert fake.calls == [("fetch_all", ["name", "region"])]


@pytest.mark.asyncio
async def test_get_countries_by_region_failure():
    outcome = await CountryService(FakeClient(error=APIServerError("API server error (500)"))).get_countries_by_region()
    assert isinstance(outcome, Failed)


@pytest.mark.asyncio
async def test_get_country_currency_found():
    fake = FakeClient(by_name={"France": FRANCE})
    outcome = await CountryService(fake).get_country_currency("France")
    assert isinstance(outcome, Found)
    assert list(outcome.value) == ["EUR"]
    assert outcome.value["EUR"].symbol == "€"
    assert fake.calls == [("fetch_by_name", "France")]


@pytest.mark.asyncio
async def test_get_country_currency_missing_country_and_missing_currency_look_the_same():
    service = CountryService(FakeClient(by_name={"Antarctica": ANTARCTICA}))
    missing_country = await service.get_country_currency("Atlantis")
    missing_currency = await service.get_country_currency("Antarctica")
    assert missing_country == missing_currency
    assert isinstance(missing_country, NotFound)


@pytest.mark.asyncio
async def test_get_country_currency_failure():
    outcome = await CountryService(FakeClient(error=APITimeoutError("Request timeout"))).get_country_currency("France")
    assert isinstance(outcome, Failed)


@pytest.mark.asyncio
async def test_repeated_calls_are_idempotent():
    fake = FakeClient(all_rows=[{"name": {"common": "Japan"}, "region": "Asia"}, {"name": {"common": "Fiji"}, "region": "Oceania"}])
    service = CountryService(fake)
    first = await service.get_countries_by_region()
    second = await service.get_countries_by_region()
    assert first == second
    assert len(fake.calls) == 2
