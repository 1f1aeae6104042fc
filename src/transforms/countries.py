from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class UpstreamModel(BaseModel):
    """
    Read-only snapshot of an upstream JSON object.

    Attributes are snake_case, wire names are the upstream camelCase. Incoming
    keys are matched to wire names case-insensitively ("UNMEMBER", "unmember"
    and "unMember" all populate `un_member`); unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitive(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        wire_names = {(f.alias or name).lower(): (f.alias or name) for name, f in cls.model_fields.items()}
        return {wire_names.get(str(k).lower(), k): v for k, v in data.items()}


class NativeName(UpstreamModel):
    official: str | None = None
    common: str | None = None


class Name(UpstreamModel):
    common: str | None = None
    official: str | None = None
    native_name: dict[str, NativeName] | None = None


class Currency(UpstreamModel):
    name: str | None = None
    symbol: str | None = None


class Idd(UpstreamModel):
    root: str | None = None
    suffixes: list[str] | None = None


class Translation(UpstreamModel):
    official: str | None = None
    common: str | None = None


class Demonym(UpstreamModel):
    f: str | None = None
    m: str | None = None


class Maps(UpstreamModel):
    google_maps: str | None = None
    open_street_maps: str | None = None


class Car(UpstreamModel):
    signs: list[str] | None = None
    side: str | None = None


class Flags(UpstreamModel):
    png: str | None = None
    svg: str | None = None
    alt: str | None = None


class CoatOfArms(UpstreamModel):
    png: str | None = None
    svg: str | None = None


class CapitalInfo(UpstreamModel):
    latlng: list[float] | None = None


class PostalCode(UpstreamModel):
    format: str | None = None
    regex: str | None = None


class Country(UpstreamModel):
    name: Name | None = None
    tld: list[str] | None = None
    cca2: str | None = None
    ccn3: str | None = None
    cca3: str | None = None
    cioc: str | None = None
    independent: bool | None = None
    status: str | None = None
    un_member: bool | None = None
    currencies: dict[str, Currency] | None = None
    idd: Idd | None = None
    capital: list[str] | None = None
    alt_spellings: list[str] | None = None
    region: str | None = None
    subregion: str | None = None
    languages: dict[str, str] | None = None
    translations: dict[str, Translation] | None = None
    latlng: list[float] | None = None
    landlocked: bool | None = None
    borders: list[str] | None = None
    area: float | None = None
    demonyms: dict[str, Demonym] | None = None
    flag: str | None = None
    maps: Maps | None = None
    population: int | None = None
    gini: dict[str, float] | None = None
    fifa: str | None = None
    car: Car | None = None
    timezones: list[str] | None = None
    continents: list[str] | None = None
    flags: Flags | None = None
    coat_of_arms: CoatOfArms | None = None
    start_of_week: str | None = None
    capital_info: CapitalInfo | None = None
    postal_code: PostalCode | None = None

    @property
    def common_name(self) -> str | None:
        return self.name.common if self.name else None


def parse_countries(payload: Any) -> list[Country]:
    """
    Upstream JSON array -> Country models.
    Raises ValueError (pydantic.ValidationError included) on any other shape.
    """
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of countries, got {type(payload).__name__}")
    return [Country.model_validate(item) for item in payload]


def transform_country_names(countries: list[Country]) -> list[str]:
    """
    Common names, ascending code-point order. Duplicates are kept.
    Records without a common name have no display key and are skipped.
    """
    names = [c.common_name for c in countries if c.common_name is not None]
    return sorted(names)


def transform_countries_by_region(countries: list[Country]) -> dict[str, list[str]]:
    """
    region -> ascending common names. Records with an empty or missing region
    are dropped. Region keys keep first-seen order, which callers must not rely on.
    """
    grouped: dict[str, list[str]] = {}
    for c in countries:
        if not c.region:
            continue
        if c.common_name is None:
            continue
        grouped.setdefault(c.region, []).append(c.common_name)

    return {region: sorted(names) for region, names in grouped.items()}


def extract_currencies(country: Country | None) -> dict[str, Currency] | None:
    """Currency map in upstream order, or None when the country has none."""
    if country is None or not country.currencies:
        return None
    return country.currencies
