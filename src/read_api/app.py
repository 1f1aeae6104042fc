from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, Response

from src.collector.api_client import APIClient
from src.collector.outcomes import Failed, Found
from src.read_api.service import CountryService
from src.transforms.countries import Country, Currency
from src.utils.config import load_api_config
from src.utils.logging import bind_request_context, clear_request_context, get_logger, setup_logging


logger = get_logger(component="read_api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging()
    cfg = load_api_config()
    app.state.api_client = APIClient(base_url=cfg.base_url, timeout_seconds=cfg.timeout_seconds)
    logger.info("read_api_started", upstream=cfg.base_url, timeout_seconds=cfg.timeout_seconds)
    try:
        yield
    finally:
        await app.state.api_client.aclose()
        logger.info("read_api_stopped")


app = FastAPI(title="country-info-api", version="v1", lifespan=lifespan)
router = APIRouter(prefix="/api/countries", tags=["countries"])


@app.middleware("http")
async def request_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    bind_request_context(method=request.method, path=request.url.path)
    started = time.monotonic()
    try:
        response = await call_next(request)
        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - started) * 1000, 1),
        )
        return response
    finally:
        clear_request_context()


def get_country_service(request: Request) -> CountryService:
    return CountryService(request.app.state.api_client)


def _server_error(what: str) -> HTTPException:
    return HTTPException(status_code=500, detail=f"An error occurred while retrieving {what}.")


@app.get("/health")
async def health() -> dict:
    return {"ok": True}


# Fixed paths first: /regions and /names would otherwise match /{name}.
@router.get("/regions", response_model=dict[str, list[str]])
async def countries_by_region(service: CountryService = Depends(get_country_service)) -> dict[str, list[str]]:
    """Country common names grouped by region, each group sorted ascending."""
    outcome = await service.get_countries_by_region()
    if isinstance(outcome, Failed):
        raise _server_error("countries by region")
    return outcome.value


@router.get("/names", response_model=list[str])
async def country_names(service: CountryService = Depends(get_country_service)) -> list[str]:
    """All country common names, sorted ascending."""
    outcome = await service.get_all_country_names()
    if isinstance(outcome, Failed):
        raise _server_error("country names")
    return outcome.value


@router.get("/{name}", response_model=Country, responses={404: {"description": "Country not found"}})
async def country_by_name(name: str, service: CountryService = Depends(get_country_service)) -> Country:
    outcome = await service.get_country_by_name(name)
    if isinstance(outcome, Failed):
        raise _server_error("country information")
    if not isinstance(outcome, Found):
        raise HTTPException(status_code=404, detail=f"Country '{name}' not found.")
    return outcome.value


@router.get(
    "/{name}/currency",
    response_model=dict[str, Currency],
    responses={404: {"description": "Country not found or has no currency information"}},
)
async def country_currency(name: str, service: CountryService = Depends(get_country_service)) -> dict[str, Currency]:
    outcome = await service.get_country_currency(name)
    if isinstance(outcome, Failed):
        raise _server_error("currency information")
    if not isinstance(outcome, Found):
        raise HTTPException(status_code=404, detail=f"Country '{name}' not found or has no currency information.")
    return outcome.value


app.include_router(router)
