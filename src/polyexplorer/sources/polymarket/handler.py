"""Gamma API fetches returning raw schemas."""

from __future__ import annotations

import json
from typing import Any, TypeVar
from urllib.parse import quote

import structlog
from pydantic import BaseModel, ValidationError

from polyexplorer.adapters.http_client import HttpClient
from polyexplorer.errors import (
    ApiUnavailable,
    AuthenticationFailed,
    InvalidApiResponse,
    JsonDeserializationFailed,
    MarketGroupNotFound,
    MarketNotFound,
    MissingField,
    RateLimitExceeded,
    RequestFailed,
    json_error_snippet,
)
from polyexplorer.sources.polymarket.types import GammaMarketGroupResponse, GammaMarketResponse

log = structlog.get_logger(__name__)

GAMMA_API_URL = "https://gamma-api.polymarket.com"

RawT = TypeVar("RawT", bound=BaseModel)


def parse_raw(data: Any, model: type[RawT]) -> RawT:
    """Validate decoded JSON against a raw schema, mapping failures to parse errors."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field_name = ".".join(str(p) for p in first["loc"]) or None
        if first["type"] == "missing" and field_name:
            raise MissingField(field_name, model.__name__) from e
        raise JsonDeserializationFailed(
            expected_type=model.__name__,
            json_snippet=json_error_snippet(json.dumps(data, default=str)),
            reason=first["msg"],
            field_name=field_name,
        ) from e


class PolymarketApiHandler:
    """Builds Gamma URLs and returns raw responses."""

    def __init__(self, http_client: HttpClient, base_url: str = GAMMA_API_URL) -> None:
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    async def _get(self, endpoint: str) -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            return await self.http_client.get_json(url)
        except RequestFailed as e:
            if e.status in (401, 403):
                raise AuthenticationFailed(f"status {e.status} from {endpoint}") from e
            if e.status == 429:
                raise RateLimitExceeded() from e
            if e.status >= 500:
                raise ApiUnavailable("Gamma", f"status {e.status} from {endpoint}") from e
            raise

    async def fetch_market_group(self, slug: str) -> GammaMarketGroupResponse:
        endpoint = f"/events/slug/{quote(slug, safe='')}"
        data = await self._get(endpoint)
        if not data:
            raise MarketGroupNotFound(slug)
        if not isinstance(data, dict):
            raise InvalidApiResponse(endpoint, f"expected a JSON object, got {type(data).__name__}")
        raw = parse_raw(data, GammaMarketGroupResponse)
        log.info("fetch_market_group", slug=slug, markets=len(raw.markets))
        return raw

    async def fetch_market(self, slug: str) -> GammaMarketResponse:
        endpoint = f"/markets/slug/{quote(slug, safe='')}"
        data = await self._get(endpoint)
        if not data:
            raise MarketNotFound(slug)
        if not isinstance(data, dict):
            raise InvalidApiResponse(endpoint, f"expected a JSON object, got {type(data).__name__}")
        raw = parse_raw(data, GammaMarketResponse)
        log.info("fetch_market", slug=slug)
        return raw
