"""PolymarketApiSource end to end over a mocked Gamma API."""

import asyncio

import httpx
import pytest

from polyexplorer.adapters.http_client import HttpClient
from polyexplorer.errors import (
    ApiUnavailable,
    InvalidApiResponse,
    JsonDeserializationFailed,
    MarketGroupNotFound,
    MarketNotFound,
    MissingField,
    RateLimitExceeded,
    RequestFailed,
    TokenIdExtractionFailed,
)
from polyexplorer.sources import MarketMetadataProvider
from polyexplorer.sources.polymarket import PolymarketApiSource

BASE = "https://gamma.test"


def _source(routes: dict[str, httpx.Response]) -> PolymarketApiSource:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return routes.get(request.url.path, httpx.Response(404, text="not found"))

    source = PolymarketApiSource(HttpClient(transport=httpx.MockTransport(handler)), base_url=BASE)
    source.seen = seen
    return source


def test_source_is_metadata_provider():
    assert isinstance(_source({}), MarketMetadataProvider)


def test_get_market_group(group_payload):
    source = _source({"/events/slug/weather-event": httpx.Response(200, json=group_payload())})
    group = asyncio.run(source.get_market_group("weather-event"))
    assert group.title == "Weather"
    assert group.markets[0].yes_token_id == "111"
    assert source.seen == ["/events/slug/weather-event"]


def test_get_single_market(market_payload):
    source = _source(
        {"/markets/slug/will-it-rain-tomorrow": httpx.Response(200, json=market_payload())}
    )
    market = asyncio.run(source.get_market("will-it-rain-tomorrow"))
    assert market.condition_id == "0xcond1"


def test_unknown_slug_is_request_failed_404():
    with pytest.raises(RequestFailed) as exc:
        asyncio.run(_source({}).get_market_group("nope"))
    assert exc.value.status == 404


@pytest.mark.parametrize("body", [b"null", b"{}"])
def test_null_body_is_group_not_found(body):
    source = _source({"/events/slug/gone": httpx.Response(200, content=body)})
    with pytest.raises(MarketGroupNotFound) as exc:
        asyncio.run(source.get_market_group("gone"))
    assert exc.value.slug == "gone"


@pytest.mark.parametrize("body", [b"null", b"{}"])
def test_null_body_is_market_not_found(body):
    source = _source({"/markets/slug/gone": httpx.Response(200, content=body)})
    with pytest.raises(MarketNotFound) as exc:
        asyncio.run(source.get_market("gone"))
    assert exc.value.identifier == "gone"
    assert exc.value.group_slug is None


def test_blank_body_is_parse_error():
    source = _source({"/events/slug/blank": httpx.Response(200, content=b"")})
    with pytest.raises(JsonDeserializationFailed):
        asyncio.run(source.get_market_group("blank"))


def test_list_body_is_invalid_response():
    source = _source({"/events/slug/odd": httpx.Response(200, json=[1, 2])})
    with pytest.raises(InvalidApiResponse):
        asyncio.run(source.get_market_group("odd"))


def test_missing_required_key_is_missing_field(group_payload):
    payload = group_payload()
    del payload["title"]
    source = _source({"/events/slug/weather-event": httpx.Response(200, json=payload)})
    with pytest.raises(MissingField) as exc:
        asyncio.run(source.get_market_group("weather-event"))
    assert exc.value.field_name == "title"
    assert exc.value.parent_type == "GammaMarketGroupResponse"


def test_rate_limit_and_server_errors_mapped():
    source = _source(
        {
            "/events/slug/busy": httpx.Response(429, text="slow down"),
            "/events/slug/down": httpx.Response(503, text="maintenance"),
        }
    )
    with pytest.raises(RateLimitExceeded) as exc:
        asyncio.run(source.get_market_group("busy"))
    assert isinstance(exc.value.__cause__, RequestFailed)
    with pytest.raises(ApiUnavailable):
        asyncio.run(source.get_market_group("down"))


def test_invalid_market_fails_group_fetch(group_payload, market_payload):
    payload = group_payload([market_payload(clobTokenIds='["1"]')])
    source = _source({"/events/slug/weather-event": httpx.Response(200, json=payload)})
    with pytest.raises(TokenIdExtractionFailed):
        asyncio.run(source.get_market_group("weather-event"))
