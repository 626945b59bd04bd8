"""Gamma API raw schema -> standardized Market / MarketGroup."""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation

import structlog
from pydantic import ValidationError

from polyexplorer.errors import (
    EmptyRequiredField,
    InvalidFieldFormat,
    InvalidNumber,
    InvalidPriceData,
    InvalidVolumeData,
    JsonDeserializationFailed,
    OutcomeMappingFailed,
    TokenIdExtractionFailed,
    ValidationFailed,
    json_error_snippet,
    truncate_for_display,
)
from polyexplorer.models import Market, MarketGroup
from polyexplorer.sources.polymarket.types import GammaMarketGroupResponse, GammaMarketResponse

log = structlog.get_logger(__name__)

_EXPECTED_LABELS = ("yes", "no")


def parse_string_array(value: str | list[str], field_name: str) -> list[str]:
    """Decode a JSON-encoded string array such as '["Yes","No"]'."""
    if isinstance(value, list):
        items = value
    else:
        try:
            items = json.loads(value)
        except json.JSONDecodeError as e:
            raise JsonDeserializationFailed(
                expected_type="list[str]",
                json_snippet=json_error_snippet(value),
                reason=str(e),
                field_name=field_name,
            ) from e
    if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
        raise InvalidFieldFormat(
            field_name, "JSON array of strings", truncate_for_display(str(value), 200)
        )
    return items


def _check_price(value: str, field_name: str) -> None:
    """Price strings stay verbatim but must be finite decimals."""
    try:
        number = Decimal(value)
    except InvalidOperation as e:
        raise InvalidNumber(field_name, value, "not a decimal") from e
    if not number.is_finite():
        raise InvalidNumber(field_name, value, "not finite")


def _check_non_negative(slug: str, fields: dict[str, float]) -> None:
    for name, value in fields.items():
        if value < 0:
            raise InvalidVolumeData(slug, name, value, f"must be non-negative, got {value}")


def standardize_market(raw: GammaMarketResponse) -> Market:
    """Convert one Gamma market to Market. Raises on the first invalid field."""
    slug = raw.slug
    outcomes = parse_string_array(raw.outcomes, "outcomes")
    prices = parse_string_array(raw.outcome_prices, "outcome_prices")
    token_ids = parse_string_array(raw.clob_token_ids, "clob_token_ids")

    if len(token_ids) < 2:
        raise TokenIdExtractionFailed(
            slug,
            f"expected at least 2 token ids, got {len(token_ids)}",
            expected=2,
            actual=len(token_ids),
        )
    if len(outcomes) != 2:
        raise OutcomeMappingFailed(
            slug,
            outcomes,
            f"expected exactly 2 outcomes, got {len(outcomes)}",
            expected=2,
            actual=len(outcomes),
        )
    if len(prices) != 2:
        raise InvalidPriceData(
            slug,
            "outcome_prices",
            f"expected exactly 2 prices, got {len(prices)}",
            expected=2,
            actual=len(prices),
        )
    for price in prices:
        try:
            _check_price(price, "outcome_prices")
        except InvalidNumber as e:
            raise InvalidPriceData(
                slug, "outcome_prices", f"invalid price {price!r}: {e.reason}"
            ) from e

    # Gamma orders clobTokenIds as [YES, NO]
    yes_token, no_token = token_ids[0], token_ids[1]
    if not yes_token.strip() or not no_token.strip():
        raise TokenIdExtractionFailed(slug, "empty token id")
    if yes_token == no_token:
        raise TokenIdExtractionFailed(slug, f"YES and NO token ids are identical ({yes_token})")
    if tuple(o.lower() for o in outcomes) != _EXPECTED_LABELS:
        log.debug("outcome_labels_unexpected", slug=slug, outcomes=outcomes)

    _check_non_negative(
        slug,
        {
            "volume_num": raw.volume_num,
            "volume_24hr": raw.volume_24hr,
            "volume_1wk": raw.volume_1wk,
            "volume_1mo": raw.volume_1mo,
            "volume_1yr": raw.volume_1yr,
            "liquidity_num": raw.liquidity_num,
        },
    )
    if not raw.question.strip():
        raise EmptyRequiredField("question", "Market", slug)
    if not raw.condition_id.strip():
        raise EmptyRequiredField("condition_id", "Market", slug)

    try:
        return Market(
            question=raw.question,
            condition_id=raw.condition_id,
            slug=slug,
            outcomes=outcomes,
            outcome_prices=prices,
            yes_token_id=yes_token,
            no_token_id=no_token,
            active=raw.active,
            closed=raw.closed,
            volume=raw.volume_num,
            volume_24h=raw.volume_24hr,
            volume_1w=raw.volume_1wk,
            volume_1m=raw.volume_1mo,
            volume_1y=raw.volume_1yr,
            liquidity=raw.liquidity_num,
            competitive=raw.competitive,
            last_trade_price=raw.last_trade_price,
            best_bid=raw.best_bid,
            best_ask=raw.best_ask,
        )
    except ValidationError as e:
        raise ValidationFailed("Market", slug, str(e)) from e


def standardize_market_group(raw: GammaMarketGroupResponse) -> MarketGroup:
    """Convert a Gamma event. One bad market fails the whole group."""
    _check_non_negative(raw.slug, {"volume": raw.volume, "liquidity": raw.liquidity})
    markets = [standardize_market(m) for m in raw.markets]
    log.debug("standardize_market_group", slug=raw.slug, markets=len(markets))
    try:
        return MarketGroup(
            slug=raw.slug,
            title=raw.title,
            active=raw.active,
            closed=raw.closed,
            volume=raw.volume,
            liquidity=raw.liquidity,
            markets=markets,
        )
    except ValidationError as e:
        raise ValidationFailed("MarketGroup", raw.slug, str(e)) from e
