"""Gamma market/group standardization."""

import pytest

from polyexplorer.errors import (
    EmptyRequiredField,
    InvalidFieldFormat,
    InvalidNumber,
    InvalidPriceData,
    InvalidVolumeData,
    JsonDeserializationFailed,
    OutcomeMappingFailed,
    TokenIdExtractionFailed,
)
from polyexplorer.sources.polymarket.standardizer import (
    parse_string_array,
    standardize_market,
    standardize_market_group,
)
from polyexplorer.sources.polymarket.types import GammaMarketGroupResponse, GammaMarketResponse


def _market(payload):
    return standardize_market(GammaMarketResponse.model_validate(payload))


def test_standardize_market_extracts_tokens_and_keeps_price_strings(market_payload):
    m = _market(market_payload())
    assert m.yes_token_id == "111"
    assert m.no_token_id == "222"
    assert m.outcome_prices == ["0.65", "0.35"]
    assert m.outcomes == ["Yes", "No"]
    assert m.volume == 1000.0


def test_standardize_market_copies_every_field(market_payload):
    m = _market(market_payload())
    assert m.question == "Will it rain tomorrow?"
    assert m.condition_id == "0xcond1"
    assert m.slug == "will-it-rain-tomorrow"
    assert m.active is True and m.closed is False
    assert (m.volume_24h, m.volume_1w, m.volume_1m, m.volume_1y) == (50.0, 200.0, 600.0, 1000.0)
    assert m.liquidity == 250.0
    assert m.competitive == 0.9
    assert m.last_trade_price == 0.64
    assert (m.best_bid, m.best_ask) == (0.63, 0.66)


def test_price_strings_are_not_reparsed(market_payload):
    m = _market(market_payload(outcomePrices='["0.1000", "0.9000"]'))
    assert m.outcome_prices == ["0.1000", "0.9000"]


def test_single_token_id_fails_with_slug(market_payload):
    with pytest.raises(TokenIdExtractionFailed) as exc:
        _market(market_payload(clobTokenIds='["111"]'))
    assert exc.value.market_slug == "will-it-rain-tomorrow"
    assert exc.value.field_name == "clob_token_ids"
    assert exc.value.actual == 1


@pytest.mark.parametrize(
    "field, wire_name, error_type",
    [
        ("outcomes", "outcomes", OutcomeMappingFailed),
        ("outcome_prices", "outcomePrices", InvalidPriceData),
        ("clob_token_ids", "clobTokenIds", TokenIdExtractionFailed),
    ],
)
@pytest.mark.parametrize("value", ["[]", '["only"]'])
def test_short_arrays_fail_naming_field(market_payload, field, wire_name, error_type, value):
    with pytest.raises(error_type) as exc:
        _market(market_payload(**{wire_name: value}))
    assert exc.value.field_name == field
    assert exc.value.expected == 2
    assert exc.value.actual == len(parse_string_array(value, field))


def test_three_outcomes_rejected(market_payload):
    with pytest.raises(OutcomeMappingFailed) as exc:
        _market(market_payload(outcomes='["A","B","C"]'))
    assert exc.value.outcomes == ["A", "B", "C"]


@pytest.mark.parametrize("wire_name", ["volumeNum", "volume24hr", "liquidityNum"])
def test_negative_volume_or_liquidity_rejected(market_payload, wire_name):
    with pytest.raises(InvalidVolumeData) as exc:
        _market(market_payload(**{wire_name: -1.0}))
    assert exc.value.market_slug == "will-it-rain-tomorrow"
    assert exc.value.value == -1.0


def test_empty_or_duplicate_token_ids_rejected(market_payload):
    with pytest.raises(TokenIdExtractionFailed):
        _market(market_payload(clobTokenIds='["", "222"]'))
    with pytest.raises(TokenIdExtractionFailed):
        _market(market_payload(clobTokenIds='["111", "111"]'))


def test_extra_token_ids_take_first_two(market_payload):
    m = _market(market_payload(clobTokenIds='["111", "222", "333"]'))
    assert (m.yes_token_id, m.no_token_id) == ("111", "222")


@pytest.mark.parametrize("field", ["question", "conditionId"])
def test_empty_question_or_condition_id_rejected(market_payload, field):
    with pytest.raises(EmptyRequiredField) as exc:
        _market(market_payload(**{field: ""}))
    assert exc.value.entity_id == "will-it-rain-tomorrow"


@pytest.mark.parametrize("price", ["abc", "NaN", "sNaN", "Infinity", "-inf"])
def test_non_numeric_or_non_finite_price_rejected(market_payload, price):
    with pytest.raises(InvalidPriceData) as exc:
        _market(market_payload(outcomePrices=f'["{price}", "0.35"]'))
    assert exc.value.field_name == "outcome_prices"
    assert isinstance(exc.value.__cause__, InvalidNumber)
    assert exc.value.__cause__.value == price


@pytest.mark.parametrize("tokens", ['[" ", "222"]', '["111", "  "]', '["", "222"]'])
def test_blank_token_id_rejected(market_payload, tokens):
    with pytest.raises(TokenIdExtractionFailed):
        _market(market_payload(clobTokenIds=tokens))


def test_malformed_embedded_json_keeps_snippet(market_payload):
    with pytest.raises(JsonDeserializationFailed) as exc:
        _market(market_payload(outcomes='["Yes", "No"'))
    assert exc.value.field_name == "outcomes"
    assert exc.value.expected_type == "list[str]"
    assert '["Yes", "No"' in exc.value.json_snippet


def test_embedded_json_must_be_string_array(market_payload):
    with pytest.raises(InvalidFieldFormat):
        _market(market_payload(outcomes='{"a": 1}'))


def test_group_standardizes_all_markets(group_payload, market_payload):
    second = market_payload(slug="second", conditionId="0xcond2", clobTokenIds='["333","444"]')
    group = standardize_market_group(
        GammaMarketGroupResponse.model_validate(group_payload([market_payload(), second]))
    )
    assert group.slug == "weather-event"
    assert [m.slug for m in group.markets] == ["will-it-rain-tomorrow", "second"]
    assert group.find_market("2").slug == "second"
    assert group.find_market("0xcond2").slug == "second"
    assert group.find_market("missing") is None


def test_one_bad_market_fails_whole_group(group_payload, market_payload):
    bad = market_payload(slug="bad", clobTokenIds='["999"]')
    raw = GammaMarketGroupResponse.model_validate(group_payload([market_payload(), bad]))
    with pytest.raises(TokenIdExtractionFailed) as exc:
        standardize_market_group(raw)
    assert exc.value.market_slug == "bad"


def test_group_without_markets_is_valid(group_payload):
    group = standardize_market_group(GammaMarketGroupResponse.model_validate(group_payload([])))
    assert group.markets == []


def test_negative_group_volume_rejected(group_payload):
    raw = GammaMarketGroupResponse.model_validate(group_payload(volume=-5.0))
    with pytest.raises(InvalidVolumeData) as exc:
        standardize_market_group(raw)
    assert exc.value.market_slug == "weather-event"
    assert exc.value.field_name == "volume"
