"""Unit tests for token list filtering and sorting."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pumpscope.aggregator.schemas import RankedToken
from pumpscope.scraper.config import NO_DESCRIPTION
from pumpscope.tokens.filters import (
    TokenFilters,
    apply_filters,
    has_active_filters,
    has_real_description,
)

NOW = 1_700_000_000.0


@pytest.fixture()
def tokens() -> list[RankedToken]:
    return [
        RankedToken(
            address="A",
            name="Alpha Dog",
            symbol="ADOG",
            created_timestamp=NOW - 10 * 60,
            usd_market_cap=5_000,
            description="The alpha of all dogs",
            twitter="https://x.com/adog",
        ),
        RankedToken(
            address="B",
            name="Beta Cat",
            symbol="BCAT",
            created_timestamp=NOW - 3 * 3600,
            usd_market_cap=50_000,
            description=NO_DESCRIPTION,
            telegram="https://t.me/bcat",
            website="https://bcat.example",
        ),
        RankedToken(
            address="C",
            name="Gamma",
            symbol="GAM",
            created_timestamp=NOW - 3 * 86400,
            usd_market_cap=None,
            description=None,
            twitter="   ",
        ),
        RankedToken(address="D", name="Delta", symbol="DEL"),
    ]


def _addresses(result: list[RankedToken]) -> list[str]:
    return [token.address for token in result]


class TestTokenFilters:
    def test_defaults_are_inactive(self) -> None:
        assert has_active_filters(TokenFilters()) is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"time_filter": "1h"},
            {"has_twitter": True},
            {"has_description": True},
            {"min_market_cap": 1},
            {"max_market_cap": 1},
            {"search": "dog"},
        ],
    )
    def test_any_option_is_active(self, kwargs: dict) -> None:
        assert has_active_filters(TokenFilters(**kwargs)) is True

    def test_blank_search_is_inactive(self) -> None:
        assert has_active_filters(TokenFilters(search="   ")) is False

    def test_sorting_alone_is_inactive(self) -> None:
        assert has_active_filters(TokenFilters(sort_by="usd_market_cap")) is False

    def test_rejects_unknown_time_window(self) -> None:
        with pytest.raises(ValidationError):
            TokenFilters(time_filter="90m")

    def test_rejects_negative_market_cap(self) -> None:
        with pytest.raises(ValidationError):
            TokenFilters(min_market_cap=-1)


class TestHasRealDescription:
    def test_placeholder_is_not_real(self) -> None:
        assert has_real_description(RankedToken(address="A", description=NO_DESCRIPTION)) is False

    def test_blank_is_not_real(self) -> None:
        assert has_real_description(RankedToken(address="A", description=" ")) is False

    def test_text_is_real(self) -> None:
        assert has_real_description(RankedToken(address="A", description="hi")) is True


class TestApplyFilters:
    def test_no_filters_keeps_order(self, tokens: list[RankedToken]) -> None:
        assert _addresses(apply_filters(tokens, TokenFilters(), now=NOW)) == ["A", "B", "C", "D"]

    def test_time_window(self, tokens: list[RankedToken]) -> None:
        result = apply_filters(tokens, TokenFilters(time_filter="6h"), now=NOW)
        assert _addresses(result) == ["A", "B"]

    def test_time_window_drops_tokens_without_timestamp(self, tokens: list[RankedToken]) -> None:
        result = apply_filters(tokens, TokenFilters(time_filter="7d"), now=NOW)
        assert "D" not in _addresses(result)

    def test_has_description(self, tokens: list[RankedToken]) -> None:
        result = apply_filters(tokens, TokenFilters(has_description=True), now=NOW)
        assert _addresses(result) == ["A"]

    def test_social_links(self, tokens: list[RankedToken]) -> None:
        assert _addresses(apply_filters(tokens, TokenFilters(has_twitter=True), now=NOW)) == ["A"]
        assert _addresses(apply_filters(tokens, TokenFilters(has_telegram=True), now=NOW)) == ["B"]
        assert _addresses(apply_filters(tokens, TokenFilters(has_website=True), now=NOW)) == ["B"]

    def test_market_cap_bounds(self, tokens: list[RankedToken]) -> None:
        result = apply_filters(
            tokens, TokenFilters(min_market_cap=1_000, max_market_cap=10_000), now=NOW
        )
        assert _addresses(result) == ["A"]

    def test_missing_market_cap_counts_as_zero(self, tokens: list[RankedToken]) -> None:
        result = apply_filters(tokens, TokenFilters(max_market_cap=10_000), now=NOW)
        assert _addresses(result) == ["A", "C", "D"]

    def test_search_is_case_insensitive_over_name_symbol_description(
        self, tokens: list[RankedToken]
    ) -> None:
        assert _addresses(apply_filters(tokens, TokenFilters(search="DOG"), now=NOW)) == ["A"]
        assert _addresses(apply_filters(tokens, TokenFilters(search="bcat"), now=NOW)) == ["B"]
        assert _addresses(apply_filters(tokens, TokenFilters(search="alpha of"), now=NOW)) == ["A"]

    def test_search_tolerates_unnamed_tokens(self) -> None:
        unnamed = RankedToken.model_validate(
            {"address": "N", "name": None, "symbol": None, "description": "mystery dog"}
        )
        result = apply_filters([unnamed], TokenFilters(search="dog"), now=NOW)
        assert _addresses(result) == ["N"]

    def test_filters_combine_with_and(self, tokens: list[RankedToken]) -> None:
        result = apply_filters(
            tokens, TokenFilters(has_twitter=True, min_market_cap=10_000), now=NOW
        )
        assert result == []

    def test_sort_by_market_cap_desc(self, tokens: list[RankedToken]) -> None:
        result = apply_filters(tokens, TokenFilters(sort_by="usd_market_cap"), now=NOW)
        assert _addresses(result)[:2] == ["B", "A"]

    def test_sort_by_created_asc(self, tokens: list[RankedToken]) -> None:
        result = apply_filters(
            tokens,
            TokenFilters(sort_by="created_timestamp", sort_order="asc", time_filter="7d"),
            now=NOW,
        )
        assert _addresses(result) == ["C", "B", "A"]

    def test_input_not_modified(self, tokens: list[RankedToken]) -> None:
        original = list(tokens)
        apply_filters(tokens, TokenFilters(sort_by="usd_market_cap", sort_order="asc"), now=NOW)
        assert tokens == original
