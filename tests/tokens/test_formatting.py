"""Unit tests for token display formatting."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from pumpscope.tokens.formatting import (
    display_fields,
    format_address,
    format_market_cap,
    format_price,
    format_time,
    format_time_ago,
)

NOW = 1_700_000_000.0


class TestFormatMarketCap:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "0"),
            (0, "0"),
            ("not a number", "0"),
            (512.3, "512.30"),
            (999.994, "999.99"),
            (4200, "4.20k"),
            ("1234567", "1234.57k"),
        ],
    )
    def test_formats(self, value: object, expected: str) -> None:
        assert format_market_cap(value) == expected  # type: ignore[arg-type]


class TestFormatTimeAgo:
    @pytest.mark.parametrize(
        ("age", "expected"),
        [
            (5, "created 5 seconds ago"),
            (60, "created 1 minute ago"),
            (150, "created 2 minutes ago"),
            (3600, "created 1 hour ago"),
            (5 * 3600 + 59, "created 5 hours ago"),
            (86400, "created 1 day ago"),
            (3 * 86400, "created 3 days ago"),
            (14 * 86400, "created 2 weeks ago"),
            (90 * 86400, "created 3 months ago"),
        ],
    )
    def test_units(self, age: int, expected: str) -> None:
        assert format_time_ago(NOW - age, now=NOW) == expected


class TestSimpleFormatters:
    def test_format_time_is_utc(self) -> None:
        created = datetime(2024, 3, 7, 9, 5, tzinfo=timezone.utc).timestamp()
        assert format_time(created) == "03-07 09:05"

    def test_format_address(self) -> None:
        assert format_address("7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU") == "7xKXt...gAsU"

    def test_format_price(self) -> None:
        assert format_price(0.00001234) == "0.00001234"

    def test_format_price_accepts_strings(self) -> None:
        assert format_price("0.5") == "0.50000000"
        assert format_price(None) == "0.00000000"


class TestDisplayFields:
    def test_full_token(self) -> None:
        created = datetime(2023, 11, 14, 20, 13, 20, tzinfo=timezone.utc).timestamp()
        fields = display_fields(
            "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU",
            4200,
            created,
            price=0.00002871,
            now=created + 7200,
        )
        assert fields == {
            "address": "7xKXt...gAsU",
            "market_cap": "4.20k",
            "price": "0.00002871",
            "age": "created 2 hours ago",
            "created": "11-14 20:13",
        }

    def test_missing_timestamp(self) -> None:
        fields = display_fields("ABCDEFGHIJ", None, None, now=NOW)
        assert fields["age"] is None
        assert fields["created"] is None
        assert fields["market_cap"] == "0"
        assert fields["price"] is None
