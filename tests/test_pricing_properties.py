"""
Property-based tests for the price estimator.

Uses Hypothesis to verify that prices depend only on the TLD and the static
table, and that unknown TLDs always fall back to the documented default.
"""

import string
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from domain_availability.models import CheckResult
from domain_availability.pricing import (
    CURRENCY,
    DEFAULT_PRICE,
    TLD_PRICES,
    PriceEstimator,
    estimate_price,
    extract_tld,
)


label_strategy = st.text(
    alphabet=string.ascii_lowercase + string.digits + "-",
    min_size=1,
    max_size=30,
)

unknown_tld_strategy = st.text(
    alphabet=string.ascii_lowercase,
    min_size=2,
    max_size=12,
).filter(lambda t: f".{t}" not in TLD_PRICES)


class TestPriceDeterminismProperty:
    """Price depends only on the domain's TLD and the static table."""

    @given(label=label_strategy, tld=st.sampled_from(sorted(TLD_PRICES)))
    @settings(max_examples=100)
    def test_known_tld_uses_table_price(self, label: str, tld: str) -> None:
        """*For any* label and known TLD, the table price is returned."""
        domain = f"{label}{tld}"
        assert estimate_price(domain) == TLD_PRICES[tld]

    @given(label=label_strategy, tld=unknown_tld_strategy)
    @settings(max_examples=100)
    def test_unknown_tld_uses_default_price(self, label: str, tld: str) -> None:
        """*For any* TLD absent from the table, the default price is returned."""
        price = estimate_price(f"{label}.{tld}")
        assert price == DEFAULT_PRICE
        assert price > 0

    @given(first=label_strategy, second=label_strategy, tld=st.sampled_from(sorted(TLD_PRICES)))
    @settings(max_examples=50)
    def test_price_independent_of_label(self, first: str, second: str, tld: str) -> None:
        """Two domains sharing a TLD always share a price."""
        assert estimate_price(f"{first}{tld}") == estimate_price(f"{second}{tld}")

    def test_all_table_prices_positive(self) -> None:
        assert all(price > 0 for price in TLD_PRICES.values())
        assert DEFAULT_PRICE == Decimal("15")


class TestTLDExtraction:
    """The TLD is the suffix from the last dot, inclusive."""

    def test_last_label_only(self) -> None:
        assert extract_tld("shop.example.co.uk") == ".uk"
        assert estimate_price("shop.example.co.uk") == Decimal("9")

    def test_no_dot_yields_default(self) -> None:
        assert extract_tld("localhost") == ""
        assert estimate_price("localhost") == DEFAULT_PRICE

    def test_reference_prices(self) -> None:
        assert estimate_price("example.com") == 12
        assert estimate_price("zz-nonexistent-xyz.io") == 35
        assert estimate_price("foo.rare") == DEFAULT_PRICE


class TestPriceEstimator:
    """Custom tables and result building."""

    def test_build_result_attaches_price_and_currency(self) -> None:
        estimator = PriceEstimator()
        result = estimator.build_result("swiftledger.com", available=True)

        assert result == CheckResult(
            domain="swiftledger.com",
            available=True,
            price=Decimal("12"),
            currency=CURRENCY,
        )
        assert result.currency == "EUR"

    def test_custom_table(self) -> None:
        estimator = PriceEstimator(
            prices={".test": Decimal("3")},
            default_price=Decimal("4"),
        )
        assert estimator.estimate("a.test") == Decimal("3")
        assert estimator.estimate("a.com") == Decimal("4")

    def test_rejects_non_positive_prices(self) -> None:
        with pytest.raises(ValueError):
            PriceEstimator(default_price=Decimal("0"))
        with pytest.raises(ValueError):
            PriceEstimator(prices={".bad": Decimal("-1")})

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            TLD_PRICES[".new"] = Decimal("1")  # type: ignore[index]

    def test_result_is_immutable(self) -> None:
        result = PriceEstimator().build_result("a.io", available=False)
        with pytest.raises(AttributeError):
            result.available = True  # type: ignore[misc]

    def test_to_dict_renders_whole_prices_as_int(self) -> None:
        result = PriceEstimator().build_result("a.io", available=True)
        assert result.to_dict() == {
            "domain": "a.io",
            "available": True,
            "price": 35,
            "currency": "EUR",
        }
