"""
Price estimation for candidate domains.

Prices are static estimates per TLD, not live registrar quotes. The table is
built once at import and exposed read-only.
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional

from .models import CheckResult

CURRENCY = "EUR"

DEFAULT_PRICE = Decimal("15")

TLD_PRICES: Mapping[str, Decimal] = MappingProxyType({
    ".com": Decimal("12"),
    ".net": Decimal("11"),
    ".org": Decimal("10"),
    ".io": Decimal("35"),
    ".co": Decimal("25"),
    ".ai": Decimal("45"),
    ".trade": Decimal("8"),
    ".finance": Decimal("30"),
    ".capital": Decimal("28"),
    ".fr": Decimal("9"),
    ".de": Decimal("8"),
    ".es": Decimal("9"),
    ".it": Decimal("10"),
    ".nl": Decimal("8"),
    ".eu": Decimal("7"),
    ".uk": Decimal("9"),
})


def extract_tld(domain: str) -> str:
    """Return the suffix from the last dot (inclusive), or '' without a dot."""
    index = domain.rfind(".")
    if index < 0:
        return ""
    return domain[index:]


class PriceEstimator:
    """
    Maps a domain's TLD to an estimated registration price.

    Pure lookup with no I/O; safe to share between concurrent lookups.
    """

    def __init__(
        self,
        prices: Optional[Mapping[str, Decimal]] = None,
        default_price: Decimal = DEFAULT_PRICE,
        currency: str = CURRENCY,
    ) -> None:
        """
        Initialize the estimator.

        Args:
            prices: TLD (with leading dot) to price mapping; defaults to TLD_PRICES
            default_price: Price for any TLD absent from the table
            currency: Three-letter currency code attached to every result
        """
        if default_price <= 0:
            raise ValueError(f"Default price must be positive, got {default_price}")
        table = TLD_PRICES if prices is None else prices
        for tld, price in table.items():
            if price <= 0:
                raise ValueError(f"Price for {tld} must be positive, got {price}")

        self._prices = MappingProxyType(dict(table))
        self._default_price = default_price
        self._currency = currency

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def default_price(self) -> Decimal:
        return self._default_price

    def estimate(self, domain: str) -> Decimal:
        """Estimated price for a domain; unknown TLDs get the default price."""
        return self._prices.get(extract_tld(domain), self._default_price)

    def build_result(self, domain: str, available: bool) -> CheckResult:
        """Create the priced result record for a classified domain."""
        return CheckResult(
            domain=domain,
            available=available,
            price=self.estimate(domain),
            currency=self._currency,
        )


DEFAULT_ESTIMATOR = PriceEstimator()


def estimate_price(domain: str) -> Decimal:
    """Estimate a price using the process-wide default table."""
    return DEFAULT_ESTIMATOR.estimate(domain)
