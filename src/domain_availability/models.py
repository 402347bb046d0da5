"""
Data models for the domain availability checker.

This module defines the immutable result record handed back to callers and
the ephemeral registry record built from a single WHOIS answer.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class CheckResult:
    """Classified availability and estimated price for one candidate domain."""

    domain: str
    available: bool
    price: Decimal
    currency: str

    def to_dict(self) -> dict:
        """Convert result to a JSON-friendly dictionary."""
        price = self.price
        return {
            "domain": self.domain,
            "available": self.available,
            "price": int(price) if price == price.to_integral_value() else float(price),
            "currency": self.currency,
        }


@dataclass(frozen=True)
class RegistryRecord:
    """
    Structured view of one WHOIS answer.

    Every field is optional because registries disagree on what they return.
    `text` holds the lines that did not parse as a known key/value pair.
    """

    domain_name: Optional[str] = None
    statuses: Optional[tuple[str, ...]] = None
    text: Optional[tuple[str, ...]] = None
    referral_server: Optional[str] = None
