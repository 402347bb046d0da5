"""
Availability classifier for WHOIS registry records.

Registries format WHOIS output very differently. The only field common enough
to trust is the presence of a canonical "Domain Name" field; free text and
status tokens are secondary disambiguators. The classifier always yields a
definite verdict, never "unknown".

Decision order (first match wins):
1. No record at all -> available
2. No domain name field -> available (free text only confirms the verdict)
3. Domain name present, status tokens say "no match"/"free"/"available"
   -> available
4. Otherwise -> taken
"""

from typing import Optional

from .enums import ClassificationRule
from .models import RegistryRecord


class AvailabilityClassifier:
    """
    Pure classifier from an optional RegistryRecord to an availability verdict.

    Holds no state beyond its constant phrase lists and is safe to share
    between concurrent lookups.
    """

    NOT_FOUND_PHRASES: tuple[str, ...] = (
        "no match",
        "not found",
        "no entries found",
        "no data found",
        "domain not found",
        "status: free",
        "status: available",
    )

    FREE_STATUS_PHRASES: tuple[str, ...] = (
        "no match",
        "free",
        "available",
    )

    def classify(self, record: Optional[RegistryRecord]) -> bool:
        """
        Decide whether a domain is available.

        Args:
            record: Parsed WHOIS record, or None when the lookup returned nothing

        Returns:
            True if the domain looks available, False if it looks taken
        """
        return self.explain(record) != ClassificationRule.REGISTERED

    def explain(self, record: Optional[RegistryRecord]) -> ClassificationRule:
        """Return the rule that decides the verdict for a record."""
        if record is None:
            return ClassificationRule.NO_RECORD

        if not record.domain_name:
            raw_text = " ".join(record.text or ()).lower()
            if not raw_text or any(p in raw_text for p in self.NOT_FOUND_PHRASES):
                return ClassificationRule.NOT_FOUND_TEXT
            # Missing name field alone is treated as available.
            return ClassificationRule.MISSING_NAME_FIELD

        if record.statuses:
            status_text = " ".join(record.statuses).lower()
            if any(p in status_text for p in self.FREE_STATUS_PHRASES):
                return ClassificationRule.FREE_STATUS

        return ClassificationRule.REGISTERED
