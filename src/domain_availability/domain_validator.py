"""
Domain validation and normalization module.

Candidate names arrive as free text from an upstream generator. This module
turns them into the lowercase `<label>.<tld>` form the checkers expect and
produces the IDNA (ASCII) form used on the wire.
"""

import re
from dataclasses import dataclass
from typing import Optional

import idna

from .enums import DomainValidationErrorCode
from .exceptions import ValidationError


# Forbidden characters in domain names (control chars, spaces, special symbols)
# Valid domain characters: a-z, A-Z, 0-9, hyphen (-), dot (.), and non-ASCII for IDN
FORBIDDEN_CHARS_PATTERN = re.compile(
    r'[\x00-\x1f\x7f'           # Control characters
    r'\s'                        # Whitespace
    r'!@#$%^&*()+=\[\]{}|\\:;"\'<>,?/`~]'  # Special symbols not allowed
)


@dataclass
class DomainValidationError:
    """Structured error information for domain validation failures."""

    code: DomainValidationErrorCode
    message: str
    details: dict


@dataclass
class DomainValidationResult:
    """Result of domain validation operation."""

    valid: bool
    canonical_domain: Optional[str]
    error: Optional[DomainValidationError]


class DomainValidator:
    """
    Validates and normalizes candidate domain names.

    Handles:
    - Conversion to lowercase, whitespace-free form
    - Rejection of forbidden characters
    - Presence of a TLD (at least one dot with a non-empty suffix)
    - IDNA encoding of international labels for WHOIS queries

    Any TLD is accepted; unknown TLDs are priced with the default price and
    resolved through IANA at lookup time.
    """

    def validate(self, raw_domain: str) -> DomainValidationResult:
        """
        Validate and normalize a candidate domain string.

        Args:
            raw_domain: The raw domain string to validate

        Returns:
            DomainValidationResult with the normalized candidate or an error
        """
        # Check for empty input
        if not raw_domain or not raw_domain.strip():
            return DomainValidationResult(
                valid=False,
                canonical_domain=None,
                error=DomainValidationError(
                    code=DomainValidationErrorCode.EMPTY_INPUT,
                    message="Domain input is empty",
                    details={"raw_input": raw_domain},
                ),
            )

        domain = raw_domain.strip().lower()

        if FORBIDDEN_CHARS_PATTERN.search(domain):
            forbidden_found = FORBIDDEN_CHARS_PATTERN.findall(domain)
            return DomainValidationResult(
                valid=False,
                canonical_domain=None,
                error=DomainValidationError(
                    code=DomainValidationErrorCode.FORBIDDEN_CHARS,
                    message="Domain contains forbidden characters",
                    details={
                        "raw_input": raw_domain,
                        "forbidden_chars": forbidden_found,
                    },
                ),
            )

        tld = self.extract_tld(domain)
        if not tld or domain.startswith("."):
            return DomainValidationResult(
                valid=False,
                canonical_domain=None,
                error=DomainValidationError(
                    code=DomainValidationErrorCode.INVALID_TLD,
                    message="Could not extract TLD from domain",
                    details={"raw_input": raw_domain},
                ),
            )

        # The IDNA form must be encodable even though the candidate keeps its
        # Unicode spelling for display and pricing.
        try:
            self.normalize_to_canonical(domain)
        except ValidationError as e:
            return DomainValidationResult(
                valid=False,
                canonical_domain=None,
                error=DomainValidationError(
                    code=DomainValidationErrorCode.IDNA_ERROR,
                    message=str(e.message),
                    details=e.details,
                ),
            )

        return DomainValidationResult(
            valid=True,
            canonical_domain=domain,
            error=None,
        )

    def normalize_to_canonical(self, domain: str) -> str:
        """
        Convert domain to its wire form (lowercase, IDNA-encoded).

        Args:
            domain: Domain string to normalize

        Returns:
            ASCII form of the domain

        Raises:
            ValidationError: If IDNA encoding fails
        """
        domain_lower = domain.lower()

        has_non_ascii = any(ord(c) > 127 for c in domain_lower)
        if not has_non_ascii:
            return domain_lower

        try:
            return idna.encode(domain_lower, uts46=True).decode("ascii")
        except idna.IDNAError as e:
            raise ValidationError(
                code=DomainValidationErrorCode.IDNA_ERROR.value,
                message=f"IDNA encoding failed: {e}",
                details={"domain": domain, "idna_error": str(e)},
            ) from e

    @staticmethod
    def extract_tld(domain: str) -> Optional[str]:
        """
        Extract TLD from a domain name.

        Args:
            domain: Domain name (e.g., 'example.com')

        Returns:
            TLD string without the dot (e.g., 'com') or None if extraction fails
        """
        if not domain or "." not in domain:
            return None

        parts = domain.rsplit(".", 1)
        if len(parts) != 2 or not parts[1]:
            return None

        return parts[1].lower()
