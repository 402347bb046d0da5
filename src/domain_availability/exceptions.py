"""
Exception classes for the domain availability checker.

All exceptions inherit from DomainAvailabilityError and carry a code, a
human-readable message and optional structured details. The WHOIS client
raises them; the checkers absorb them into conservative results.
"""

from typing import Optional


class DomainAvailabilityError(Exception):
    """Base exception for all domain availability errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainAvailabilityError):
    """Raised when a candidate domain cannot be normalized."""

    pass


class ConfigurationError(DomainAvailabilityError):
    """Raised when explicit configuration values are invalid."""

    pass


class NetworkError(DomainAvailabilityError):
    """Raised when a WHOIS server cannot be reached."""

    pass


class LookupTimeoutError(NetworkError):
    """Raised when a WHOIS lookup exceeds its timeout."""

    pass


class ProtocolError(DomainAvailabilityError):
    """Raised when a WHOIS response is malformed or unparseable."""

    pass


class RateLimitError(DomainAvailabilityError):
    """Raised when a WHOIS server rejects the query due to rate limiting."""

    pass
