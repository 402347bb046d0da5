"""
Enumeration types for the domain availability checker.

These enums provide type-safe constants for backend selection, error codes
and logging levels throughout the system.
"""

from enum import Enum


class CheckerBackend(Enum):
    """Which checker implementation resolves availability."""

    WHOIS = "whois"
    OFFLINE = "offline"
    REGISTRAR = "registrar"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def severity(self) -> int:
        """Numeric ordering used for minimum-level filtering."""
        return _SEVERITY[self.value]


_SEVERITY = {"debug": 10, "info": 20, "warn": 30, "error": 40}


class DomainValidationErrorCode(Enum):
    """Error codes for domain validation failures."""

    FORBIDDEN_CHARS = "forbidden_chars"
    INVALID_TLD = "invalid_tld"
    IDNA_ERROR = "idna_error"
    EMPTY_INPUT = "empty_input"


class WHOISErrorCode(Enum):
    """Error codes for WHOIS client operations."""

    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    PARSE_ERROR = "parse_error"
    RATE_LIMITED = "rate_limited"
    NO_SERVER = "no_server"


class ClassificationRule(Enum):
    """Which step of the availability heuristic produced a verdict."""

    NO_RECORD = "no_record"
    NOT_FOUND_TEXT = "not_found_text"
    MISSING_NAME_FIELD = "missing_name_field"
    FREE_STATUS = "free_status"
    REGISTERED = "registered"
