"""
Domain Availability - batch domain availability and price estimation.

This package checks candidate domain names against WHOIS (or an offline
double), classifies them as available or taken with a conservative failure
policy, and attaches an estimated registration price per TLD.
"""

__version__ = "0.1.0"

from domain_availability.exceptions import (
    DomainAvailabilityError,
    ValidationError,
    ConfigurationError,
    NetworkError,
    LookupTimeoutError,
    ProtocolError,
    RateLimitError,
)
from domain_availability.enums import (
    CheckerBackend,
    ClassificationRule,
    LogLevel,
    DomainValidationErrorCode,
    WHOISErrorCode,
)
from domain_availability.models import (
    CheckResult,
    RegistryRecord,
)
from domain_availability.config import (
    BatchConfig,
    CheckerSettings,
    LoggingConfig,
    RegistrarCredentials,
    load_settings_from_env,
)
from domain_availability.pricing import (
    CURRENCY,
    DEFAULT_PRICE,
    TLD_PRICES,
    PriceEstimator,
    estimate_price,
)
from domain_availability.classifier import AvailabilityClassifier
from domain_availability.domain_validator import (
    DomainValidator,
    DomainValidationResult,
    DomainValidationError,
)
from domain_availability.whois_client import (
    WHOISClient,
    parse_record,
)
from domain_availability.checkers import (
    DomainChecker,
    WhoisChecker,
    OfflineChecker,
    RegistrarChecker,
)
from domain_availability.factory import (
    ResolvedBackend,
    create_checker,
    select_backend,
)
from domain_availability.orchestrator import (
    BatchOrchestrator,
    iter_windows,
)
from domain_availability.audit_logger import (
    AuditLogger,
    LogEntry,
)

__all__ = [
    # Exceptions
    "DomainAvailabilityError",
    "ValidationError",
    "ConfigurationError",
    "NetworkError",
    "LookupTimeoutError",
    "ProtocolError",
    "RateLimitError",
    # Enums
    "CheckerBackend",
    "ClassificationRule",
    "LogLevel",
    "DomainValidationErrorCode",
    "WHOISErrorCode",
    # Models
    "CheckResult",
    "RegistryRecord",
    # Configuration
    "BatchConfig",
    "CheckerSettings",
    "LoggingConfig",
    "RegistrarCredentials",
    "load_settings_from_env",
    # Pricing
    "CURRENCY",
    "DEFAULT_PRICE",
    "TLD_PRICES",
    "PriceEstimator",
    "estimate_price",
    # Classifier
    "AvailabilityClassifier",
    # Domain Validator
    "DomainValidator",
    "DomainValidationResult",
    "DomainValidationError",
    # WHOIS Client
    "WHOISClient",
    "parse_record",
    # Checkers
    "DomainChecker",
    "WhoisChecker",
    "OfflineChecker",
    "RegistrarChecker",
    # Backend selection
    "ResolvedBackend",
    "create_checker",
    "select_backend",
    # Orchestrator
    "BatchOrchestrator",
    "iter_windows",
    # Audit Logger
    "AuditLogger",
    "LogEntry",
]
