"""
Domain checkers - interchangeable backends that classify one domain.

Every checker satisfies the DomainChecker protocol: `check(domain)` performs
exactly one domain's lookup and returns a priced CheckResult. Checkers never
raise past this boundary; failures become a conservative "unavailable"
result, because an unverifiable domain must never be offered as purchasable.

Backends:
- WhoisChecker: live WHOIS lookup, classified by AvailabilityClassifier
- OfflineChecker: deterministic hash-based double, no network access
- RegistrarChecker: registrar API seam, currently delegating to WHOIS
"""

import asyncio
import random
import struct
from abc import abstractmethod
from typing import Optional, Protocol, runtime_checkable

from .audit_logger import AuditLogger
from .classifier import AvailabilityClassifier
from .config import DEFAULT_WHOIS_FOLLOW, DEFAULT_WHOIS_TIMEOUT, RegistrarCredentials
from .enums import CheckerBackend, LogLevel
from .exceptions import DomainAvailabilityError
from .models import CheckResult
from .pricing import DEFAULT_ESTIMATOR, PriceEstimator
from .whois_client import WHOISClient


@runtime_checkable
class DomainChecker(Protocol):
    """Protocol defining the interface for availability checkers."""

    backend: CheckerBackend

    @abstractmethod
    async def check(self, domain: str) -> CheckResult:
        """
        Check a single domain.

        Args:
            domain: Lowercase TLD-qualified candidate domain

        Returns:
            CheckResult for the domain; never raises
        """
        ...


class WhoisChecker:
    """Live checker backed by one WHOIS lookup per domain."""

    backend = CheckerBackend.WHOIS

    def __init__(
        self,
        client: Optional[WHOISClient] = None,
        estimator: Optional[PriceEstimator] = None,
        classifier: Optional[AvailabilityClassifier] = None,
        logger: Optional[AuditLogger] = None,
        timeout: float = DEFAULT_WHOIS_TIMEOUT,
        follow: int = DEFAULT_WHOIS_FOLLOW,
    ) -> None:
        """
        Initialize the WHOIS checker.

        Args:
            client: WHOIS client; a new one is built from timeout/follow if omitted
            estimator: Price estimator; defaults to the process-wide table
            classifier: Availability classifier
            logger: Optional audit logger
            timeout: Per-query timeout in seconds
            follow: Maximum referral hops
        """
        self._client = client or WHOISClient(timeout=timeout, follow=follow)
        self._estimator = estimator or DEFAULT_ESTIMATOR
        self._classifier = classifier or AvailabilityClassifier()
        self._logger = logger

    @property
    def client(self) -> WHOISClient:
        return self._client

    def _lookup_budget(self) -> float:
        # IANA discovery + registry query + referral hops, each with its own timeout
        return self._client.timeout * (self._client.follow + 2)

    async def check(self, domain: str) -> CheckResult:
        try:
            record = await asyncio.wait_for(
                self._client.lookup(domain),
                timeout=self._lookup_budget(),
            )
        except asyncio.TimeoutError:
            self._log(LogLevel.WARN, "WHOIS lookup exceeded its budget, marking unavailable",
                      {"domain": domain, "error_code": "timeout"})
            return self._estimator.build_result(domain, available=False)
        except DomainAvailabilityError as e:
            self._log(LogLevel.WARN, "WHOIS lookup failed, marking unavailable",
                      {"domain": domain, "error_code": e.code, "error_message": e.message})
            return self._estimator.build_result(domain, available=False)
        except Exception as e:
            if self._logger:
                self._logger.log_error(
                    "WhoisChecker",
                    "Unexpected WHOIS failure, marking unavailable",
                    error=e,
                    additional_data={"domain": domain},
                )
            return self._estimator.build_result(domain, available=False)

        rule = self._classifier.explain(record)
        available = self._classifier.classify(record)
        self._log(LogLevel.DEBUG, f"Classified {domain}", {
            "domain": domain,
            "available": available,
            "rule": rule.value,
        })
        return self._estimator.build_result(domain, available=available)

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "WhoisChecker", message, data)


def simple_hash(value: str) -> int:
    """
    32-bit rolling hash (h * 31 + code unit) over UTF-16 code units.

    Arithmetic wraps like a signed 32-bit integer; the absolute value is
    returned, so the result is stable across processes and platforms.
    """
    encoded = value.encode("utf-16-le")
    units = struct.unpack(f"<{len(encoded) // 2}H", encoded)

    h = 0
    for unit in units:
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


class OfflineChecker:
    """
    Deterministic offline double.

    Roughly 62% of domains classify as available. A short random delay
    emulates network latency; the verdict itself only depends on the domain.
    """

    backend = CheckerBackend.OFFLINE

    AVAILABLE_THRESHOLD = 62

    def __init__(
        self,
        estimator: Optional[PriceEstimator] = None,
        min_delay: float = 0.05,
        max_delay: float = 0.15,
        rng: Optional[random.Random] = None,
    ) -> None:
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError(f"Invalid delay range: {min_delay}..{max_delay}")
        self._estimator = estimator or DEFAULT_ESTIMATOR
        self._min_delay = min_delay
        self._max_delay = max_delay
        self._rng = rng or random.Random()

    def is_available(self, domain: str) -> bool:
        """Hash-derived verdict for a domain."""
        return simple_hash(domain) % 100 < self.AVAILABLE_THRESHOLD

    async def check(self, domain: str) -> CheckResult:
        delay = self._rng.uniform(self._min_delay, self._max_delay)
        if delay > 0:
            await asyncio.sleep(delay)
        return self._estimator.build_result(domain, available=self.is_available(domain))


class RegistrarChecker:
    """
    Registrar API checker.

    Holds the registrar credentials and is the swap point for an
    authenticated availability/price API. Until that protocol is wired up
    every call is answered by a WhoisChecker.
    """

    backend = CheckerBackend.REGISTRAR

    # TODO: replace the WHOIS fallback with the registrar's Login +
    # Check_Domain calls once the SOAP client is available.

    def __init__(
        self,
        credentials: RegistrarCredentials,
        fallback: Optional[WhoisChecker] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        if not credentials.present:
            raise ValueError("Registrar credentials require both api_key and api_secret")
        self._credentials = credentials
        self._fallback = fallback or WhoisChecker(logger=logger)
        self._logger = logger

    @property
    def credentials(self) -> RegistrarCredentials:
        return self._credentials

    @property
    def fallback(self) -> WhoisChecker:
        return self._fallback

    async def check(self, domain: str) -> CheckResult:
        if self._logger:
            self._logger.warn(
                "RegistrarChecker",
                f"Registrar integration pending, using WHOIS for: {domain}",
                {
                    "domain": domain,
                    "api_key": self._credentials.api_key,
                    "api_secret": self._credentials.api_secret,
                },
            )
        return await self._fallback.check(domain)
