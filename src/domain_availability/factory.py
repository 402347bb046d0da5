"""
Backend selection.

Resolves, once per run, which checker answers availability queries and the
batch limits that go with it. Priority order:

1. Offline double flag
2. Registrar credentials present
3. Live WHOIS (default; always usable)
"""

from dataclasses import dataclass
from typing import Optional

from .audit_logger import AuditLogger
from .checkers import DomainChecker, OfflineChecker, RegistrarChecker, WhoisChecker
from .config import DEFAULT_INTER_BATCH_DELAY, BatchConfig, CheckerSettings
from .enums import CheckerBackend
from .pricing import PriceEstimator


# Concurrency per backend: loosest for the offline double, most
# conservative for public WHOIS servers.
BACKEND_CONCURRENCY: dict[CheckerBackend, int] = {
    CheckerBackend.OFFLINE: 20,
    CheckerBackend.REGISTRAR: 5,
    CheckerBackend.WHOIS: 3,
}


@dataclass(frozen=True)
class ResolvedBackend:
    """A selected checker together with its batch limits."""

    checker: DomainChecker
    batch_config: BatchConfig

    @property
    def backend(self) -> CheckerBackend:
        return self.checker.backend


def select_backend(settings: CheckerSettings) -> CheckerBackend:
    """Pick the backend tag for the given settings."""
    if settings.offline:
        return CheckerBackend.OFFLINE
    if settings.registrar_credentials is not None and settings.registrar_credentials.present:
        return CheckerBackend.REGISTRAR
    return CheckerBackend.WHOIS


def create_checker(
    settings: CheckerSettings,
    logger: Optional[AuditLogger] = None,
    estimator: Optional[PriceEstimator] = None,
) -> ResolvedBackend:
    """
    Build the checker and batch configuration for the given settings.

    Args:
        settings: Resolved checker settings
        logger: Optional audit logger passed to the checker
        estimator: Optional price estimator shared by the checker

    Returns:
        ResolvedBackend with the checker and its BatchConfig
    """
    backend = select_backend(settings)
    batch_config = BatchConfig(
        concurrency=BACKEND_CONCURRENCY[backend],
        inter_batch_delay=DEFAULT_INTER_BATCH_DELAY,
    )

    checker: DomainChecker
    if backend == CheckerBackend.OFFLINE:
        checker = OfflineChecker(estimator=estimator)
    else:
        whois_checker = WhoisChecker(
            estimator=estimator,
            logger=logger,
            timeout=settings.whois_timeout,
            follow=settings.whois_follow,
        )
        if backend == CheckerBackend.REGISTRAR:
            checker = RegistrarChecker(
                credentials=settings.registrar_credentials,
                fallback=whois_checker,
                logger=logger,
            )
        else:
            checker = whois_checker

    if logger:
        logger.info(
            "BackendFactory",
            f"Selected {backend.value} backend",
            {
                "backend": backend.value,
                "concurrency": batch_config.concurrency,
                "inter_batch_delay": batch_config.inter_batch_delay,
            },
        )

    return ResolvedBackend(checker=checker, batch_config=batch_config)
