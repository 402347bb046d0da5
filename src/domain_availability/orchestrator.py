"""
Batch Orchestrator for the domain availability checker.

Checks an ordered list of candidate domains with bounded concurrency:
- the list is split into consecutive windows of `concurrency` domains
- all lookups of a window run concurrently; the next window starts only
  after every result of the current one is collected
- windows are separated by `inter_batch_delay` (not after the last one)
- results are reassembled by position, so output order equals input order

A single failed lookup contributes one conservative "unavailable" result;
the batch is never aborted or retried.
"""

import asyncio
from typing import Awaitable, Callable, Iterator, Optional, Sequence

from .audit_logger import AuditLogger
from .checkers import DomainChecker
from .config import BatchConfig
from .enums import LogLevel
from .models import CheckResult
from .pricing import DEFAULT_ESTIMATOR, PriceEstimator


def iter_windows(domains: Sequence[str], size: int) -> Iterator[list[str]]:
    """Yield consecutive slices of at most `size` domains."""
    if size <= 0:
        raise ValueError(f"Window size must be positive, got {size}")
    for start in range(0, len(domains), size):
        yield list(domains[start:start + size])


class BatchOrchestrator:
    """
    Runs a Checker over a batch of domains window by window.

    The checker and batch configuration are fixed at construction, so one
    orchestrator instance always behaves the same way for a given input.
    """

    async def __aenter__(self) -> "BatchOrchestrator":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        pass

    def __init__(
        self,
        checker: DomainChecker,
        batch_config: BatchConfig,
        logger: Optional[AuditLogger] = None,
        estimator: Optional[PriceEstimator] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize the batch orchestrator.

        Args:
            checker: Checker answering single-domain lookups
            batch_config: Window size and inter-window pause
            logger: Optional audit logger
            estimator: Prices results the orchestrator has to create itself
            sleep: Coroutine used for the inter-window pause
        """
        self._checker = checker
        self._batch_config = batch_config
        self._logger = logger
        self._estimator = estimator or DEFAULT_ESTIMATOR
        self._sleep = sleep

    @property
    def checker(self) -> DomainChecker:
        return self._checker

    @property
    def batch_config(self) -> BatchConfig:
        return self._batch_config

    async def check_domain(self, domain: str) -> CheckResult:
        """Check a single domain through the configured checker."""
        return await self._check_one(domain)

    async def check_all(
        self,
        domains: Sequence[str],
        deadline: Optional[float] = None,
    ) -> list[CheckResult]:
        """
        Check every domain and return results in input order.

        Args:
            domains: Ordered candidate domains
            deadline: Optional time budget in seconds for the whole batch;
                lookups still running when it expires, and windows not yet
                started, are reported as unavailable

        Returns:
            One CheckResult per input domain, same length and order
        """
        if not domains:
            return []

        loop = asyncio.get_running_loop()
        deadline_at = loop.time() + deadline if deadline is not None else None

        windows = list(iter_windows(domains, self._batch_config.concurrency))
        results: list[CheckResult] = []

        self._log(LogLevel.INFO, f"Checking {len(domains)} domain(s) in {len(windows)} window(s)", {
            "domains": len(domains),
            "windows": len(windows),
            "concurrency": self._batch_config.concurrency,
            "backend": self._checker.backend.value,
        })

        expired = False
        for index, window in enumerate(windows):
            if expired or (deadline_at is not None and loop.time() >= deadline_at):
                skipped = [domain for rest in windows[index:] for domain in rest]
                self._log(LogLevel.WARN, "Deadline expired, remaining domains marked unavailable", {
                    "skipped": len(skipped),
                })
                results.extend(self._unavailable(domain) for domain in skipped)
                break

            self._log(LogLevel.DEBUG, f"Window {index + 1}/{len(windows)} started", {
                "window": index + 1,
                "size": len(window),
            })
            window_results, expired = await self._run_window(window, deadline_at)
            results.extend(window_results)

            if index < len(windows) - 1 and not expired:
                await self._sleep(self._batch_config.inter_batch_delay)

        available = sum(1 for result in results if result.available)
        self._log(LogLevel.INFO, f"Batch completed: {available}/{len(results)} available", {
            "available": available,
            "total": len(results),
        })
        return results

    async def _run_window(
        self, window: list[str], deadline_at: Optional[float]
    ) -> tuple[list[CheckResult], bool]:
        """
        Run one window concurrently and collect results by position.

        Returns:
            Tuple of (results in window order, whether the deadline cut it off)
        """
        tasks = [asyncio.ensure_future(self._check_one(domain)) for domain in window]

        if deadline_at is None:
            return list(await asyncio.gather(*tasks)), False

        remaining = max(0.0, deadline_at - asyncio.get_running_loop().time())
        done, pending = await asyncio.wait(tasks, timeout=remaining)

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            self._log(LogLevel.WARN, "Deadline expired during window", {
                "cancelled": [domain for domain, task in zip(window, tasks) if task in pending],
            })

        results = [
            task.result() if task in done else self._unavailable(domain)
            for domain, task in zip(window, tasks)
        ]
        return results, bool(pending)

    async def _check_one(self, domain: str) -> CheckResult:
        try:
            return await self._checker.check(domain)
        except Exception as e:
            # Checkers are not expected to raise; fold it into the batch anyway
            if self._logger:
                self._logger.log_error(
                    "BatchOrchestrator",
                    "Checker raised, marking domain unavailable",
                    error=e,
                    additional_data={"domain": domain},
                )
            return self._unavailable(domain)

    def _unavailable(self, domain: str) -> CheckResult:
        return self._estimator.build_result(domain, available=False)

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "BatchOrchestrator", message, data)
