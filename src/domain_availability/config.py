"""
Configuration dataclasses for the domain availability checker.

Settings are resolved once, from explicit values or from the environment,
into immutable objects that are passed into the checkers and the batch
orchestrator. Nothing reads ambient global state at check time.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError


DEFAULT_WHOIS_TIMEOUT = 5.0
DEFAULT_WHOIS_FOLLOW = 1
DEFAULT_INTER_BATCH_DELAY = 0.5


@dataclass(frozen=True)
class BatchConfig:
    """Window size and pause used for one orchestration run."""

    concurrency: int
    inter_batch_delay: float = DEFAULT_INTER_BATCH_DELAY

    def __post_init__(self) -> None:
        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int):
            raise ConfigurationError(
                code="invalid_concurrency",
                message="Concurrency must be an integer",
                details={"concurrency": self.concurrency},
            )
        if self.concurrency <= 0:
            raise ConfigurationError(
                code="invalid_concurrency",
                message=f"Concurrency must be positive, got {self.concurrency}",
                details={"concurrency": self.concurrency},
            )
        if self.inter_batch_delay < 0:
            raise ConfigurationError(
                code="invalid_delay",
                message=f"Inter-batch delay must be >= 0, got {self.inter_batch_delay}",
                details={"inter_batch_delay": self.inter_batch_delay},
            )


@dataclass(frozen=True)
class RegistrarCredentials:
    """API key/secret pair for the registrar backend."""

    api_key: str
    api_secret: str

    @property
    def present(self) -> bool:
        return bool(self.api_key) and bool(self.api_secret)


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass(frozen=True)
class CheckerSettings:
    """Everything needed to pick a checker backend and its batch limits."""

    offline: bool = False
    registrar_credentials: Optional[RegistrarCredentials] = None
    whois_timeout: float = DEFAULT_WHOIS_TIMEOUT
    whois_follow: int = DEFAULT_WHOIS_FOLLOW
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _bool_env(env: Mapping[str, str], name: str) -> bool:
    return (env.get(name, "") or "").strip().lower() == "true"


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        return int(env.get(name, str(default)))
    except (TypeError, ValueError):
        return default


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    try:
        return float(env.get(name, str(default)))
    except (TypeError, ValueError):
        return default


def load_settings_from_env(
    env: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[str] = None,
) -> CheckerSettings:
    """
    Build CheckerSettings from environment variables.

    Recognized variables:
        DOMAIN_CHECKER_MOCK: "true" selects the offline double
        MAINREG_API_KEY / MAINREG_API_SECRET: registrar credentials
        WHOIS_TIMEOUT: per-lookup timeout in seconds
        WHOIS_FOLLOW: maximum referral hops
        LOG_LEVEL / LOG_FORMAT: logging configuration

    Args:
        env: Mapping to read from; defaults to os.environ after loading .env
        dotenv_path: Optional explicit .env file path

    Returns:
        Immutable CheckerSettings
    """
    if env is None:
        load_dotenv(dotenv_path)
        env = os.environ

    api_key = (env.get("MAINREG_API_KEY", "") or "").strip()
    api_secret = (env.get("MAINREG_API_SECRET", "") or "").strip()
    credentials = None
    if api_key and api_secret:
        credentials = RegistrarCredentials(api_key=api_key, api_secret=api_secret)

    level = (env.get("LOG_LEVEL", "info") or "info").strip().lower()
    if level not in ("debug", "info", "warn", "error"):
        level = "info"
    output_format = (env.get("LOG_FORMAT", "text") or "text").strip().lower()
    if output_format not in ("json", "text", "both"):
        output_format = "text"

    timeout = _float_env(env, "WHOIS_TIMEOUT", DEFAULT_WHOIS_TIMEOUT)
    if timeout <= 0:
        timeout = DEFAULT_WHOIS_TIMEOUT
    follow = _int_env(env, "WHOIS_FOLLOW", DEFAULT_WHOIS_FOLLOW)
    if follow < 0:
        follow = DEFAULT_WHOIS_FOLLOW

    return CheckerSettings(
        offline=_bool_env(env, "DOMAIN_CHECKER_MOCK"),
        registrar_credentials=credentials,
        whois_timeout=timeout,
        whois_follow=follow,
        logging=LoggingConfig(level=level, output_format=output_format),
    )
