"""
WHOIS Client module for domain availability checking.

This module implements the subset of the WHOIS protocol needed to classify
availability: one plaintext query on port 43, server discovery through IANA
for TLDs without a well-known server, and at most a configurable number of
referral hops to the authoritative (registrar) server.

Responses are parsed into a RegistryRecord. Transport and protocol problems
are raised as DomainAvailabilityError subclasses; deciding what a failure
means for availability is left to the caller.
"""

import asyncio
import socket
from typing import Optional

from .domain_validator import DomainValidator
from .enums import WHOISErrorCode
from .exceptions import LookupTimeoutError, NetworkError, ProtocolError, RateLimitError
from .models import RegistryRecord
from .tld_registry import DEFAULT_WHOIS_SERVERS


WHOIS_PORT = 43

IANA_WHOIS_SERVER = "whois.iana.org"

# Keys are compared lower-cased with surrounding whitespace removed
NAME_KEYS = frozenset({"domain name", "domain", "domainname", "domain_name"})
STATUS_KEYS = frozenset({"domain status", "status", "state", "registration status"})
REFERRAL_KEYS = frozenset({"registrar whois server", "whois server", "refer", "whois"})

# Lower-cased fragments that identify a rate-limit rejection
RATE_LIMIT_SIGNALS: tuple[str, ...] = (
    "limit exceeded",
    "too many queries",
    "too many requests",
    "query rate limit",
    "access control limit",
    "exceeded the query limit",
)

_MAX_KEY_LENGTH = 60


def _clean_server(value: str) -> Optional[str]:
    """Normalize a referral value such as 'whois://whois.example.com/'."""
    server = value.strip().lower()
    for prefix in ("whois://", "rwhois://", "http://", "https://"):
        if server.startswith(prefix):
            server = server[len(prefix):]
    server = server.split("/", 1)[0].split(":", 1)[0].strip()
    if not server or " " in server or "." not in server:
        return None
    return server


def parse_record(raw_response: Optional[str]) -> Optional[RegistryRecord]:
    """
    Parse raw WHOIS text into a RegistryRecord.

    Lines of the form "Key: value" with a recognized key populate the
    domain name, statuses and referral server. Registries such as Nominet
    put the value on the following, further indented line(s) instead:

        Domain name:
            example.co.uk

    Such continuation lines are read as the value of the label above them.
    Every other non-empty line is kept verbatim in `text`.

    Args:
        raw_response: Raw WHOIS response text

    Returns:
        RegistryRecord, or None when the response is empty
    """
    if not raw_response or not raw_response.strip():
        return None

    domain_name: Optional[str] = None
    statuses: list[str] = []
    text: list[str] = []
    referral: Optional[str] = None

    # Recognized label waiting for its value on the next indented line(s)
    pending_key: Optional[str] = None
    pending_indent = 0

    for raw_line in raw_response.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        indent = len(raw_line) - len(raw_line.lstrip())
        if pending_key is not None and indent > pending_indent:
            if pending_key in NAME_KEYS:
                if domain_name is None:
                    domain_name = line
                pending_key = None
            elif pending_key in STATUS_KEYS:
                statuses.append(line)
            else:
                if referral is None:
                    referral = _clean_server(line)
                pending_key = None
            continue
        pending_key = None

        key, sep, value = line.partition(":")
        key = key.strip().lower()
        value = value.strip()

        if not sep or not key or "/" in key or len(key) > _MAX_KEY_LENGTH:
            text.append(line)
            continue

        if key in NAME_KEYS or key in STATUS_KEYS or key in REFERRAL_KEYS:
            if not value:
                pending_key, pending_indent = key, indent
            elif key in NAME_KEYS:
                if domain_name is None:
                    domain_name = value
            elif key in STATUS_KEYS:
                statuses.append(value)
            elif referral is None:
                referral = _clean_server(value)
        else:
            text.append(line)

    return RegistryRecord(
        domain_name=domain_name,
        statuses=tuple(statuses) if statuses else None,
        text=tuple(text) if text else None,
        referral_server=referral,
    )


def merge_records(
    registry: RegistryRecord, referred: Optional[RegistryRecord]
) -> RegistryRecord:
    """Combine a registry answer with the answer of the server it referred to."""
    if referred is None:
        return RegistryRecord(
            domain_name=registry.domain_name,
            statuses=registry.statuses,
            text=registry.text,
            referral_server=None,
        )

    return RegistryRecord(
        domain_name=referred.domain_name or registry.domain_name,
        statuses=referred.statuses or registry.statuses,
        text=referred.text or registry.text,
        referral_server=None,
    )


class WHOISClient:
    """
    WHOIS client returning parsed registry records.

    One instance can be shared by concurrent lookups. The only mutable state
    is the per-TLD cache of servers discovered through IANA, which is written
    at most once per TLD with an identical value.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        follow: int = 1,
        custom_servers: Optional[dict[str, str]] = None,
    ) -> None:
        """
        Initialize the WHOIS client.

        Args:
            timeout: Per-query timeout in seconds
            follow: Maximum number of referral hops after the registry query
            custom_servers: Optional WHOIS servers per TLD overriding the defaults
        """
        self._timeout = timeout
        self._follow = follow
        self._validator = DomainValidator()

        # Merge custom servers with defaults
        self._servers = dict(DEFAULT_WHOIS_SERVERS)
        if custom_servers:
            self._servers.update(
                {tld.lower().lstrip("."): server for tld, server in custom_servers.items()}
            )
        self._discovered: dict[str, str] = {}

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def follow(self) -> int:
        return self._follow

    async def lookup(self, domain: str) -> Optional[RegistryRecord]:
        """
        Look up one domain and return its parsed registry record.

        Args:
            domain: Candidate domain (Unicode labels are IDNA-encoded)

        Returns:
            RegistryRecord, or None when the registry answered with nothing

        Raises:
            LookupTimeoutError: A query exceeded the timeout
            NetworkError: A server could not be reached or resolved
            RateLimitError: A server rejected the query as rate limited
            ProtocolError: A response was malformed
            ValidationError: The domain could not be IDNA-encoded
        """
        query_domain = self._validator.normalize_to_canonical(domain.strip())
        tld = self._extract_tld(query_domain)
        server = await self.resolve_server(tld)

        raw_response = await self._query(query_domain, server)
        record = parse_record(raw_response)

        visited = {server}
        hops = 0
        while (
            record is not None
            and record.referral_server
            and record.referral_server not in visited
            and hops < self._follow
        ):
            referral = record.referral_server
            visited.add(referral)
            hops += 1
            referred = parse_record(await self._query(query_domain, referral))
            record = merge_records(record, referred)

        return record

    async def resolve_server(self, tld: str) -> str:
        """
        Return the WHOIS server responsible for a TLD.

        Well-known servers come from the TLD registry; anything else is
        asked of IANA once and cached.
        """
        tld = tld.lower().lstrip(".")
        server = self._servers.get(tld) or self._discovered.get(tld)
        if server:
            return server

        record = parse_record(await self._query(tld, IANA_WHOIS_SERVER))
        if record is None or not record.referral_server:
            raise NetworkError(
                code=WHOISErrorCode.NO_SERVER.value,
                message=f"No WHOIS server known for TLD: {tld}",
                details={"tld": tld},
            )

        self._discovered[tld] = record.referral_server
        return record.referral_server

    async def _query(self, query: str, server: str) -> str:
        """Run one query against one server and screen the raw answer."""
        try:
            raw_response = await self._execute_whois_query(query, server)
        except asyncio.TimeoutError as e:
            raise LookupTimeoutError(
                code=WHOISErrorCode.TIMEOUT.value,
                message=f"WHOIS query timed out after {self._timeout}s",
                details={"server": server, "query": query},
            ) from e
        except OSError as e:
            raise NetworkError(
                code=WHOISErrorCode.NETWORK_ERROR.value,
                message=f"Socket error: {e}",
                details={"server": server, "query": query},
            ) from e

        if "\x00" in raw_response:
            raise ProtocolError(
                code=WHOISErrorCode.PARSE_ERROR.value,
                message="WHOIS response contains binary data",
                details={"server": server, "query": query},
            )

        lowered = raw_response.lower()
        for signal in RATE_LIMIT_SIGNALS:
            if signal in lowered:
                raise RateLimitError(
                    code=WHOISErrorCode.RATE_LIMITED.value,
                    message=f"WHOIS server rate limited the query: {signal}",
                    details={"server": server, "query": query},
                )

        return raw_response

    async def _execute_whois_query(self, query: str, server: str) -> str:
        """
        Execute the actual WHOIS query via socket.

        Args:
            query: Domain or TLD to query
            server: WHOIS server hostname

        Returns:
            Raw WHOIS response as string
        """
        loop = asyncio.get_running_loop()

        def _sync_query() -> str:
            with socket.create_connection((server, WHOIS_PORT), timeout=self._timeout) as sock:
                sock.settimeout(self._timeout)
                # Send query with CRLF
                sock.sendall(f"{query}\r\n".encode("utf-8"))

                # Receive response
                response_parts: list[bytes] = []
                while True:
                    data = sock.recv(4096)
                    if not data:
                        break
                    response_parts.append(data)

                return b"".join(response_parts).decode("utf-8", errors="replace")

        return await asyncio.wait_for(
            loop.run_in_executor(None, _sync_query),
            timeout=self._timeout,
        )

    def _extract_tld(self, domain: str) -> str:
        """Extract TLD from domain string."""
        parts = domain.lower().rstrip(".").split(".")
        return parts[-1] if parts else ""
