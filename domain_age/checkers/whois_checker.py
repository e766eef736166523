"""
whois_checker.py
WHOIS domain age checker - fetch, parse, normalize, classify, cache.
Protocol and registrar text parsing are left to python-whois.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

import whois

from domain_age.cache import ResultCache
from domain_age.checkers.dates import (
    UnsupportedDateFormat,
    format_date,
    is_recently_registered,
    normalize_date,
)
from domain_age.contracts import DomainResult

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], str]
ParseFn = Callable[[str, str], Mapping[str, Any]]


class DomainCheckError(Exception):
    """A lookup step failed; the message goes into DomainResult.error."""


class WhoisFetchError(DomainCheckError):
    def __init__(self, cause: Exception):
        super().__init__(f"Failed to fetch WHOIS: {cause}")


class WhoisParseError(DomainCheckError):
    def __init__(self, cause: Exception):
        super().__init__(f"Failed to parse WHOIS data: {cause}")


class MissingCreationDate(DomainCheckError):
    def __init__(self):
        super().__init__("Creation date not found in WHOIS data")


class CreationDateFormatError(DomainCheckError):
    def __init__(self, cause: UnsupportedDateFormat):
        super().__init__(f"Failed to parse creation date: {cause}")


# Follow thin-registry referrals (.com/.net) to the registrar's server.
WHOIS_FLAGS = whois.NICClient.WHOIS_RECURSE


def fetch_whois(domain: str) -> str:
    """Raw WHOIS text for domain, via python-whois' NIC client.

    Socket errors are raised rather than returned as "Socket not responding"
    text, which would otherwise parse into a record without a creation date.
    """
    query = domain.encode("idna").decode("utf-8")
    return whois.NICClient().whois_lookup(None, query, WHOIS_FLAGS, quiet=True, ignore_socket_errors=False)


def parse_whois(domain: str, text: str) -> Mapping[str, Any]:
    """Registrar-aware parse of raw WHOIS text (python-whois WhoisEntry)."""
    return whois.WhoisEntry.load(domain, text)


def normalize_domain(domain: str) -> str:
    """Strip protocol, path, and www for WHOIS lookup."""
    if not domain:
        return ""
    domain = domain.strip().lower()
    for prefix in ("http://", "https://", "www."):
        if domain.startswith(prefix):
            domain = domain[len(prefix):]
    if "/" in domain:
        domain = domain.split("/")[0]
    return domain


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WHOISChecker:
    """Answer "was this domain registered in the last six months?".

    Owns the result cache and the lookup lock. The lock is process-wide, not
    per domain: it serializes every upstream WHOIS query so concurrent
    requests cannot fan out against the registries.
    """

    def __init__(self, cache: ResultCache, fetch: FetchFn = fetch_whois,
                 parse: ParseFn = parse_whois, cache_failures: bool = True,
                 normalize: bool = False, clock: Callable[[], datetime] = _utcnow):
        self.cache = cache
        self._fetch = fetch
        self._parse = parse
        self.cache_failures = cache_failures
        self.normalize = normalize
        self._clock = clock
        self._lookup_lock = threading.Lock()

    def lookup_key(self, domain: str) -> str:
        """Domain as it is looked up and cached; may be empty after normalizing."""
        return normalize_domain(domain) if self.normalize else domain

    def check_domain(self, domain: str) -> DomainResult:
        domain = self.lookup_key(domain)
        if not domain:
            raise ValueError("domain is empty")

        cached = self.cache.get(domain)
        if cached is not None:
            logger.debug("Cache hit for %s", domain)
            return cached

        with self._lookup_lock:
            # Another request may have filled the slot while we waited.
            cached = self.cache.get(domain)
            if cached is not None:
                logger.debug("Cache hit for %s after waiting on lookup lock", domain)
                return cached

            logger.info("WHOIS lookup for %s", domain)
            try:
                result = self._lookup(domain)
            except DomainCheckError as e:
                logger.warning("WHOIS check failed for %s: %s", domain, e)
                result = DomainResult(domain=domain, error=str(e))

            if not result.failed or self.cache_failures:
                self.cache.set(domain, result)
            return result

    def _lookup(self, domain: str) -> DomainResult:
        try:
            raw = self._fetch(domain)
        except Exception as e:
            raise WhoisFetchError(e) from e

        try:
            record = self._parse(domain, raw)
        except Exception as e:
            raise WhoisParseError(e) from e

        creation_date = record.get("creation_date") if record else None
        if not creation_date:
            raise MissingCreationDate()

        try:
            created = normalize_date(creation_date)
        except UnsupportedDateFormat as e:
            raise CreationDateFormatError(e) from e

        return DomainResult(
            domain=domain,
            created_date=format_date(created),
            is_less_than_6_months=is_recently_registered(created, now=self._clock()),
        )
