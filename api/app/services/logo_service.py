"""Company logo lookup with an in-memory cache.

Guesses a domain from the company name, then checks Clearbit and the Google
favicon service with HEAD requests. Misses are cached too. Expired entries are
dropped on lookup and the cache holds at most ``max_entries`` names (oldest
evicted first), since any caller-supplied name becomes a key.
"""

from __future__ import annotations

import logging
import os
import re
import time
from typing import Callable, Optional

import httpx

log = logging.getLogger(__name__)

CACHE_SECONDS = 24 * 60 * 60
MAX_CACHE_ENTRIES = 1024

DEFAULT_COMPANY_DOMAINS: dict[str, str] = {
    "google": "google.com",
    "microsoft": "microsoft.com",
    "apple": "apple.com",
    "amazon": "amazon.com",
    "meta": "meta.com",
    "facebook": "meta.com",
    "netflix": "netflix.com",
    "spotify": "spotify.com",
    "uber": "uber.com",
    "airbnb": "airbnb.com",
    "tesla": "tesla.com",
    "nvidia": "nvidia.com",
    "intel": "intel.com",
    "amd": "amd.com",
    "ibm": "ibm.com",
    "oracle": "oracle.com",
    "salesforce": "salesforce.com",
    "adobe": "adobe.com",
    "vmware": "vmware.com",
    "redhat": "redhat.com",
    "twitter": "x.com",
    "linkedin": "linkedin.com",
    "github": "github.com",
    "gitlab": "gitlab.com",
    "atlassian": "atlassian.com",
    "shopify": "shopify.com",
    "stripe": "stripe.com",
    "paypal": "paypal.com",
    "dropbox": "dropbox.com",
    "slack": "slack.com",
    "zoom": "zoom.us",
    "cloudflare": "cloudflare.com",
    "mongodb": "mongodb.com",
    "elastic": "elastic.co",
    "docker": "docker.com",
    "kubernetes": "kubernetes.io",
    "jenkins": "jenkins.io",
    "hashicorp": "hashicorp.com",
    "databricks": "databricks.com",
    "snowflake": "snowflake.com",
    "palantir": "palantir.com",
    "twilio": "twilio.com",
    "square": "squareup.com",
    "airbus": "airbus.com",
    "boeing": "boeing.com",
    "volkswagen": "volkswagen.com",
    "toyota": "toyota.com",
    "ford": "ford.com",
    "bmw": "bmw.com",
    "mercedes": "mercedes-benz.com",
    "cocacola": "coca-cola.com",
    "pepsi": "pepsi.com",
    "mcdonalds": "mcdonalds.com",
    "starbucks": "starbucks.com",
}

_SUFFIX_RE = re.compile(r"\s+(inc|llc|ltd|corp|corporation|company|co)\.?$", re.IGNORECASE)
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def _configured_domain_map() -> dict[str, str]:
    mapping = dict(DEFAULT_COMPANY_DOMAINS)
    raw = os.getenv("COMPANY_DOMAIN_OVERRIDES", "").strip()
    if not raw:
        return mapping
    for pair in raw.split(","):
        text = pair.strip()
        if not text or "=" not in text:
            continue
        name, domain = text.split("=", 1)
        key = _NON_ALNUM_RE.sub("", name.strip().lower())
        if key and domain.strip():
            mapping[key] = domain.strip().lower()
    return mapping


def extract_domain(company: str) -> str:
    cleaned = _SUFFIX_RE.sub("", company.lower())
    cleaned = _NON_ALNUM_RE.sub("", cleaned)
    return _configured_domain_map().get(cleaned) or f"{cleaned}.com"


class LogoService:
    def __init__(
        self,
        timeout: float = 5.0,
        cache_seconds: float = CACHE_SECONDS,
        clock: Callable[[], float] = time.time,
        max_entries: int = MAX_CACHE_ENTRIES,
    ) -> None:
        self._timeout = timeout
        self._cache_seconds = cache_seconds
        self._clock = clock
        self._max_entries = max(1, max_entries)
        self._cache: dict[str, tuple[Optional[str], float]] = {}

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_size(self) -> int:
        return len(self._cache)

    def cached_logo(self, company: str) -> tuple[bool, Optional[str]]:
        """Return (hit, url). A hit may carry ``None`` for a cached miss."""
        entry = self._cache.get(company)
        if entry is None:
            return False, None
        url, stored_at = entry
        if self._clock() - stored_at >= self._cache_seconds:
            del self._cache[company]
            return False, None
        return True, url

    def _store(self, company: str, logo_url: Optional[str]) -> None:
        # Insertion order is store order, so the first key is the oldest.
        self._cache.pop(company, None)
        while len(self._cache) >= self._max_entries:
            self._cache.pop(next(iter(self._cache)))
        self._cache[company] = (logo_url, self._clock())

    def _is_image(self, url: str) -> bool:
        try:
            r = httpx.head(url, timeout=self._timeout, follow_redirects=True)
        except httpx.HTTPError as e:
            log.debug("logo check %s failed: %s", url, e)
            return False
        content_type = r.headers.get("content-type") or ""
        return r.is_success and content_type.startswith("image/")

    def fetch_company_logo(self, company: str) -> Optional[str]:
        if not company or not company.strip():
            return None

        hit, cached = self.cached_logo(company)
        if hit:
            return cached

        domain = extract_domain(company)
        logo_url: Optional[str] = None
        for candidate in (
            f"https://logo.clearbit.com/{domain}",
            f"https://www.google.com/s2/favicons?domain={domain}&sz=64",
        ):
            if self._is_image(candidate):
                logo_url = candidate
                break
        if logo_url is None:
            log.debug("no logo found for %s (domain=%s)", company, domain)

        self._store(company, logo_url)
        return logo_url

    def fetch_multiple_logos(self, companies: list[str]) -> dict[str, Optional[str]]:
        return {company: self.fetch_company_logo(company) for company in companies}
