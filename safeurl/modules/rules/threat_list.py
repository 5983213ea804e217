"""
Threat List Rule.
Matches URLs against a local, static list of known-bad domains and URLs.
Not registered by default; the list is never refreshed automatically.
"""
from typing import Iterable, List, Optional
from urllib.parse import urlsplit

from safeurl.config.settings import settings
from safeurl.core.logger import log
from safeurl.core.models import Finding, Severity
from safeurl.modules.rules.base import SafetyRule, parse_absolute


def normalize_url(url: str) -> str:
    """
    Normalize URL for comparison: lowercase scheme and host,
    strip trailing slash, drop the fragment.
    """
    parsed = urlsplit(url.strip())
    scheme = parsed.scheme.lower() or "http"
    netloc = parsed.netloc.lower()
    path = parsed.path.rstrip("/")
    normalized = f"{scheme}://{netloc}{path}"
    if parsed.query:
        normalized += "?" + parsed.query
    return normalized


class ThreatListRule(SafetyRule):
    """Reports URLs found on a local threat list as critical."""

    rule_id = "THREAT_LIST"
    name = "Threat List Check"
    description = "Checks URL against known malicious URL databases"

    def __init__(self, domains: Optional[Iterable[str]] = None, urls: Optional[Iterable[str]] = None):
        if domains is None and urls is None:
            data = settings.load_threat_list()
            domains, urls = data["domains"], data["urls"]
        self.domains = tuple(sorted({d.strip().lower().lstrip(".") for d in (domains or []) if d.strip()}))
        self.urls = frozenset(normalize_url(u) for u in (urls or []) if u.strip())
        log.debug(f"[ThreatList] Loaded {len(self.domains)} domains, {len(self.urls)} urls")

    @classmethod
    def from_file(cls, path) -> "ThreatListRule":
        """Builds the rule from a JSON threat list file."""
        data = settings.load_threat_list(path)
        return cls(domains=data["domains"], urls=data["urls"])

    def check(self, url: str) -> List[Finding]:
        if not url or not url.strip():
            return []

        parsed = parse_absolute(url)
        if parsed is None:
            return []

        if normalize_url(url) in self.urls:
            return [self._finding("URL is listed on the threat list", Severity.CRITICAL, url)]

        host = (parsed.hostname or "").lower()
        for domain in self.domains:
            if host == domain or host.endswith("." + domain):
                return [self._finding(
                    f"Domain '{domain}' is listed on the threat list",
                    Severity.CRITICAL,
                    url,
                )]
        return []
