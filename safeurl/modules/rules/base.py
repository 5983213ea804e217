"""
Safety Rule capability.
Each rule inspects a single URL and emits zero or more findings.
New checks are added by subclassing, without touching the engine.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import SplitResult, urlsplit, uses_netloc

from safeurl.core.models import Finding, Severity


def parse_absolute(url: str) -> Optional[SplitResult]:
    """
    Parses url as an absolute URI.
    Returns None when it cannot be parsed, carries no scheme,
    or uses a network scheme without a host.
    """
    try:
        # Raises on malformed netlocs such as unbalanced IPv6 brackets
        parsed = urlsplit(url.strip())
    except ValueError:
        return None
    if not parsed.scheme:
        return None
    if parsed.scheme.lower() in uses_netloc and not parsed.hostname:
        return None
    return parsed


def parse_host(url: str) -> Optional[str]:
    """Returns the lower-cased host of an absolute URL, or None."""
    parsed = parse_absolute(url)
    if parsed is None:
        return None
    return (parsed.hostname or "").lower()


class SafetyRule(ABC):
    """
    Base class for all safety rules.
    Rules are stateless or carry only static configuration.
    """

    rule_id: str = ""
    name: str = ""
    description: str = ""

    @abstractmethod
    def check(self, url: str) -> List[Finding]:
        """Checks url against this rule. Empty list when the URL passes."""

    async def check_async(self, url: str) -> List[Finding]:
        """Asynchronous variant. Same findings as check() for the same input."""
        return self.check(url)

    def _finding(self, description: str, severity: Severity, url: str) -> Finding:
        return Finding(rule_id=self.rule_id, description=description, severity=severity, affected_url=url)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.rule_id}>"
