from typing import List

from safeurl.core.models import Finding, Severity
from safeurl.modules.rules.base import SafetyRule, parse_host


class SuspiciousTldRule(SafetyRule):
    """Flags top-level domains commonly abused for phishing and malware."""

    rule_id = "SUSPICIOUS_TLD"
    name = "Suspicious TLD Check"
    description = "Checks for top-level domains commonly associated with malicious sites"

    # Ordered: the first match wins
    SUSPICIOUS_TLDS = (
        ".tk", ".ml", ".ga", ".cf", ".gq",   # Free TLDs often abused
        ".xyz", ".top", ".work", ".click",   # Cheap TLDs often used for spam
        ".zip", ".mov",                      # Look like file extensions
    )

    def check(self, url: str) -> List[Finding]:
        if not url or not url.strip():
            return []

        host = parse_host(url)
        if host is None:
            return []

        for tld in self.SUSPICIOUS_TLDS:
            if host.endswith(tld):
                return [self._finding(
                    f"URL uses suspicious TLD '{tld}' commonly associated with malicious sites",
                    Severity.MEDIUM,
                    url,
                )]
        return []
