from typing import List

from safeurl.core.models import Finding, Severity
from safeurl.modules.rules.base import SafetyRule, parse_absolute


class HttpsRule(SafetyRule):
    """Flags URLs served over plain HTTP."""

    rule_id = "HTTPS_CHECK"
    name = "HTTPS Check"
    description = "Checks if the URL uses secure HTTPS protocol"

    def check(self, url: str) -> List[Finding]:
        if not url or not url.strip():
            return []

        parsed = parse_absolute(url)
        if parsed is None:
            return []

        if parsed.scheme.lower() == "http":
            return [self._finding("URL uses insecure HTTP instead of HTTPS", Severity.MEDIUM, url)]
        return []
