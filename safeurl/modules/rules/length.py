from typing import List, Optional

from safeurl.config.settings import settings
from safeurl.core.models import Finding, Severity
from safeurl.modules.rules.base import SafetyRule


class UrlLengthRule(SafetyRule):
    """
    Flags excessively long URLs, a common obfuscation trick.
    Length is the character count of the raw URL string.
    """

    rule_id = "URL_LENGTH"
    name = "URL Length Check"
    description = "Checks for excessively long URLs that may indicate obfuscation attempts"

    def __init__(self, max_length: Optional[int] = None, critical_length: Optional[int] = None):
        self.max_length = max_length if max_length is not None else settings.URL_MAX_LENGTH
        self.critical_length = critical_length if critical_length is not None else settings.URL_CRITICAL_LENGTH

    def check(self, url: str) -> List[Finding]:
        if not url or not url.strip():
            return []

        length = len(url)
        if length > self.critical_length:
            return [self._finding(
                f"URL is excessively long ({length} characters), which may indicate obfuscation",
                Severity.HIGH,
                url,
            )]
        if length > self.max_length:
            return [self._finding(f"URL is unusually long ({length} characters)", Severity.LOW, url)]
        return []
