"""
Suspicious Domain Rule.
Heuristics on the host name commonly seen in phishing domains:
hyphen stuffing, raw IPv4 hosts and credential-bait keywords.
"""
import re
from typing import List

from safeurl.core.models import Finding, Severity
from safeurl.modules.rules.base import SafetyRule, parse_host


class SuspiciousDomainRule(SafetyRule):
    """Checks for domain patterns commonly associated with phishing."""

    rule_id = "SUSPICIOUS_DOMAIN"
    name = "Suspicious Domain Pattern Check"
    description = "Checks for domain patterns commonly associated with phishing"

    HYPHEN_THRESHOLD = 3

    IPV4_PATTERN = re.compile(r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}", re.ASCII)

    # Ordered: only the first keyword found is reported
    SUSPICIOUS_KEYWORDS = ("login", "signin", "secure", "account", "verify", "update", "confirm")

    LEGIT_DOMAINS = (
        "google.com", "microsoft.com", "apple.com", "amazon.com",
        "github.com", "facebook.com", "twitter.com", "linkedin.com",
    )

    def check(self, url: str) -> List[Finding]:
        if not url or not url.strip():
            return []

        host = parse_host(url)
        if host is None:
            return []

        findings = []

        hyphen_count = host.count("-")
        if hyphen_count >= self.HYPHEN_THRESHOLD:
            findings.append(self._finding(
                f"Domain contains {hyphen_count} hyphens, which is common in phishing URLs",
                Severity.MEDIUM,
                url,
            ))

        if self.IPV4_PATTERN.fullmatch(host):
            findings.append(self._finding(
                "URL uses IP address instead of domain name, which is suspicious",
                Severity.HIGH,
                url,
            ))

        if not self._is_known_legit_domain(host):
            for keyword in self.SUSPICIOUS_KEYWORDS:
                if keyword in host:
                    findings.append(self._finding(
                        f"Domain contains '{keyword}' which may indicate a phishing attempt",
                        Severity.MEDIUM,
                        url,
                    ))
                    break

        return findings

    def _is_known_legit_domain(self, host: str) -> bool:
        # Plain suffix match, so "notgoogle.com" also passes
        return host.endswith(self.LEGIT_DOMAINS)
