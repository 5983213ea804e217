"""
Scoring Policy - Maps findings to a 0-100 score and a categorical status.
Pure functions, no state.
"""
from typing import Iterable

from safeurl.core.models import Finding, SafetyStatus, Severity


BASELINE_SCORE = 100

SEVERITY_PENALTIES = {
    Severity.INFO: 0,
    Severity.LOW: 5,
    Severity.MEDIUM: 15,
    Severity.HIGH: 30,
    Severity.CRITICAL: 50,
}

UNSAFE_BELOW = 50
SUSPICIOUS_BELOW = 80


def score(findings: Iterable[Finding]) -> int:
    """Subtracts each finding's severity penalty from 100, floored at 0."""
    total = BASELINE_SCORE - sum(SEVERITY_PENALTIES[f.severity] for f in findings)
    return max(0, total)


def status(findings: Iterable[Finding], score: int) -> SafetyStatus:
    """
    Worst severity first, then score bands.
    Never returns UNKNOWN; that is reserved for failed evaluations.
    """
    severities = {f.severity for f in findings}

    if Severity.CRITICAL in severities:
        return SafetyStatus.MALICIOUS
    if Severity.HIGH in severities:
        return SafetyStatus.UNSAFE
    if score < UNSAFE_BELOW:
        return SafetyStatus.UNSAFE
    if score < SUSPICIOUS_BELOW:
        return SafetyStatus.SUSPICIOUS
    return SafetyStatus.SAFE
