"""
Result Models.
Plain dataclasses returned by the resolver, the rule engine and the analyzer.
Every result is built fresh per call and owned by the caller.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Severity(Enum):
    """Risk level attached to a finding."""
    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SafetyStatus(Enum):
    """Final verdict for an evaluated URL."""
    SAFE = "safe"
    SUSPICIOUS = "suspicious"
    UNSAFE = "unsafe"
    MALICIOUS = "malicious"
    UNKNOWN = "unknown"     # Failure paths only


@dataclass(frozen=True)
class RedirectHop:
    """A single request/response step in a redirect chain."""
    url: str
    status_code: int
    step: int


@dataclass
class ResolutionResult:
    """Outcome of following the redirects of one URL."""
    original_url: str
    final_url: str
    chain: Tuple[RedirectHop, ...] = ()
    succeeded: bool = False
    error_reason: Optional[str] = None
    elapsed_ms: float = 0.0

    @property
    def redirect_count(self) -> int:
        return len(self.chain)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_url": self.original_url,
            "final_url": self.final_url,
            "redirect_count": self.redirect_count,
            "chain": [
                {"step": hop.step, "url": hop.url, "status_code": hop.status_code}
                for hop in self.chain
            ],
            "succeeded": self.succeeded,
            "error_reason": self.error_reason,
            "elapsed_ms": round(self.elapsed_ms, 2),
        }


@dataclass(frozen=True)
class Finding:
    """A single safety concern raised by one rule against one URL."""
    rule_id: str
    description: str
    severity: Severity
    affected_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "description": self.description,
            "severity": self.severity.value,
            "affected_url": self.affected_url,
        }


@dataclass
class EvaluationResult:
    """Outcome of running the registered rules against one URL."""
    url: str
    findings: Tuple[Finding, ...] = ()
    score: int = 100
    status: SafetyStatus = SafetyStatus.UNKNOWN
    succeeded: bool = False
    error_reason: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_safe(self) -> bool:
        return self.status == SafetyStatus.SAFE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "findings": [f.to_dict() for f in self.findings],
            "score": self.score,
            "status": self.status.value,
            "succeeded": self.succeeded,
            "error_reason": self.error_reason,
            "checked_at": self.checked_at.isoformat(),
        }


@dataclass
class AnalysisResult:
    """Resolution and evaluation of one URL, paired."""
    resolution: ResolutionResult
    evaluation: EvaluationResult

    @property
    def is_safe(self) -> bool:
        return self.evaluation.status == SafetyStatus.SAFE

    @property
    def final_url(self) -> str:
        return self.resolution.final_url

    def to_dict(self) -> Dict[str, Any]:
        return {
            "final_url": self.final_url,
            "is_safe": self.is_safe,
            "resolution": self.resolution.to_dict(),
            "evaluation": self.evaluation.to_dict(),
        }
