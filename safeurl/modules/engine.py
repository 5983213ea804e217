"""
Rule Engine - Runs every registered safety rule against a URL.
Holds an ordered registry keyed by unique rule id.
"""
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from safeurl.core.cancellation import CancellationToken, check_cancelled
from safeurl.core.errors import DuplicateRuleError, OperationCancelled
from safeurl.core.logger import log
from safeurl.core.models import EvaluationResult, Finding, SafetyStatus
from safeurl.modules import scoring
from safeurl.modules.rules import SafetyRule, default_rules


class RuleEngine:
    """
    Evaluates URLs against an ordered set of rules.
    Findings keep registration order, then emission order within a rule.

    The registry is not locked: mutate it at setup time, before
    evaluations run concurrently.
    """

    def __init__(self, use_default_rules: bool = True):
        self._rules: List[SafetyRule] = []
        if use_default_rules:
            for rule in default_rules():
                self.add_rule(rule)

    @property
    def rules(self) -> Tuple[SafetyRule, ...]:
        """Read-only snapshot of the registered rules."""
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def add_rule(self, rule: SafetyRule):
        """Appends a rule. Raises DuplicateRuleError if its id is taken."""
        if rule is None:
            raise ValueError("rule must not be None")

        if any(r.rule_id == rule.rule_id for r in self._rules):
            raise DuplicateRuleError(rule.rule_id)

        self._rules.append(rule)
        log.debug(f"[Engine] Registered rule {rule.rule_id}")

    def remove_rule(self, rule_id: str) -> bool:
        """Removes the first rule with rule_id. Returns False if none matched."""
        for index, rule in enumerate(self._rules):
            if rule.rule_id == rule_id:
                del self._rules[index]
                log.debug(f"[Engine] Removed rule {rule_id}")
                return True
        return False

    def evaluate(self, url: str, cancel_token: Optional[CancellationToken] = None) -> EvaluationResult:
        """Runs all rules in order and scores the combined findings."""
        checked_at = datetime.now(timezone.utc)
        if not url or not url.strip():
            return self._failure(url, checked_at, "URL cannot be null or empty")

        findings: List[Finding] = []
        try:
            for rule in self.rules:
                check_cancelled(cancel_token)
                findings.extend(rule.check(url))
        except OperationCancelled:
            return self._failure(url, checked_at, "Check was cancelled")
        except Exception as e:
            return self._failure(url, checked_at, f"Error during safety check: {e}")

        return self._success(url, checked_at, findings)

    async def evaluate_async(self, url: str, cancel_token: Optional[CancellationToken] = None) -> EvaluationResult:
        """Same as evaluate(), awaiting each rule's asynchronous check."""
        checked_at = datetime.now(timezone.utc)
        if not url or not url.strip():
            return self._failure(url, checked_at, "URL cannot be null or empty")

        findings: List[Finding] = []
        try:
            for rule in self.rules:
                check_cancelled(cancel_token)
                findings.extend(await rule.check_async(url))
        except OperationCancelled:
            return self._failure(url, checked_at, "Check was cancelled")
        except Exception as e:
            return self._failure(url, checked_at, f"Error during safety check: {e}")

        return self._success(url, checked_at, findings)

    def _success(self, url: str, checked_at: datetime, findings: List[Finding]) -> EvaluationResult:
        total = scoring.score(findings)
        result = EvaluationResult(
            url=url,
            findings=tuple(findings),
            score=total,
            status=scoring.status(findings, total),
            succeeded=True,
            checked_at=checked_at,
        )
        log.debug(f"[Engine] {url}: {result.status.value} ({total}) with {len(findings)} findings")
        return result

    def _failure(self, url: Optional[str], checked_at: datetime, reason: str) -> EvaluationResult:
        # Partial findings are dropped: a failed check reports nothing
        log.warning(f"[Engine] {url or '<empty>'}: {reason}")
        return EvaluationResult(
            url=url or "",
            status=SafetyStatus.UNKNOWN,
            succeeded=False,
            error_reason=reason,
            checked_at=checked_at,
        )
