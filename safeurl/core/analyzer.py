"""
Analyzer - Resolves a URL, then evaluates where it lands.
Combines both phases into one AnalysisResult.
"""
from typing import Optional, Tuple

from safeurl.core.cancellation import CancellationToken
from safeurl.core.logger import log
from safeurl.core.models import AnalysisResult, EvaluationResult, ResolutionResult
from safeurl.modules.engine import RuleEngine
from safeurl.modules.resolver import RedirectResolver
from safeurl.modules.rules import SafetyRule


class Analyzer:
    """
    Entry point for complete URL analysis.
    Resolution runs first; evaluation always runs afterwards, on the final
    URL when resolution succeeded and on the untouched input otherwise.
    """

    def __init__(self, resolver: Optional[RedirectResolver] = None, engine: Optional[RuleEngine] = None):
        self.resolver = resolver or RedirectResolver()
        self.engine = engine or RuleEngine()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Releases the resolver's network resources."""
        self.resolver.close()

    def analyze(self, url: str, cancel_token: Optional[CancellationToken] = None) -> AnalysisResult:
        """Resolves url and evaluates the resulting destination."""
        log.info(f"[Analyzer] Analyzing: {url}")
        resolution = self.resolver.resolve(url, cancel_token)
        evaluation = self.engine.evaluate(self._url_to_check(url, resolution), cancel_token)
        return self._combine(resolution, evaluation)

    async def analyze_async(self, url: str, cancel_token: Optional[CancellationToken] = None) -> AnalysisResult:
        """Asynchronous variant of analyze()."""
        log.info(f"[Analyzer] Analyzing: {url}")
        resolution = await self.resolver.resolve_async(url, cancel_token)
        evaluation = await self.engine.evaluate_async(self._url_to_check(url, resolution), cancel_token)
        return self._combine(resolution, evaluation)

    # ==================== PASS-THROUGHS ====================

    def resolve(self, url: str, cancel_token: Optional[CancellationToken] = None) -> ResolutionResult:
        return self.resolver.resolve(url, cancel_token)

    def evaluate(self, url: str, cancel_token: Optional[CancellationToken] = None) -> EvaluationResult:
        return self.engine.evaluate(url, cancel_token)

    def add_rule(self, rule: SafetyRule):
        self.engine.add_rule(rule)

    def remove_rule(self, rule_id: str) -> bool:
        return self.engine.remove_rule(rule_id)

    @property
    def rules(self) -> Tuple[SafetyRule, ...]:
        return self.engine.rules

    # ==================== HELPERS ====================

    @staticmethod
    def _url_to_check(url: str, resolution: ResolutionResult) -> str:
        return resolution.final_url if resolution.succeeded else url

    @staticmethod
    def _combine(resolution: ResolutionResult, evaluation: EvaluationResult) -> AnalysisResult:
        result = AnalysisResult(resolution=resolution, evaluation=evaluation)
        log.info(
            f"[Analyzer] {resolution.original_url} -> {result.final_url} "
            f"({resolution.redirect_count} hops): {evaluation.status.value}, score {evaluation.score}"
        )
        return result
