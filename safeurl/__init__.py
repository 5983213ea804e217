"""
SafeUrl - URL Expander & Safety Checker.
Follows redirects to a URL's final destination and scores it against pluggable safety rules.
"""
from safeurl.core.analyzer import Analyzer
from safeurl.core.cancellation import CancellationToken
from safeurl.core.errors import DuplicateRuleError
from safeurl.core.models import (
    AnalysisResult,
    EvaluationResult,
    Finding,
    RedirectHop,
    ResolutionResult,
    SafetyStatus,
    Severity,
)
from safeurl.modules.engine import RuleEngine
from safeurl.modules.resolver import RedirectResolver
from safeurl.modules.rules import SafetyRule

__version__ = "1.0.0"
