# Core Package
from .logger import log, console
from .models import (
    Severity,
    SafetyStatus,
    RedirectHop,
    ResolutionResult,
    Finding,
    EvaluationResult,
    AnalysisResult,
)
from .errors import (
    SafeUrlError,
    InputError,
    TransportError,
    TransportTimeout,
    OperationCancelled,
    DuplicateRuleError,
)
from .cancellation import CancellationToken
# Note: Analyzer is imported from safeurl.core.analyzer to avoid circular imports
