"""
Error Taxonomy.
Exceptions raised inside the analysis pipeline. Only DuplicateRuleError
escapes to callers; the rest are converted into failed result objects.
"""


class SafeUrlError(Exception):
    """Base class for all SafeUrl errors."""


class InputError(SafeUrlError):
    """
    Null, empty or whitespace-only URL.
    Names the taxonomy entry only: resolve and evaluate report blank input
    as a failed result with "URL cannot be null or empty" instead of raising.
    """


class TransportError(SafeUrlError):
    """Network-level failure while issuing a redirect hop request."""


class TransportTimeout(TransportError):
    """A redirect hop request exceeded its timeout."""


class OperationCancelled(SafeUrlError):
    """Cooperative cancellation was observed mid-flight."""


class DuplicateRuleError(SafeUrlError):
    """A rule with the same id is already registered."""

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Rule with ID '{rule_id}' already exists")
