import threading
from typing import Optional

from safeurl.core.errors import OperationCancelled


class CancellationToken:
    """
    Cooperative cancellation signal.
    Checked before every redirect hop and before every rule.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        """Requests cancellation. Safe to call from any thread."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise OperationCancelled("Operation was cancelled")


def check_cancelled(token: Optional[CancellationToken]):
    """Raises OperationCancelled if a token is given and has been cancelled."""
    if token is not None:
        token.raise_if_cancelled()
