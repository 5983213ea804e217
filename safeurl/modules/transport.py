"""
Transport Module - Issues single, non-following HTTP requests.
The resolver drives this one hop at a time.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import requests

from safeurl.config.settings import settings
from safeurl.core.errors import TransportError, TransportTimeout


@dataclass
class TransportResponse:
    """Status code and optional redirect target of one response."""
    status_code: int
    location: Optional[str] = None


class RedirectTransport(ABC):
    """Capability to send one request without following redirects."""

    @abstractmethod
    def send(self, url: str, method: str = "HEAD", follow_redirects: bool = False) -> TransportResponse:
        """
        Sends a single request.
        Raises TransportTimeout on timeout and TransportError on any other network failure.
        """

    def close(self):
        """Releases any held connections."""


class RequestsTransport(RedirectTransport):
    """
    requests-backed transport.
    Timeout is applied per request, never across hops.
    """

    def __init__(self, timeout_ms: Optional[int] = None, user_agent: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        self.timeout_ms = timeout_ms if timeout_ms is not None else settings.REQUEST_TIMEOUT_MS
        self.user_agent = user_agent or settings.USER_AGENT
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = self.user_agent

    def send(self, url: str, method: str = "HEAD", follow_redirects: bool = False) -> TransportResponse:
        try:
            with self.session.request(
                method,
                url,
                allow_redirects=follow_redirects,
                timeout=self.timeout_ms / 1000,
            ) as response:
                return TransportResponse(
                    status_code=response.status_code,
                    location=response.headers.get("Location"),
                )
        except requests.Timeout as e:
            raise TransportTimeout(str(e)) from e
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

    def close(self):
        if self._owns_session:
            self.session.close()
