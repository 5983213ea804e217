"""
Shared fixtures: an in-memory transport so no test touches the network.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from safeurl.core.errors import TransportError
from safeurl.modules.transport import RedirectTransport, TransportResponse


class FakeTransport(RedirectTransport):
    """
    Replays scripted responses keyed by URL.
    A value may be a (status, location) tuple or an exception to raise.
    Unknown URLs answer 200.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests = []
        self.closed = False

    def send(self, url, method="HEAD", follow_redirects=False):
        self.requests.append((method, url, follow_redirects))
        route = self.routes.get(url, (200, None))
        if isinstance(route, Exception):
            raise route
        status_code, location = route
        return TransportResponse(status_code=status_code, location=location)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def make_transport():
    """Factory for a FakeTransport with scripted routes."""
    return FakeTransport


@pytest.fixture
def failing_transport():
    return FakeTransport({"https://down.example.com": TransportError("Connection refused")})
