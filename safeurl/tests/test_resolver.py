"""
Unit Tests for the Redirect Resolver.
Tests chain recording, termination rules and failure handling.
"""
import asyncio
import os
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from safeurl.core.cancellation import CancellationToken
from safeurl.core.errors import TransportError, TransportTimeout
from safeurl.modules.resolver import RedirectResolver, REDIRECT_STATUS_CODES


class TestResolverChain:
    """Test suite for redirect following"""

    @pytest.mark.unit
    def test_no_redirect(self, fake_transport):
        resolver = RedirectResolver(transport=fake_transport)

        result = resolver.resolve("https://example.com")

        assert result.succeeded is True
        assert result.error_reason is None
        assert result.final_url == "https://example.com"
        assert result.original_url == "https://example.com"
        assert [(h.url, h.status_code, h.step) for h in result.chain] == [("https://example.com", 200, 0)]
        assert result.redirect_count == 1
        assert fake_transport.requests == [("HEAD", "https://example.com", False)]

    @pytest.mark.unit
    def test_follows_redirect_chain(self, make_transport):
        transport = make_transport({
            "https://bit.ly/abc": (301, "https://tracker.example/r?id=1"),
            "https://tracker.example/r?id=1": (302, "https://dest.example/page"),
        })
        resolver = RedirectResolver(transport=transport)

        result = resolver.resolve("https://bit.ly/abc")

        assert result.succeeded is True
        assert result.final_url == "https://dest.example/page"
        assert [(h.url, h.status_code) for h in result.chain] == [
            ("https://bit.ly/abc", 301),
            ("https://tracker.example/r?id=1", 302),
            ("https://dest.example/page", 200),
        ]
        assert [h.step for h in result.chain] == [0, 1, 2]

    @pytest.mark.unit
    def test_relative_location(self, make_transport):
        transport = make_transport({
            "https://example.com/a/b": (307, "../c?x=1"),
            "https://example.com/c?x=1": (308, "/final"),
        })
        resolver = RedirectResolver(transport=transport)

        result = resolver.resolve("https://example.com/a/b")

        assert result.final_url == "https://example.com/final"
        assert result.redirect_count == 3

    @pytest.mark.unit
    @pytest.mark.parametrize("status", sorted(REDIRECT_STATUS_CODES))
    def test_every_redirect_status_followed(self, make_transport, status):
        transport = make_transport({"https://a.example": (status, "https://b.example")})
        result = RedirectResolver(transport=transport).resolve("https://a.example")
        assert result.final_url == "https://b.example"

    @pytest.mark.unit
    @pytest.mark.parametrize("status", [200, 204, 300, 304, 404, 500])
    def test_non_redirect_status_stops(self, make_transport, status):
        transport = make_transport({"https://a.example": (status, "https://b.example")})

        result = RedirectResolver(transport=transport).resolve("https://a.example")

        assert result.succeeded is True
        assert result.final_url == "https://a.example"
        assert result.redirect_count == 1

    @pytest.mark.unit
    def test_redirect_without_location_stops(self, make_transport):
        transport = make_transport({"https://a.example": (302, None)})

        result = RedirectResolver(transport=transport).resolve("https://a.example")

        assert result.succeeded is True
        assert result.final_url == "https://a.example"
        assert [(h.status_code, h.step) for h in result.chain] == [(302, 0)]

    # ==================== LIMITS ====================

    @pytest.mark.unit
    def test_redirect_loop_stops_at_cap(self, make_transport):
        """Loops are not detected; they consume hops until max_redirects."""
        transport = make_transport({
            "https://a.example": (302, "https://b.example"),
            "https://b.example": (302, "https://a.example"),
        })
        resolver = RedirectResolver(transport=transport, max_redirects=5)

        result = resolver.resolve("https://a.example")

        assert result.succeeded is True
        assert result.error_reason is None
        assert result.redirect_count == 5
        assert len(transport.requests) == 5
        assert result.final_url == "https://b.example"

    @pytest.mark.unit
    def test_never_exceeds_max_redirects(self, make_transport):
        routes = {f"https://h{i}.example": (301, f"https://h{i + 1}.example") for i in range(30)}
        transport = make_transport(routes)

        for limit in (1, 3, 10):
            result = RedirectResolver(transport=transport, max_redirects=limit).resolve("https://h0.example")
            assert result.redirect_count == limit
            assert result.final_url == f"https://h{limit}.example"

    @pytest.mark.unit
    def test_zero_max_redirects_sends_nothing(self, fake_transport):
        result = RedirectResolver(transport=fake_transport, max_redirects=0).resolve("https://a.example")

        assert result.succeeded is True
        assert result.chain == ()
        assert result.final_url == "https://a.example"
        assert fake_transport.requests == []

    @pytest.mark.unit
    def test_negative_max_redirects_rejected(self, fake_transport):
        with pytest.raises(ValueError):
            RedirectResolver(transport=fake_transport, max_redirects=-1)

    @pytest.mark.unit
    def test_scripted_google_chain_within_limit(self, make_transport):
        """Offline counterpart of test_live_resolution."""
        transport = make_transport({
            "https://google.com": (301, "https://www.google.com/"),
            "https://www.google.com/": (302, "https://www.google.com/?hl=en"),
        })
        resolver = RedirectResolver(transport=transport, max_redirects=10)

        result = resolver.resolve("https://google.com")

        assert result.succeeded is True
        assert 0 < result.redirect_count <= 10
        assert result.final_url == "https://www.google.com/?hl=en"
        assert result.chain[-1].url == result.final_url
        assert result.chain[-1].status_code == 200

    @pytest.mark.unit
    def test_defaults_from_settings(self, fake_transport):
        resolver = RedirectResolver(transport=fake_transport)
        assert resolver.max_redirects == 10
        assert resolver.timeout_ms == 10000
        assert resolver.user_agent == "SafeUrl/1.0 (URL Safety Checker)"


class TestResolverFailures:
    """Test suite for failure handling"""

    @pytest.mark.unit
    @pytest.mark.parametrize("url,expected", [(None, ""), ("", ""), ("   ", "   ")])
    def test_blank_url(self, fake_transport, url, expected):
        result = RedirectResolver(transport=fake_transport).resolve(url)

        assert result.succeeded is False
        assert result.error_reason == "URL cannot be null or empty"
        assert result.original_url == expected
        assert result.final_url == expected
        assert fake_transport.requests == []

    @pytest.mark.unit
    def test_timeout(self, make_transport):
        transport = make_transport({"https://slow.example": TransportTimeout("read timed out")})

        result = RedirectResolver(transport=transport).resolve("https://slow.example")

        assert result.succeeded is False
        assert result.error_reason == "Request timed out"
        assert result.final_url == "https://slow.example"
        assert result.chain == ()

    @pytest.mark.unit
    def test_transport_error_keeps_partial_chain(self, make_transport):
        transport = make_transport({
            "https://short.example/x": (301, "https://down.example"),
            "https://down.example": TransportError("Connection refused"),
        })

        result = RedirectResolver(transport=transport).resolve("https://short.example/x")

        assert result.succeeded is False
        assert result.error_reason == "HTTP error: Connection refused"
        assert result.final_url == "https://down.example"
        assert [(h.url, h.status_code) for h in result.chain] == [("https://short.example/x", 301)]

    @pytest.mark.unit
    def test_unexpected_error(self, make_transport):
        transport = make_transport({"https://a.example": KeyError("weird")})

        result = RedirectResolver(transport=transport).resolve("https://a.example")

        assert result.succeeded is False
        assert result.error_reason.startswith("Unexpected error:")

    @pytest.mark.unit
    def test_no_retries(self, failing_transport):
        RedirectResolver(transport=failing_transport).resolve("https://down.example.com")
        assert len(failing_transport.requests) == 1

    @pytest.mark.unit
    def test_cancelled_before_first_hop(self, fake_transport):
        token = CancellationToken()
        token.cancel()

        result = RedirectResolver(transport=fake_transport).resolve("https://a.example", token)

        assert result.succeeded is False
        assert result.error_reason == "Resolution was cancelled"
        assert fake_transport.requests == []

    @pytest.mark.unit
    def test_cancelled_between_hops(self, make_transport):
        token = CancellationToken()
        transport = make_transport({"https://a.example": (301, "https://b.example")})
        original_send = transport.send

        def send_then_cancel(*args, **kwargs):
            response = original_send(*args, **kwargs)
            token.cancel()
            return response

        transport.send = send_then_cancel

        result = RedirectResolver(transport=transport).resolve("https://a.example", token)

        assert result.error_reason == "Resolution was cancelled"
        assert result.final_url == "https://b.example"
        assert result.redirect_count == 1

    @pytest.mark.unit
    def test_elapsed_time_recorded(self, fake_transport):
        result = RedirectResolver(transport=fake_transport).resolve("https://a.example")
        assert result.elapsed_ms >= 0

    @pytest.mark.unit
    def test_close_closes_transport(self, fake_transport):
        RedirectResolver(transport=fake_transport).close()
        assert fake_transport.closed is True

    @pytest.mark.unit
    def test_resolve_async(self, make_transport):
        transport = make_transport({"https://a.example": (302, "https://b.example")})

        result = asyncio.run(RedirectResolver(transport=transport).resolve_async("https://a.example"))

        assert result.final_url == "https://b.example"
        assert result.redirect_count == 2


@pytest.mark.integration
@pytest.mark.skipif(not os.environ.get("SAFEURL_NETWORK_TESTS"), reason="set SAFEURL_NETWORK_TESTS=1 to hit the network")
def test_live_resolution():
    resolver = RedirectResolver(max_redirects=10)
    try:
        result = resolver.resolve("https://www.google.com")
    finally:
        resolver.close()

    assert result.succeeded is True
    assert 0 < result.redirect_count <= 10
