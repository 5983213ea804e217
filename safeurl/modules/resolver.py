"""
Resolver Module - Follows HTTP redirects to a URL's final destination.
Bounded, strictly sequential loop: hop N+1 depends on hop N's response.
"""
import asyncio
import time
from typing import List, Optional
from urllib.parse import urljoin

from safeurl.config.settings import settings
from safeurl.core.cancellation import CancellationToken, check_cancelled
from safeurl.core.errors import OperationCancelled, TransportError, TransportTimeout
from safeurl.core.logger import log
from safeurl.core.models import RedirectHop, ResolutionResult
from safeurl.modules.transport import RedirectTransport, RequestsTransport


# 301 Moved Permanently, 302 Found, 303 See Other, 307 Temporary, 308 Permanent
REDIRECT_STATUS_CODES = frozenset({301, 302, 303, 307, 308})


class RedirectResolver:
    """
    Expands a URL by issuing HEAD requests without auto-follow.
    Stops on a non-redirect status, a redirect without Location,
    or after max_redirects requests. Redirect loops are not detected;
    they simply run into the cap.
    """

    def __init__(self, transport: Optional[RedirectTransport] = None,
                 max_redirects: Optional[int] = None,
                 timeout_ms: Optional[int] = None,
                 user_agent: Optional[str] = None):
        self.max_redirects = max_redirects if max_redirects is not None else settings.MAX_REDIRECTS
        if self.max_redirects < 0:
            raise ValueError("max_redirects must be >= 0")
        self.timeout_ms = timeout_ms if timeout_ms is not None else settings.REQUEST_TIMEOUT_MS
        self.user_agent = user_agent or settings.USER_AGENT
        self.transport = transport or RequestsTransport(self.timeout_ms, self.user_agent)

    def resolve(self, url: str, cancel_token: Optional[CancellationToken] = None) -> ResolutionResult:
        """Follows redirects for url and returns the chain traversed."""
        if not url or not url.strip():
            return ResolutionResult(
                original_url=url or "",
                final_url=url or "",
                succeeded=False,
                error_reason="URL cannot be null or empty",
            )

        start = time.perf_counter()
        chain: List[RedirectHop] = []
        current_url = url
        succeeded = False
        error_reason = None

        try:
            hop_count = 0
            while hop_count < self.max_redirects:
                check_cancelled(cancel_token)

                response = self.transport.send(current_url, method="HEAD", follow_redirects=False)
                chain.append(RedirectHop(url=current_url, status_code=response.status_code, step=hop_count))
                log.debug(f"[Resolver] Hop {hop_count}: {response.status_code} {current_url}")

                if response.status_code in REDIRECT_STATUS_CODES and response.location:
                    current_url = urljoin(current_url, response.location)
                    hop_count += 1
                else:
                    break

            succeeded = True

        except TransportTimeout:
            error_reason = "Request timed out"
        except TransportError as e:
            error_reason = f"HTTP error: {e}"
        except OperationCancelled:
            error_reason = "Resolution was cancelled"
        except Exception as e:
            error_reason = f"Unexpected error: {e}"

        if error_reason:
            log.warning(f"[Resolver] {url}: {error_reason}")

        return ResolutionResult(
            original_url=url,
            final_url=current_url,
            chain=tuple(chain),
            succeeded=succeeded,
            error_reason=error_reason,
            elapsed_ms=(time.perf_counter() - start) * 1000,
        )

    async def resolve_async(self, url: str, cancel_token: Optional[CancellationToken] = None) -> ResolutionResult:
        """Same as resolve(), run in a worker thread so the event loop is not blocked."""
        return await asyncio.to_thread(self.resolve, url, cancel_token)

    def close(self):
        self.transport.close()
