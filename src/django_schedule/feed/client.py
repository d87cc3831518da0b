"""HTTP transport for remote schedule feeds.

:class:`FeedClient` downloads one feed document per call.  It does not retry:
a failed download fails the whole sync pass, and retry policy belongs to
whatever schedules the sync.
"""

import logging

import httpx

from django_schedule.feed.errors import FeedFetchError

logger = logging.getLogger(__name__)


class FeedClient:
    """Download spreadsheet feed documents over HTTP.

    Args:
        timeout: Seconds to wait for the server before giving up.
        transport: Optional httpx transport, mainly for tests.

    Example::

        client = FeedClient(timeout=10)
        document = client.fetch("https://spreadsheets.example.com/feeds/list/abc/od6/public/values")
    """

    def __init__(self, *, timeout: float = 30.0, transport: httpx.BaseTransport | None = None) -> None:
        self.timeout = timeout
        self.transport = transport
        self.headers: dict[str, str] = {"Accept": "application/atom+xml, application/xml;q=0.9"}

    def fetch(self, url: str) -> bytes:
        """Return the raw body of the feed at *url*.

        Raises:
            FeedFetchError: If *url* is empty, the server answers with an HTTP
                error status, or the connection fails.
        """
        if not url:
            msg = "No feed URL configured"
            raise FeedFetchError(msg)

        logger.debug("Fetching feed %s", url)
        with httpx.Client(timeout=self.timeout, headers=self.headers, transport=self.transport) as client:
            try:
                response = client.get(url, follow_redirects=True)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                msg = f"Feed request failed: {exc.response.status_code} for URL {exc.request.url}"
                raise FeedFetchError(msg) from exc
            except httpx.RequestError as exc:
                msg = f"Feed connection error for URL {url}: {exc}"
                raise FeedFetchError(msg) from exc

        logger.debug("Fetched %d bytes from %s", len(response.content), url)
        return response.content
