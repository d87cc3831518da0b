"""Tests for django_schedule.feed.client.FeedClient."""

import httpx
import pytest

from django_schedule.feed.client import FeedClient
from django_schedule.feed.errors import FeedFetchError, FeedSyncError

FEED_URL = "https://feeds.example.com/sessions"


def _make_client(handler):
    return FeedClient(timeout=5, transport=httpx.MockTransport(handler))


def test_fetch_returns_body():
    def handler(request):
        assert request.headers["Accept"].startswith("application/atom+xml")
        return httpx.Response(200, content=b"<feed/>")

    assert _make_client(handler).fetch(FEED_URL) == b"<feed/>"


def test_fetch_follows_redirects():
    def handler(request):
        if request.url.path == "/sessions":
            return httpx.Response(302, headers={"Location": "https://feeds.example.com/moved"})
        return httpx.Response(200, content=b"<feed>moved</feed>")

    assert _make_client(handler).fetch(FEED_URL) == b"<feed>moved</feed>"


def test_fetch_raises_on_http_error():
    client = _make_client(lambda request: httpx.Response(404))

    with pytest.raises(FeedFetchError, match="404"):
        client.fetch(FEED_URL)


def test_fetch_raises_on_connection_error():
    def handler(request):
        msg = "connection refused"
        raise httpx.ConnectError(msg, request=request)

    with pytest.raises(FeedFetchError, match="connection error"):
        _make_client(handler).fetch(FEED_URL)


def test_fetch_without_url_raises():
    with pytest.raises(FeedSyncError, match="No feed URL configured"):
        FeedClient().fetch("")
