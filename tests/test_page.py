# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for yt_info.services.page."""

import httpx
import pytest

from yt_info.services.metadata import UNKNOWN_TITLE
from yt_info.services.page import (
    HttpxPageFetcher,
    PageFetchError,
    build_page_draft,
    extract_title,
    watch_url,
)


class TestExtractTitle:
    def test_strips_suffix(self):
        assert extract_title("<html><title>Fallback Title - YouTube</title></html>") == "Fallback Title"

    def test_without_suffix(self):
        assert extract_title("<title>Plain</title>") == "Plain"

    def test_unescapes_entities(self):
        assert extract_title("<title>Tom &amp; Jerry - YouTube</title>") == "Tom & Jerry"

    def test_only_trailing_suffix_removed(self):
        markup = "<title>Why - YouTube - Matters - YouTube</title>"
        assert extract_title(markup) == "Why - YouTube - Matters"

    def test_missing_title(self):
        assert extract_title("<html><body>nothing</body></html>") is None

    def test_suffix_only(self):
        assert extract_title("<title> - YouTube</title>") is None


class TestBuildPageDraft:
    def test_with_title(self):
        d = build_page_draft("dQw4w9WgXcQ", "<title>Fallback Title - YouTube</title>")
        assert d.title == "Fallback Title"
        assert not d.is_missing("title")
        assert d.access_status == "unknown"
        assert d.thumbnails.default == "https://img.youtube.com/vi/dQw4w9WgXcQ/default.jpg"
        assert d.thumbnails.medium == "https://img.youtube.com/vi/dQw4w9WgXcQ/mqdefault.jpg"
        assert d.thumbnails.high == "https://img.youtube.com/vi/dQw4w9WgXcQ/hqdefault.jpg"
        assert d.placeholders == {"description", "duration", "channel_title", "published_at"}

    def test_without_title(self):
        d = build_page_draft("dQw4w9WgXcQ", "<html></html>")
        assert d.title == UNKNOWN_TITLE
        assert d.is_missing("title")


class TestHttpxPageFetcher:
    def test_success_sends_user_agent(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["ua"] = request.headers.get("User-Agent")
            return httpx.Response(200, text="<title>Hi - YouTube</title>")

        fetcher = HttpxPageFetcher(transport=httpx.MockTransport(handler))
        body = fetcher.get(watch_url("dQw4w9WgXcQ"), user_agent="TestAgent/1.0", timeout=10.0)

        assert body == "<title>Hi - YouTube</title>"
        assert seen["url"] == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
        assert seen["ua"] == "TestAgent/1.0"

    def test_http_status_error(self):
        fetcher = HttpxPageFetcher(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
        with pytest.raises(PageFetchError, match="Failed to fetch"):
            fetcher.get(watch_url("dQw4w9WgXcQ"), user_agent="ua", timeout=10.0)

    def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher = HttpxPageFetcher(transport=httpx.MockTransport(handler))
        with pytest.raises(PageFetchError, match="timed out"):
            fetcher.get(watch_url("dQw4w9WgXcQ"), user_agent="ua", timeout=0.1)

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no route", request=request)

        fetcher = HttpxPageFetcher(transport=httpx.MockTransport(handler))
        with pytest.raises(PageFetchError):
            fetcher.get(watch_url("dQw4w9WgXcQ"), user_agent="ua", timeout=10.0)
