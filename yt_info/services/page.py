# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Watch-page fetching and title scraping, used when no API data is available."""

from __future__ import annotations

import html
import logging
import re
from typing import Protocol

import httpx

from yt_info.core.models import Thumbnails, VideoDraft, WATCH_URL
from yt_info.services.metadata import UNKNOWN_CHANNEL, UNKNOWN_PUBLISHED, UNKNOWN_TITLE

logger = logging.getLogger("yt_info")

THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/{name}.jpg"

SCRAPED_DESCRIPTION = "Description not available (page fetch fallback)"
SCRAPED_DURATION = "Duration not available"

_TITLE_RE = re.compile(r"<title>([^<]+)</title>", re.IGNORECASE)
_TITLE_SUFFIX_RE = re.compile(r"\s*-\s*YouTube$")


class PageFetchError(Exception):
    """Raised when the watch page cannot be fetched."""


class PageFetcher(Protocol):
    def get(self, url: str, *, user_agent: str, timeout: float) -> str:
        """Return the response body for ``url``; raise PageFetchError otherwise."""


class HttpxPageFetcher:
    """Plain HTTP GET via httpx. One request per call, no retries."""

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    def get(self, url: str, *, user_agent: str, timeout: float) -> str:
        try:
            with httpx.Client(
                transport=self._transport,
                timeout=timeout,
                follow_redirects=True,
            ) as client:
                response = client.get(url, headers={"User-Agent": user_agent})
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise PageFetchError(f"Failed to fetch {url}: {exc}") from exc
        return response.text


def watch_url(video_id: str) -> str:
    return WATCH_URL.format(video_id=video_id)


def extract_title(markup: str) -> str | None:
    """Return the page <title> with the site suffix removed, or None."""
    match = _TITLE_RE.search(markup)
    if not match:
        return None
    title = html.unescape(match.group(1)).strip()
    title = _TITLE_SUFFIX_RE.sub("", title).strip()
    return title or None


def build_page_draft(video_id: str, markup: str) -> VideoDraft:
    """Build a partial record from a scraped watch page.

    Only the title (when found) and the thumbnail URLs are real data; the
    remaining fields are placeholders.
    """
    title = extract_title(markup)
    placeholders = {"description", "duration", "channel_title", "published_at"}
    if title is None:
        logger.debug("No <title> found on watch page for %s", video_id)
        placeholders.add("title")

    return VideoDraft(
        title=title or UNKNOWN_TITLE,
        description=SCRAPED_DESCRIPTION,
        duration=SCRAPED_DURATION,
        channel_title=UNKNOWN_CHANNEL,
        published_at=UNKNOWN_PUBLISHED,
        thumbnails=Thumbnails(
            default=THUMBNAIL_URL.format(video_id=video_id, name="default"),
            medium=THUMBNAIL_URL.format(video_id=video_id, name="mqdefault"),
            high=THUMBNAIL_URL.format(video_id=video_id, name="hqdefault"),
        ),
        access_status="unknown",
        placeholders=placeholders,
    )
