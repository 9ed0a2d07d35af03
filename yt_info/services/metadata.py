# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Metadata retrieval via the YouTube Data API v3."""

from __future__ import annotations

import logging
from typing import Protocol

from yt_info.core.models import AccessStatus, Thumbnails, VideoDraft
from yt_info.utils.time_fmt import format_iso8601_duration

logger = logging.getLogger("yt_info")

API_PARTS = "snippet,statistics,contentDetails,status"

UNKNOWN_TITLE = "Unknown Title"
NO_DESCRIPTION = "No description available"
UNKNOWN_DURATION = "Unknown duration"
UNKNOWN_CHANNEL = "Unknown Channel"
UNKNOWN_PUBLISHED = "Unknown"


class MetadataError(Exception):
    """Raised when metadata retrieval fails."""


class MetadataProvider(Protocol):
    def fetch(self, video_id: str) -> dict:
        """Return the raw API item for ``video_id``; raise MetadataError otherwise."""


class YouTubeApiMetadataProvider:
    """Fetches video items from the YouTube Data API v3.

    Requires the optional `google-api-python-client` package.
    """

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def fetch(self, video_id: str) -> dict:
        try:
            from googleapiclient.discovery import build
            from googleapiclient.errors import HttpError
        except ImportError as exc:
            raise MetadataError(
                "google-api-python-client is required for the YouTube API provider. "
                "Install with: pip install yt-info[youtube-api]"
            ) from exc

        # httplib2 transports are not thread-safe, so each fetch builds its own service.
        try:
            service = build("youtube", "v3", developerKey=self.api_key)
            request = service.videos().list(part=API_PARTS, id=video_id)
            response = request.execute()
        except HttpError as exc:
            raise MetadataError(
                f"YouTube API request failed for {video_id}: {exc}"
            ) from exc
        except Exception as exc:
            raise MetadataError(
                f"YouTube API error for {video_id}: {exc}"
            ) from exc

        items = response.get("items") or []
        if not items:
            raise MetadataError(
                f"Video not found via YouTube API (or private/restricted): {video_id}"
            )
        return items[0]


def map_metadata_item(item: dict) -> VideoDraft:
    """Map a YouTube Data API v3 video item to a partial record.

    Fields the API leaves empty get stage-local placeholder values, which are
    listed in the draft's ``placeholders`` so later sources may replace them.
    Counts are only set when the API reports them.
    """
    snippet = item.get("snippet") or {}
    statistics = item.get("statistics") or {}
    content_details = item.get("contentDetails") or {}
    thumbnails = snippet.get("thumbnails") or {}

    placeholders: set[str] = set()

    def _or_placeholder(field: str, value: str | None, placeholder: str) -> str:
        if value:
            return value
        placeholders.add(field)
        return placeholder

    return VideoDraft(
        title=_or_placeholder("title", snippet.get("title"), UNKNOWN_TITLE),
        description=_or_placeholder("description", snippet.get("description"), NO_DESCRIPTION),
        duration=_or_placeholder(
            "duration",
            format_iso8601_duration(content_details.get("duration")),
            UNKNOWN_DURATION,
        ),
        channel_title=_or_placeholder("channel_title", snippet.get("channelTitle"), UNKNOWN_CHANNEL),
        published_at=_or_placeholder("published_at", snippet.get("publishedAt"), UNKNOWN_PUBLISHED),
        view_count=_to_int(statistics.get("viewCount")),
        like_count=_to_int(statistics.get("likeCount")),
        thumbnails=Thumbnails(
            default=(thumbnails.get("default") or {}).get("url"),
            medium=(thumbnails.get("medium") or {}).get("url"),
            high=(thumbnails.get("high") or {}).get("url"),
        ),
        access_status=classify_access(item.get("status") or {}),
        placeholders=placeholders,
    )


def classify_access(status: dict) -> AccessStatus:
    """Derive the access classification from an API ``status`` part."""
    privacy = status.get("privacyStatus")
    if privacy == "private":
        return "private"
    if privacy == "unlisted":
        return "unlisted"
    if status.get("uploadStatus") != "processed":
        return "restricted"
    return "public"


def _to_int(value: str | int | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric count %r", value)
        return None
