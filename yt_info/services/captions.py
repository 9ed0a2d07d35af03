# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Caption fetching via youtube-transcript-api."""

from __future__ import annotations

import logging
from typing import Protocol

from youtube_transcript_api import TranscriptsDisabled
from youtube_transcript_api import YouTubeTranscriptApi

from yt_info.core.models import CaptionSegment, RawCaptions

logger = logging.getLogger("yt_info")


class CaptionError(Exception):
    """Raised when caption retrieval fails."""


class CaptionProvider(Protocol):
    def fetch(self, video_id: str, language: str | None = None) -> RawCaptions:
        """Return caption segments for ``video_id``; raise CaptionError otherwise."""


class TranscriptApiCaptionProvider:
    """Caption provider backed by youtube-transcript-api.

    The transcript endpoints carry no title or description, so those fields of
    the returned RawCaptions are always None. A video with captions disabled,
    or with no track at all, yields an empty segment list rather than an error.
    """

    def __init__(self, api: YouTubeTranscriptApi | None = None) -> None:
        self._api = api or YouTubeTranscriptApi()

    def fetch(self, video_id: str, language: str | None = None) -> RawCaptions:
        try:
            transcript_list = self._api.list(video_id)
        except TranscriptsDisabled:
            logger.debug("Captions are disabled for %s", video_id)
            return RawCaptions()
        except Exception as exc:
            raise CaptionError(
                f"Failed to list captions for {video_id}: {exc}"
            ) from exc

        selected = select_track(list(transcript_list), language)
        if selected is None:
            return RawCaptions()

        try:
            fetched = selected.fetch()
        except Exception as exc:
            raise CaptionError(
                f"Failed to fetch captions for {video_id}: {exc}"
            ) from exc

        return RawCaptions(
            language=selected.language_code,
            segments=[
                CaptionSegment(text=snippet.text, start=snippet.start, duration=snippet.duration)
                for snippet in fetched
            ],
        )


def select_track(available: list, language: str | None) -> object | None:
    """Pick the caption track to fetch.

    Priority:
    1. Manual track in the requested language.
    2. Generated track in the requested language.
    3. Any manual track.
    4. Any generated track.
    5. None.
    """
    if language:
        wanted = language.lower()
        preferred = _manual_first([t for t in available if t.language_code.lower() == wanted])
        if preferred:
            return preferred[0]

    ordered = _manual_first(available)
    return ordered[0] if ordered else None


def _manual_first(tracks: list) -> list:
    return [t for t in tracks if not t.is_generated] + [t for t in tracks if t.is_generated]
