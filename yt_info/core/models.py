# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pydantic data models for yt-info."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, computed_field

AccessStatus = Literal["public", "private", "unlisted", "restricted", "unknown"]

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


class CaptionSegment(BaseModel):
    text: str
    start: float | str
    duration: float | str


class Thumbnails(BaseModel):
    default: str | None = None
    medium: str | None = None
    high: str | None = None


class VideoDraft(BaseModel):
    """A partially filled video record.

    Used both as the record accumulated by the extraction pipeline and as the
    partial result a single stage contributes to it. ``placeholders`` names the
    fields whose current value is a stand-in rather than data reported by a
    provider; such values may be replaced by any later real value.
    """

    title: str | None = None
    description: str | None = None
    duration: str | None = None
    channel_title: str | None = None
    published_at: str | None = None
    view_count: int | None = None
    like_count: int | None = None
    thumbnails: Thumbnails | None = None
    access_status: AccessStatus | None = None
    captions: list[CaptionSegment] | None = None
    placeholders: set[str] = set()

    def is_missing(self, field: str) -> bool:
        """True if ``field`` is unset or only holds a placeholder."""
        return getattr(self, field) is None or field in self.placeholders


class RawCaptions(BaseModel):
    title: str | None = None
    description: str | None = None
    language: str | None = None
    segments: list[CaptionSegment] = []


class VideoRecord(BaseModel):
    id: str
    title: str
    description: str
    duration: str | None = None
    channel_title: str | None = None
    published_at: str | None = None
    view_count: int | None = None
    like_count: int | None = None
    thumbnails: Thumbnails = Thumbnails()
    access_status: AccessStatus = "unknown"
    captions: list[CaptionSegment] = []

    @computed_field
    @property
    def captions_available(self) -> bool:
        return len(self.captions) > 0

    @computed_field
    @property
    def url(self) -> str:
        return WATCH_URL.format(video_id=self.id)


class ExtractionResult(BaseModel):
    success: bool
    record: VideoRecord | None = None
    error: str | None = None
    attempts: list[str] = []
