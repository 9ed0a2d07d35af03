# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Agent-facing response payloads built from extraction results."""

from __future__ import annotations

from yt_info.core.models import ExtractionResult, VideoRecord

AUTO_DETECTED = "auto-detected"

TROUBLESHOOTING_SUGGESTIONS = [
    "Verify the video URL or ID is correct",
    "Check if the video is public and accessible",
    "Try with a different video to test connectivity",
    "Ensure a YouTube Data API key is configured if needed",
]


def join_transcript(record: VideoRecord) -> str:
    """Join caption segment texts into a single space-separated transcript."""
    return " ".join(segment.text for segment in record.captions)


def format_response(result: ExtractionResult, language: str | None = None) -> dict:
    """Project an ExtractionResult into the nested payload returned to agents."""
    if not result.success or result.record is None:
        return format_error(result)

    record = result.record
    transcript = join_transcript(record) if record.captions_available else ""

    return {
        "success": True,
        "basic": {
            "id": record.id,
            "title": record.title,
            "channel": record.channel_title,
            "duration": record.duration,
            "published_at": record.published_at,
            "url": record.url,
        },
        "statistics": {
            "view_count": record.view_count,
            "like_count": record.like_count,
        },
        "access": {
            "status": record.access_status,
            "is_public": record.access_status == "public",
        },
        "content": {
            "description": record.description,
            "captions": {
                "available": record.captions_available,
                "count": len(record.captions),
                "transcript": transcript,
                "language": language or AUTO_DETECTED,
            },
        },
        "technical": {
            "extraction_methods": list(result.attempts),
            "thumbnails": record.thumbnails.model_dump(),
        },
        "analysis": {
            "can_summarize": record.captions_available and len(transcript) > 0,
            "content_length": len(transcript),
            "description_length": len(record.description),
            "recommended_approach": (
                "Full content analysis using transcript"
                if record.captions_available
                else "Metadata and description-based analysis only"
            ),
        },
    }


def format_error(result: ExtractionResult) -> dict:
    return {
        "success": False,
        "error": result.error or "Unknown error",
        "attempted_methods": list(result.attempts),
        "troubleshooting": {"suggestions": list(TROUBLESHOOTING_SUGGESTIONS)},
    }
