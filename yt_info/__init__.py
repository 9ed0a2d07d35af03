"""yt-info: YouTube video metadata and captions with multi-source fallback."""

__version__ = "0.1.0"

from yt_info.core.models import CaptionSegment, ExtractionResult, VideoRecord
from yt_info.core.options import ExtractOptions
from yt_info.services.id_parser import InvalidReference, resolve_video_id


def get_video_info(
    reference: str,
    language: str | None = None,
    options: ExtractOptions | None = None,
) -> dict:
    """Fetch everything known about a single video as an agent-ready payload.

    This is the primary library entry point; it never raises for degraded or
    failed extractions, the payload's ``success`` flag reports the outcome.

    Args:
        reference: YouTube video URL or ID.
        language: Preferred caption language code (e.g. 'en', 'es').
        options: Configuration options. Uses defaults (env, .env, YAML) if not provided.

    Returns:
        The structured response dict (see yt_info.core.response.format_response).
    """
    from yt_info.core.pipeline import extract_video_info
    from yt_info.core.response import format_response

    if options is None:
        options = ExtractOptions()

    language = language or options.language
    result = extract_video_info(reference, language, options=options)
    return format_response(result, language)


def get_video_info_batch(
    references: list[str],
    language: str | None = None,
    options: ExtractOptions | None = None,
) -> list[dict]:
    """Fetch payloads for several videos concurrently, in input order."""
    from yt_info.core.pipeline import extract_batch
    from yt_info.core.response import format_response

    if options is None:
        options = ExtractOptions()

    language = language or options.language
    results = extract_batch(references, language, options=options)
    return [format_response(result, language) for result in results]


__all__ = [
    "__version__",
    "get_video_info",
    "get_video_info_batch",
    "resolve_video_id",
    "ExtractOptions",
    "ExtractionResult",
    "VideoRecord",
    "CaptionSegment",
    "InvalidReference",
]
