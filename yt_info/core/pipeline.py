# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Per-video extraction pipeline with ordered fallback sources."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Literal

from yt_info.core.logging import log_event
from yt_info.core.models import ExtractionResult, Thumbnails, VideoDraft, VideoRecord
from yt_info.core.options import DEFAULT_USER_AGENT, ExtractOptions
from yt_info.services.captions import CaptionProvider, TranscriptApiCaptionProvider
from yt_info.services.id_parser import InvalidReference, resolve_video_id
from yt_info.services.metadata import (
    NO_DESCRIPTION,
    MetadataProvider,
    YouTubeApiMetadataProvider,
    map_metadata_item,
)
from yt_info.services.page import HttpxPageFetcher, PageFetcher, build_page_draft, watch_url
from yt_info.utils.languages import is_valid_language_code

logger = logging.getLogger("yt_info")

METADATA_LABEL = "metadata-provider"
CAPTIONS_LABEL = "caption-provider"
PAGE_LABEL = "page-fetch"

FALLBACK_TITLE = "Video {video_id}"

_MERGE_FIELDS = tuple(name for name in VideoDraft.model_fields if name != "placeholders")


@dataclass
class ExtractionContext:
    """Providers and settings shared by the stages of one or more extractions.

    ``metadata_provider`` is None when no API key is configured; the metadata
    stage is then skipped rather than attempted.
    """

    caption_provider: CaptionProvider
    page_fetcher: PageFetcher
    metadata_provider: MetadataProvider | None = None
    language: str | None = None
    user_agent: str = DEFAULT_USER_AGENT
    page_timeout: float = 10.0


@dataclass(frozen=True)
class StageOutcome:
    """What a single stage did: its status, and the partial record it produced."""

    status: Literal["ok", "skipped", "failed"]
    label: str
    partial: VideoDraft | None = None
    reason: str | None = None
    overrides: tuple[str, ...] = ()

    @property
    def attempt(self) -> str:
        if self.status == "ok":
            return self.label
        if self.status == "skipped":
            return f"{self.label} ({self.reason})"
        return f"{self.label} (failed)"


Stage = Callable[[VideoDraft, str, "str | None", ExtractionContext], "StageOutcome | None"]


def build_context(options: ExtractOptions) -> ExtractionContext:
    """Create the default providers for ``options``."""
    metadata_provider = None
    if options.api_key:
        metadata_provider = YouTubeApiMetadataProvider(options.api_key)

    return ExtractionContext(
        caption_provider=TranscriptApiCaptionProvider(),
        page_fetcher=HttpxPageFetcher(),
        metadata_provider=metadata_provider,
        language=options.language,
        user_agent=options.user_agent,
        page_timeout=options.page_timeout,
    )


# --- Stages ---


def metadata_stage(
    draft: VideoDraft, video_id: str, language: str | None, context: ExtractionContext
) -> StageOutcome:
    """Structured metadata from the Data API, when a credential is configured."""
    provider = context.metadata_provider
    if provider is None:
        return StageOutcome("skipped", METADATA_LABEL, reason="no credential")

    try:
        item = provider.fetch(video_id)
        partial = map_metadata_item(item)
    except Exception as exc:
        return StageOutcome("failed", METADATA_LABEL, reason=str(exc))

    return StageOutcome("ok", METADATA_LABEL, partial=partial)


def caption_stage(
    draft: VideoDraft, video_id: str, language: str | None, context: ExtractionContext
) -> StageOutcome:
    """Captions, plus title/description if the caption source reports them."""
    requested = language.strip() if is_valid_language_code(language) else None
    if language and requested is None:
        logger.debug("Ignoring invalid language code %r", language)

    try:
        raw = context.caption_provider.fetch(video_id, requested)
    except Exception as exc:
        return StageOutcome("failed", CAPTIONS_LABEL, reason=str(exc))

    partial = VideoDraft(
        title=raw.title or None,
        description=raw.description or None,
        captions=list(raw.segments),
    )
    return StageOutcome("ok", CAPTIONS_LABEL, partial=partial, overrides=("captions",))


def page_stage(
    draft: VideoDraft, video_id: str, language: str | None, context: ExtractionContext
) -> StageOutcome | None:
    """Scrape the watch page, but only while no real title has been found."""
    if not draft.is_missing("title"):
        return None

    try:
        markup = context.page_fetcher.get(
            watch_url(video_id),
            user_agent=context.user_agent,
            timeout=context.page_timeout,
        )
        partial = build_page_draft(video_id, markup)
    except Exception as exc:
        return StageOutcome("failed", PAGE_LABEL, reason=str(exc))

    return StageOutcome("ok", PAGE_LABEL, partial=partial)


STAGES: tuple[Stage, ...] = (metadata_stage, caption_stage, page_stage)


# --- Merging ---


def fill_missing(
    draft: VideoDraft, partial: VideoDraft, *, overrides: tuple[str, ...] = ()
) -> VideoDraft:
    """Return ``draft`` with its gaps filled from ``partial``.

    A field is taken from ``partial`` when the draft has no value for it, or
    when the draft only holds a placeholder and ``partial`` has real data.
    Thumbnails are filled per resolution. Fields named in ``overrides`` are
    always replaced.
    """
    updates: dict = {}
    placeholders = set(draft.placeholders)

    for name in _MERGE_FIELDS:
        incoming = getattr(partial, name)
        if incoming is None:
            continue
        current = getattr(draft, name)
        incoming_is_placeholder = name in partial.placeholders

        if name in overrides:
            take = True
        elif name == "thumbnails" and current is not None:
            updates[name] = _merge_thumbnails(current, incoming)
            continue
        else:
            take = current is None or (name in placeholders and not incoming_is_placeholder)

        if take:
            updates[name] = incoming
            if incoming_is_placeholder:
                placeholders.add(name)
            else:
                placeholders.discard(name)

    updates["placeholders"] = placeholders
    return draft.model_copy(update=updates)


def _merge_thumbnails(current: Thumbnails, incoming: Thumbnails) -> Thumbnails:
    return Thumbnails(
        default=current.default or incoming.default,
        medium=current.medium or incoming.medium,
        high=current.high or incoming.high,
    )


def finalize(video_id: str, draft: VideoDraft) -> VideoRecord:
    """Apply final defaults and build the output record."""
    title = draft.title
    if draft.is_missing("title"):
        title = FALLBACK_TITLE.format(video_id=video_id)
    description = draft.description
    if description is None:
        description = NO_DESCRIPTION

    return VideoRecord(
        id=video_id,
        title=title,
        description=description,
        duration=draft.duration,
        channel_title=draft.channel_title,
        published_at=draft.published_at,
        view_count=draft.view_count,
        like_count=draft.like_count,
        thumbnails=draft.thumbnails or Thumbnails(),
        access_status=draft.access_status or "unknown",
        captions=draft.captions or [],
    )


# --- Orchestration ---


def extract_video_info(
    reference: str,
    language: str | None = None,
    *,
    options: ExtractOptions | None = None,
    context: ExtractionContext | None = None,
) -> ExtractionResult:
    """Run the extraction pipeline for a single video reference.

    Steps:
    1. Resolve the reference to a video ID (the only fatal step)
    2. Structured metadata from the Data API (skipped without an API key)
    3. Captions, always attempted
    4. Watch-page scrape, only while the title is still missing
    5. Apply final defaults and return the record with the attempt log

    Stage errors are recorded in the attempt log and never raised.
    """
    if context is None:
        context = build_context(options or ExtractOptions())
    if language is None:
        language = context.language

    attempts: list[str] = []

    try:
        video_id = resolve_video_id(reference)
    except InvalidReference as exc:
        log_event(logging.ERROR, "Invalid video reference", event="resolve_failed", error=str(exc))
        return ExtractionResult(
            success=False,
            error=f"Failed to extract video information: {exc}",
            attempts=attempts,
        )

    draft = VideoDraft()
    for stage in STAGES:
        outcome = stage(draft, video_id, language, context)
        if outcome is None:
            continue
        attempts.append(outcome.attempt)
        _log_outcome(video_id, outcome)
        if outcome.partial is not None:
            draft = fill_missing(draft, outcome.partial, overrides=outcome.overrides)

    record = finalize(video_id, draft)
    logger.info(
        "Extracted %s via %s (captions: %d)",
        video_id,
        ", ".join(attempts),
        len(record.captions),
    )
    return ExtractionResult(success=True, record=record, attempts=attempts)


def _log_outcome(video_id: str, outcome: StageOutcome) -> None:
    if outcome.status == "ok":
        log_event(logging.DEBUG, f"{outcome.label} succeeded", video_id=video_id, event="stage_ok")
    elif outcome.status == "skipped":
        log_event(
            logging.INFO,
            f"{outcome.label} skipped",
            video_id=video_id,
            event="stage_skipped",
            details=outcome.reason,
        )
    else:
        log_event(
            logging.WARNING,
            f"{outcome.label} failed, continuing",
            video_id=video_id,
            event="stage_failed",
            error=outcome.reason,
        )


def extract_batch(
    references: list[str],
    language: str | None = None,
    *,
    options: ExtractOptions | None = None,
    context: ExtractionContext | None = None,
) -> list[ExtractionResult]:
    """Extract several references concurrently.

    Each reference runs through its own sequential pipeline; at most
    ``options.workers`` run at once. Results are returned in input order.
    """
    if options is None:
        options = ExtractOptions()
    if context is None:
        context = build_context(options)
    return asyncio.run(_async_extract_batch(references, language, options.workers, context))


async def _async_extract_batch(
    references: list[str],
    language: str | None,
    workers: int,
    context: ExtractionContext,
) -> list[ExtractionResult]:
    """Async batch runner with semaphore-based concurrency."""
    semaphore = asyncio.Semaphore(max(1, workers))
    loop = asyncio.get_running_loop()

    async def _worker(reference: str) -> ExtractionResult:
        async with semaphore:
            return await loop.run_in_executor(
                None,
                lambda: extract_video_info(reference, language, context=context),
            )

    return list(await asyncio.gather(*(_worker(ref) for ref in references)))
