# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""URL/ID parsing and validation."""

from __future__ import annotations

import json
import re
from pathlib import Path
from urllib.parse import parse_qs, urlparse

PRIMARY_DOMAIN = "youtube.com"
SHORT_LINK_DOMAIN = "youtu.be"

_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")

# Path shapes on the primary domain that carry the id as the next segment.
_PATH_MARKERS = ("/embed/", "/v/", "/shorts/")


class InvalidReference(ValueError):
    """Raised when no video ID can be derived from a reference."""


def is_valid_video_id(candidate: str) -> bool:
    """Check if a string looks like a bare YouTube video ID."""
    return bool(_VIDEO_ID_RE.match(candidate))


def resolve_video_id(reference: str) -> str:
    """Extract a YouTube video ID from a URL or a bare ID.

    URL shapes are tried first (``watch?v=``, ``youtu.be/``, ``/embed/``,
    ``/v/``, ``/shorts/``); the value taken from a recognised URL is returned
    as-is, without format validation. Anything else must itself be an
    11-character ID.

    Raises:
        InvalidReference: if no ID can be derived.
    """
    text = reference.strip()

    try:
        candidate = _id_from_url(text)
    except ValueError:
        candidate = None

    if candidate:
        return candidate
    if is_valid_video_id(text):
        return text
    raise InvalidReference(f"Could not extract video ID from {reference!r}")


def _id_from_url(text: str) -> str | None:
    parsed = urlparse(text)
    host = (parsed.hostname or "").lower()
    path = parsed.path

    if PRIMARY_DOMAIN in host:
        values = parse_qs(parsed.query).get("v", [])
        if values and values[0]:
            return values[0]

    if host.removeprefix("www.") == SHORT_LINK_DOMAIN:
        return path.lstrip("/").split("/")[0]

    if PRIMARY_DOMAIN in host:
        for marker in _PATH_MARKERS:
            if marker in path:
                return path.split(marker, 1)[1].split("/")[0]

    return None


def load_references(path: Path, *, id_field: str = "id") -> list[str]:
    """Load raw video references from a text file or JSONL.

    For JSONL files, reads the `id_field` key of each JSON object.
    For plain text files, each non-empty line not starting with '#' is a
    reference. References are not resolved here.
    """
    path = Path(path)
    references: list[str] = []

    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".jsonl":
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    obj = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if isinstance(obj, dict) and obj.get(id_field):
                    references.append(str(obj[id_field]))
        else:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#"):
                    references.append(line)

    return references
