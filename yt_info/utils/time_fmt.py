# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Duration parsing and clock-style formatting helpers."""

from __future__ import annotations

import re

_ISO8601_DURATION_RE = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")


def parse_iso8601_duration(duration: str) -> tuple[int, int, int] | None:
    """Split an ISO 8601 duration (e.g. PT4M13S) into (hours, minutes, seconds).

    Missing components default to zero. Returns None if the input does not
    match the PT[nH][nM][nS] form.
    """
    match = _ISO8601_DURATION_RE.match(duration)
    if not match:
        return None
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours, minutes, seconds


def format_clock(hours: int, minutes: int, seconds: int) -> str:
    """Format as H:MM:SS when hours > 0, otherwise M:SS."""
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_iso8601_duration(duration: str | None) -> str | None:
    """Convert an ISO 8601 duration to clock format.

    Returns None for empty or malformed input so callers can substitute a
    placeholder.
    """
    if not duration:
        return None
    parts = parse_iso8601_duration(duration)
    if parts is None:
        return None
    return format_clock(*parts)
