# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""CLI entry point for yt-info."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from yt_info import __version__
from yt_info.core.logging import setup_logging
from yt_info.core.options import ExtractOptions
from yt_info.services.id_parser import load_references


# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 2
EXIT_ALL_FAILED = 3


def _common_options(fn):
    """Shared Click options that map to ExtractOptions fields."""
    decorators = [
        click.option("--language", type=str, default=None, help="Preferred caption language code."),
        click.option("--api-key", type=str, default=None, help="YouTube Data API v3 key."),
        click.option("--page-timeout", type=float, default=None, help="Watch-page fetch timeout in seconds."),
        click.option("--verbose", is_flag=True, default=None, help="Verbose console output."),
        click.option("--log-file", type=click.Path(path_type=Path), default=None, help="Append JSONL logs to this file."),
        click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation (0 for compact)."),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def _build_options(**cli_kwargs) -> ExtractOptions:
    """Build ExtractOptions from CLI kwargs, filtering out unset (None) values.

    Only explicitly-provided CLI flags are passed to ExtractOptions as init
    overrides. Unset flags fall through to env vars → .env → YAML → defaults.
    """
    overrides = {key: value for key, value in cli_kwargs.items() if value is not None}
    return ExtractOptions(**overrides)


def _dump(payload, indent: int) -> str:
    return json.dumps(payload, indent=indent or None, ensure_ascii=False)


def _exit_code(total: int, failed: int, strict: bool) -> int:
    """Determine exit code from batch results."""
    if total == 0:
        return EXIT_OK
    if failed == 0:
        return EXIT_OK
    if failed == total:
        return EXIT_ALL_FAILED
    if strict:
        return EXIT_PARTIAL
    return EXIT_OK


@click.group()
@click.version_option(version=__version__, prog_name="yt-info")
def cli() -> None:
    """YouTube video metadata and captions with multi-source fallback."""


@cli.command()
@click.argument("reference")
@_common_options
def info(reference, indent, **kwargs):
    """Print the structured info payload for one video URL or ID."""
    options = _build_options(**kwargs)
    setup_logging(verbose=options.verbose, jsonl_path=options.log_file)

    from yt_info import get_video_info

    payload = get_video_info(reference, options=options)
    click.echo(_dump(payload, indent))
    sys.exit(EXIT_OK if payload["success"] else EXIT_ERROR)


@cli.command()
@click.option("--id", "ids", multiple=True, help="YouTube video ID or URL (repeatable).")
@click.option("--file", "file_path", type=click.Path(exists=True, path_type=Path), default=None, help="Text or JSONL file with references.")
@click.option("--id-field", default="id", help="Field name for the reference in JSONL input.")
@click.option("--strict", is_flag=True, default=False, help="Exit 2 on partial failure.")
@click.option("--workers", type=int, default=None, help="Parallel workers.")
@_common_options
def batch(ids, file_path, id_field, strict, indent, **kwargs):
    """Print payloads for several videos as a JSON array."""
    options = _build_options(**kwargs)
    log = setup_logging(verbose=options.verbose, jsonl_path=options.log_file)

    references: list[str] = list(ids)
    if file_path:
        references.extend(load_references(file_path, id_field=id_field))
    if not references:
        log.error("No video references provided. Use --id or --file.")
        sys.exit(EXIT_ERROR)

    from yt_info import get_video_info_batch

    payloads = get_video_info_batch(references, options=options)
    click.echo(_dump(payloads, indent))

    failed = sum(1 for p in payloads if not p["success"])
    sys.exit(_exit_code(len(payloads), failed, strict))


if __name__ == "__main__":
    cli()
