# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for yt_info.core.models and yt_info.core.options."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from yt_info.core.models import CaptionSegment, ExtractionResult, Thumbnails, VideoDraft, VideoRecord
from yt_info.core.options import DEFAULT_USER_AGENT, ExtractOptions


class TestCaptionSegment:
    def test_numeric_offsets(self):
        seg = CaptionSegment(text="hi", start=1.5, duration=2.0)
        assert seg.start == 1.5

    def test_string_offsets_preserved(self):
        seg = CaptionSegment(text="hi", start="1.5", duration="2")
        assert seg.start == "1.5"
        assert seg.duration == "2"

    def test_text_required(self):
        with pytest.raises(ValidationError):
            CaptionSegment(start=0, duration=1)


class TestVideoDraft:
    def test_empty(self):
        d = VideoDraft()
        assert d.is_missing("title")
        assert d.placeholders == set()

    def test_real_value_not_missing(self):
        assert not VideoDraft(title="x").is_missing("title")

    def test_placeholder_counts_as_missing(self):
        assert VideoDraft(title="x", placeholders={"title"}).is_missing("title")

    def test_placeholder_sets_not_shared(self):
        a = VideoDraft()
        a.placeholders.add("title")
        assert VideoDraft().placeholders == set()


class TestVideoRecord:
    def test_captions_available_computed(self):
        r = VideoRecord(id="abc", title="t", description="d")
        assert r.captions_available is False
        r2 = VideoRecord(
            id="abc", title="t", description="d",
            captions=[CaptionSegment(text="a", start=0, duration=1)],
        )
        assert r2.captions_available is True

    def test_computed_fields_serialised(self):
        data = VideoRecord(id="abc", title="t", description="d").model_dump()
        assert data["captions_available"] is False
        assert data["url"] == "https://www.youtube.com/watch?v=abc"

    def test_defaults(self):
        r = VideoRecord(id="abc", title="t", description="d")
        assert r.access_status == "unknown"
        assert r.thumbnails == Thumbnails()

    def test_invalid_access_status(self):
        with pytest.raises(ValidationError):
            VideoRecord(id="abc", title="t", description="d", access_status="secret")


class TestExtractionResult:
    def test_failure_defaults(self):
        r = ExtractionResult(success=False, error="bad")
        assert r.record is None
        assert r.attempts == []


class TestExtractOptions:
    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch, tmp_path):
        for name in ("YOUTUBE_API_KEY", "YT_INFO_API_KEY", "YT_INFO_LANGUAGE", "YT_INFO_PAGE_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.chdir(tmp_path)

    def test_defaults(self):
        opts = ExtractOptions()
        assert opts.api_key is None
        assert opts.language is None
        assert opts.page_timeout == 10.0
        assert opts.user_agent == DEFAULT_USER_AGENT
        assert opts.workers == 3
        assert opts.log_file is None

    def test_init_kwargs(self):
        opts = ExtractOptions(api_key="k", log_file="logs/run.jsonl")
        assert opts.api_key == "k"
        assert opts.log_file == Path("logs/run.jsonl")

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("YT_INFO_LANGUAGE", "es")
        monkeypatch.setenv("YT_INFO_PAGE_TIMEOUT", "2.5")
        opts = ExtractOptions()
        assert opts.language == "es"
        assert opts.page_timeout == 2.5

    def test_youtube_api_key_env(self, monkeypatch):
        monkeypatch.setenv("YOUTUBE_API_KEY", "from-env")
        assert ExtractOptions().api_key == "from-env"

    def test_init_beats_env(self, monkeypatch):
        monkeypatch.setenv("YOUTUBE_API_KEY", "from-env")
        assert ExtractOptions(api_key="explicit").api_key == "explicit"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("YOUTUBE_API_KEY=from-dotenv\n")
        assert ExtractOptions().api_key == "from-dotenv"

    def test_yaml_file(self, tmp_path):
        (tmp_path / "yt_info.yaml").write_text("language: de\npage_timeout: 4\n")
        opts = ExtractOptions()
        assert opts.language == "de"
        assert opts.page_timeout == 4.0
