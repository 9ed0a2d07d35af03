# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""ExtractOptions settings model for yt-info."""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource
from pydantic_settings import YamlConfigSettingsSource

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class ExtractOptions(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="YT_INFO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        yaml_file="yt_info.yaml",
        yaml_file_encoding="utf-8",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    # YOUTUBE_API_KEY is the conventional name used by Data API tooling.
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("api_key", "YT_INFO_API_KEY", "YOUTUBE_API_KEY"),
    )
    language: str | None = None
    page_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    workers: int = 3
    verbose: bool = False
    log_file: Path | None = None
