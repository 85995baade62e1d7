"""Configuration for the csl-richtext command line."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

OutputFormat = Literal["plain", "html", "tree"]


class Settings(BaseSettings):
    """Command line defaults, overridable through the environment."""

    locale_file: Path | None = Field(default=None, alias="CSL_LOCALE_FILE")
    output_format: OutputFormat = Field(default="plain", alias="CSL_OUTPUT_FORMAT")
    no_external_links: bool = Field(default=False, alias="CSL_NO_EXTERNAL_LINKS")
    log_level: str = Field(default="WARNING", alias="CSL_LOG_LEVEL")

    class Config:
        env_file = ".env"
        populate_by_name = True
