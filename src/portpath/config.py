"""portpath configuration settings."""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from portpath.infrastructure.logging_setup import configure_logging


def _default_search_separator() -> str:
    return ";" if os.name == "nt" else ":"


class Settings(BaseSettings):
    """Library settings with env var support (prefix ``PORTPATH_``)."""

    model_config = SettingsConfigDict(
        env_prefix="PORTPATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Observability
    log_level: str = "INFO"
    log_json: bool = False

    # Search lists. The *_env fields name the variables that hold the lists.
    library_path_env: str = "PORTPATH_LIB_SEARCH_PATH"
    bitcode_path_env: str = "PORTPATH_BITCODE_SEARCH_PATH"
    search_separator: str = Field(default_factory=_default_search_separator)
    default_library_dir: Optional[str] = None

    # Temporary directory
    temp_root: Optional[Path] = None
    temp_dir_prefix: str = "portpath_"

    # Per-user configuration directory, relative to the home directory
    config_subdir: str = ".portpath"

    # Upper bound for magic-number reads
    magic_read_limit: int = 1024

    @field_validator("search_separator")
    @classmethod
    def _single_char_separator(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("search_separator must be a single character")
        return value

    @field_validator("temp_dir_prefix", "config_subdir")
    @classmethod
    def _no_separators(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("must be a single path component")
        return value

    def setup_logging(self) -> None:
        configure_logging(level=self.log_level, json_logs=self.log_json)


# Global settings instance
settings = Settings()
