"""Configuration management for webtoolkit.

This module uses Pydantic Settings to load and validate toolkit configuration
from constructor arguments, environment variables and .env files. Unlike
application settings, a ToolkitConfig is owned by the caller and stays mutable:
a Toolkit reads it on every operation, so changes made between calls apply to
the next call.
"""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_MAX_FILE_SIZE = 1024 * 1024 * 1024  # 1 GiB
DEFAULT_MAX_JSON_SIZE = 1024 * 1024  # 1 MiB


class ToolkitConfig(BaseSettings):
    """Toolkit configuration settings.

    Settings are loaded from keyword arguments first, then environment
    variables prefixed with ``WEBTOOLKIT_``, then the .env file. Assignments
    after construction are validated too.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WEBTOOLKIT_",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Upload Settings
    max_file_size: int = Field(
        default=DEFAULT_MAX_FILE_SIZE,
        gt=0,
        description="Maximum size in bytes of a multipart upload body",
    )
    allowed_mime_types: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Sniffed MIME types accepted for uploads (empty allows all)",
    )

    # JSON Settings
    max_json_size: int = Field(
        default=DEFAULT_MAX_JSON_SIZE,
        gt=0,
        description="Maximum size in bytes of a JSON request body",
    )
    allow_unknown_fields: bool = Field(
        default=False,
        description="Accept JSON keys that the target structure does not declare",
    )

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("allowed_mime_types", mode="before")
    @classmethod
    def parse_allowed_mime_types(cls, v: str | list[str] | None) -> list[str]:
        """Parse allowed MIME types from comma-separated string or list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [mime_type.strip() for mime_type in v.split(",") if mime_type.strip()]
        return v

    def is_mime_type_allowed(self, mime_type: str) -> bool:
        """Check a sniffed MIME type against the allow-list.

        An empty allow-list accepts everything. Comparison is case-insensitive.
        """
        if not self.allowed_mime_types:
            return True
        wanted = mime_type.casefold()
        return any(allowed.casefold() == wanted for allowed in self.allowed_mime_types)


@lru_cache
def get_config() -> ToolkitConfig:
    """Get cached configuration instance loaded from the environment.

    Returns:
        ToolkitConfig: Cached toolkit configuration instance.
    """
    return ToolkitConfig()
