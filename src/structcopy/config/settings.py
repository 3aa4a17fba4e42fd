"""Configuration settings using Pydantic Settings.

Provides typed copier configuration with environment variable support.

Usage:
    from structcopy.config import CopierSettings

    # Load from environment variables (STRUCTCOPY_*)
    settings = CopierSettings()

    # Or override with explicit values
    settings = CopierSettings(init_all_embedded=True)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CopierSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the copier.

    Settings are read once when a Copier is built and never mutated by copies.

    Attributes:
        init_all_embedded: Allocate every null embedded pointer on destination
            records, not only those the source populates.
        max_depth: Maximum nesting of structural copies before giving up.
            Guards against self-referential values.

    Environment Variables:
        STRUCTCOPY_INIT_ALL_EMBEDDED
        STRUCTCOPY_MAX_DEPTH
    """

    model_config = SettingsConfigDict(
        env_prefix="STRUCTCOPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    init_all_embedded: bool = False
    max_depth: int = Field(default=100, ge=1)
