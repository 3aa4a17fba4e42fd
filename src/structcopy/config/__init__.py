"""Configuration module using Pydantic Settings.

Provides typed copier configuration with environment variable support.

Usage:
    from structcopy.config import CopierSettings

    settings = CopierSettings(init_all_embedded=True, max_depth=32)
"""

from structcopy.config.settings import CopierSettings

__all__ = [
    "CopierSettings",
]
