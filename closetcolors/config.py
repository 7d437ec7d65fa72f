"""
Closet Colors Configuration
Manages environment variables and defaults for the imaging adapter, cache and logging.

The pure engine functions never read this module; only the adapters around them do.
"""
import os
from typing import Literal


class Config:
    """Configuration class for closetcolors services."""

    # Logging
    LOG_LEVEL: str = os.environ.get("CLOSETCOLORS_LOG_LEVEL", "INFO")

    # Working copy produced before analysis (fit inside WORKING_EDGE x WORKING_EDGE)
    WORKING_EDGE: int = int(os.environ.get("CLOSETCOLORS_WORKING_EDGE", "256"))
    MAX_FILE_MB: int = int(os.environ.get("CLOSETCOLORS_MAX_FILE_MB", "10"))

    # Extraction defaults
    DEFAULT_ALGORITHM: Literal["legacy", "enhanced"] = os.environ.get(
        "CLOSETCOLORS_DEFAULT_ALGORITHM", "enhanced"
    )

    # Caller-owned analysis cache
    CACHE_MAX_SIZE: int = int(os.environ.get("CLOSETCOLORS_CACHE_MAX_SIZE", "256"))

    SUPPORTED_ALGORITHMS = ("legacy", "enhanced")

    @classmethod
    def validate_algorithm(cls, algorithm: str) -> bool:
        """Validate extraction algorithm name."""
        return algorithm in cls.SUPPORTED_ALGORITHMS

    @classmethod
    def validate_working_edge(cls, edge: int) -> bool:
        """Validate working edge size."""
        return 32 <= edge <= 2048


# Global config instance
config = Config()
