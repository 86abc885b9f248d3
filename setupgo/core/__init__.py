"""
Core functionality for setup-go.

This package contains the foundational modules that the setup steps depend on.
"""

from .platform import (
    PlatformInfo,
    detect_platform,
    get_architecture,
    get_operating_system_family,
)

from .exceptions import (
    SetupGoError,
    InputValidationError,
    IntegrationError,
    IntegrationNotFoundError,
    IntegrationTypeMismatchError,
    UnsupportedArchitectureError,
    DownloadError,
    ArchiveExtractionError,
    InsecureArchiveError,
    CommandExecutionError,
)

__all__ = [
    "PlatformInfo",
    "detect_platform",
    "get_architecture",
    "get_operating_system_family",
    "SetupGoError",
    "InputValidationError",
    "IntegrationError",
    "IntegrationNotFoundError",
    "IntegrationTypeMismatchError",
    "UnsupportedArchitectureError",
    "DownloadError",
    "ArchiveExtractionError",
    "InsecureArchiveError",
    "CommandExecutionError",
]
