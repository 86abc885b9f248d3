"""
Toolchain setup steps and the run orchestrator.
"""

from .environment import configure_environment, log_environment
from .inputs import SetupConfig, normalize_semver, read_and_validate_input
from .installer import ArchiveInstaller
from .integration import find_artifactory_integration
from .resolver import (
    ArchiveType,
    map_architecture,
    resolve_archive_type,
    resolve_download_url,
)
from .runner import SetupRunner, create_target_folder, log_error_and_exit
from .toolchain import GO, ToolchainSpec

__all__ = [
    "configure_environment",
    "log_environment",
    "SetupConfig",
    "normalize_semver",
    "read_and_validate_input",
    "ArchiveInstaller",
    "find_artifactory_integration",
    "ArchiveType",
    "map_architecture",
    "resolve_archive_type",
    "resolve_download_url",
    "SetupRunner",
    "create_target_folder",
    "log_error_and_exit",
    "GO",
    "ToolchainSpec",
]
