"""
Download URL resolution for toolchain archives.

Maps an OS family and CPU architecture to the archive published by the
toolchain distribution, e.g.::

    >>> resolve_download_url("1.21.0", "Linux", "x86_64")
    'https://go.dev/dl/go1.21.0.linux-amd64.tar.gz'
"""

from enum import Enum
from typing import Optional

from setupgo.core.exceptions import UnsupportedArchitectureError
from setupgo.setup.toolchain import GO, ToolchainSpec

ARCHITECTURES = {
    "x86_64": "amd64",
    "ARM64": "arm64",
}


class ArchiveType(Enum):
    """Archive formats published by the distribution."""

    ZIP = "zip"
    TAR_GZ = "tar.gz"

    @property
    def extension(self) -> str:
        return self.value


def normalize_os_family(os_family: str) -> str:
    return os_family.lower()


def map_architecture(architecture: str) -> str:
    """
    Map an agent architecture to the distribution's naming.

    Raises:
        UnsupportedArchitectureError: For anything but x86_64 and ARM64
    """
    mapped = ARCHITECTURES.get(architecture)
    if mapped is None:
        raise UnsupportedArchitectureError(architecture)
    return mapped


def resolve_archive_type(os_family: str) -> ArchiveType:
    """Windows gets zip archives, every other OS family tar.gz."""
    if normalize_os_family(os_family) == "windows":
        return ArchiveType.ZIP
    return ArchiveType.TAR_GZ


def resolve_download_url(
    version: str,
    os_family: str,
    architecture: str,
    toolchain: ToolchainSpec = GO,
    archive_type: Optional[ArchiveType] = None,
) -> str:
    """
    Build the archive download URL.

    Args:
        version: Validated toolchain version
        os_family: OS family, used lower-cased and otherwise verbatim
        architecture: Agent architecture ('x86_64' or 'ARM64')
        toolchain: Toolchain naming conventions
        archive_type: Archive type already resolved for this OS family

    Returns:
        Download URL

    Raises:
        UnsupportedArchitectureError: If the architecture is not supported
    """
    arch = map_architecture(architecture)
    if archive_type is None:
        archive_type = resolve_archive_type(os_family)

    return (
        f"https://{toolchain.download_host}/dl/"
        f"{toolchain.name}{version}.{normalize_os_family(os_family)}-{arch}."
        f"{archive_type.extension}"
    )
