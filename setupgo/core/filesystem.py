"""
File system utilities for setup-go.

This module provides:
- Archive extraction (zip, tar.gz) with directory traversal protection
- Idempotent directory creation
"""

import logging
import sys
import tarfile
import zipfile
from pathlib import Path
from typing import Union

from setupgo.core.exceptions import ArchiveExtractionError, InsecureArchiveError

logger = logging.getLogger(__name__)


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to parent.

    Args:
        path: Path to check
        parent: Potential parent path

    Returns:
        True if path is under parent
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Args:
        path: Directory path

    Returns:
        Path object (resolved)

    Example:
        >>> ensure_directory('/tmp/step/go')
        PosixPath('/tmp/step/go')
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path.resolve()


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Args:
        path: Member path from archive
        destination: Extraction destination

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def _prepare(archive_path: Union[str, Path], destination: Union[str, Path]):
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ArchiveExtractionError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)
    return archive_path, destination


def extract_zip(
    archive_path: Union[str, Path],
    destination: Union[str, Path],
) -> None:
    """
    Extract a ZIP archive.

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to

    Raises:
        ArchiveExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths
    """
    archive_path, destination = _prepare(archive_path, destination)
    logger.debug(f"Extracting zip {archive_path} into {destination}")

    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            members = zf.namelist()

            for member in members:
                _validate_archive_path(member, destination)

            zf.extractall(destination)
    except InsecureArchiveError:
        raise
    except Exception as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e


def extract_tar_gz(
    archive_path: Union[str, Path],
    destination: Union[str, Path],
) -> None:
    """
    Extract a .tar.gz archive.

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to

    Raises:
        ArchiveExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths
    """
    archive_path, destination = _prepare(archive_path, destination)
    logger.debug(f"Extracting tar.gz {archive_path} into {destination}")

    try:
        with tarfile.open(archive_path, "r:gz") as tar:
            members = tar.getmembers()

            for member in members:
                _validate_archive_path(member.name, destination)

            # Python 3.12+ supports extraction filters; paths are already
            # validated above for older interpreters.
            if sys.version_info >= (3, 12):
                tar.extractall(destination, filter="data")
            else:
                tar.extractall(destination)
    except InsecureArchiveError:
        raise
    except Exception as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e


__all__ = [
    "is_relative_to",
    "ensure_directory",
    "extract_zip",
    "extract_tar_gz",
]
