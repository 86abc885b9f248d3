"""
Toolchain archive download and extraction.

The installer resolves the archive for the agent platform, downloads it into
the target folder (through the Artifactory cache when configured) and
extracts it in place.
"""

import logging
from pathlib import Path
from typing import Optional

from setupgo.core.download import DownloadProgress, download_file
from setupgo.core.filesystem import extract_tar_gz, extract_zip
from setupgo.core.platform import detect_platform
from setupgo.pipelines.integrations import Integration
from setupgo.setup.resolver import ArchiveType, resolve_archive_type, resolve_download_url
from setupgo.setup.toolchain import GO, ToolchainSpec

logger = logging.getLogger(__name__)


def _log_progress(progress: DownloadProgress) -> None:
    logger.debug(f"Downloading: {progress}")


class ArchiveInstaller:
    """
    Downloads and extracts a toolchain archive.

    Example:
        >>> installer = ArchiveInstaller()
        >>> installer.install("1.21.0", Path("workspace/go"))
        PosixPath('workspace/go/go1.21.0.linux-amd64.tar.gz')
    """

    def __init__(self, toolchain: ToolchainSpec = GO):
        self.toolchain = toolchain

    def install(
        self,
        version: str,
        target_folder: Path,
        cache_integration: Optional[Integration] = None,
        cache_repository: Optional[str] = None,
    ) -> Path:
        """
        Download and extract the toolchain into target_folder.

        Args:
            version: Validated toolchain version
            target_folder: Existing folder receiving archive and toolchain
            cache_integration: Artifactory integration used as cache
            cache_repository: Artifactory repository used as cache

        Returns:
            Path to the downloaded archive

        Raises:
            UnsupportedArchitectureError: Before any network access
            DownloadError: If the download fails
            ArchiveExtractionError: If extraction fails
        """
        platform_info = detect_platform()
        archive_type = resolve_archive_type(platform_info.os_family)
        url = resolve_download_url(
            version,
            platform_info.os_family,
            platform_info.architecture,
            toolchain=self.toolchain,
            archive_type=archive_type,
        )
        logger.info(f"{self.toolchain.name.capitalize()} package url: {url}")

        if not cache_integration or not cache_repository:
            logger.warning("Cache configuration not set. Caching will be skipped.")

        archive_path = download_file(
            url,
            Path(target_folder),
            cache_repository,
            cache_integration,
            progress_callback=_log_progress,
        )
        self._extract(archive_path, Path(target_folder), archive_type)
        return archive_path

    def _extract(
        self, archive_path: Path, target_folder: Path, archive_type: ArchiveType
    ) -> None:
        logger.info("Extracting package content")
        if archive_type is ArchiveType.ZIP:
            extract_zip(archive_path, target_folder)
        else:
            extract_tar_gz(archive_path, target_folder)
