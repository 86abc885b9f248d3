"""
Network download manager with Artifactory caching, progress tracking and retry logic.

This module provides:
- HTTP/HTTPS downloads with TLS verification
- Retry logic with exponential backoff for transient failures
- Progress reporting (bytes, percentage, speed, ETA)
- Optional read-through cache in an Artifactory repository: the archive is
  fetched from the repository when present and uploaded to it after a
  download from the source
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urlparse

import requests
from requests.exceptions import RequestException, Timeout, ConnectionError, HTTPError

from setupgo.core.exceptions import DownloadError
from setupgo.pipelines.integrations import Integration

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second
    eta_seconds: float  # estimated time remaining

    def __str__(self) -> str:
        """Format progress for display."""
        return format_progress(self)


class ArtifactoryCache:
    """
    Read-through cache backed by an Artifactory repository.

    Cached files live at ``<integration url>/<repository>/<file name>``.
    Cache failures are never fatal: they are logged and the caller falls
    back to the source URL.
    """

    def __init__(self, integration: Integration, repository: str, timeout: int = 30):
        self.integration = integration
        self.repository = repository.strip("/")
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.integration.url)

    def cache_url(self, file_name: str) -> str:
        base = (self.integration.url or "").rstrip("/")
        return f"{base}/{self.repository}/{file_name}"

    def _request_kwargs(self) -> dict:
        kwargs = {"timeout": self.timeout}
        if self.integration.access_token:
            kwargs["headers"] = {
                "Authorization": f"Bearer {self.integration.access_token}"
            }
        elif self.integration.user and self.integration.api_key:
            kwargs["auth"] = (self.integration.user, self.integration.api_key)
        return kwargs

    def fetch(self, file_name: str, destination: Path) -> bool:
        """
        Try to fetch a file from the cache repository.

        Returns:
            True on cache hit (file written to destination), False otherwise
        """
        url = self.cache_url(file_name)
        logger.info(f"Looking up {file_name} in cache repository {self.repository}")

        try:
            with requests.get(url, stream=True, **self._request_kwargs()) as response:
                if response.status_code == 404:
                    logger.info(f"Cache miss for {file_name}")
                    return False
                response.raise_for_status()

                with open(destination, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except (RequestException, OSError) as e:
            logger.warning(f"Cache lookup failed, downloading from source: {e}")
            destination.unlink(missing_ok=True)
            return False

        logger.info(f"Cache hit for {file_name}")
        return True

    def store(self, file_name: str, source: Path) -> bool:
        """
        Upload a downloaded file into the cache repository.

        Returns:
            True if the upload succeeded
        """
        url = self.cache_url(file_name)
        logger.info(f"Uploading {file_name} to cache repository {self.repository}")

        try:
            with open(source, "rb") as f:
                response = requests.put(url, data=f, **self._request_kwargs())
            response.raise_for_status()
        except (RequestException, OSError) as e:
            logger.warning(f"Failed to upload {file_name} to cache: {e}")
            return False

        return True


def file_name_from_url(url: str) -> str:
    """
    Get the file name (last path segment) of a URL.

    Raises:
        ValueError: If the URL has no file name
    """
    name = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    if not name:
        raise ValueError(f"URL has no file name: {url}")
    return name


def download_file(
    url: str,
    destination_dir: Path,
    cache_repository: Optional[str] = None,
    cache_integration: Optional[Integration] = None,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    timeout: int = 30,
    max_retries: int = 3,
) -> Path:
    """
    Download a file into a directory, optionally through an Artifactory cache.

    Caching is used only when both a cache repository and a cache integration
    are given.

    Args:
        url: URL to download from
        destination_dir: Directory to save the file into
        cache_repository: Artifactory repository used as cache
        cache_integration: Artifactory integration holding URL and credentials
        progress_callback: Optional callback for progress updates
        timeout: Request timeout in seconds
        max_retries: Maximum number of attempts against the source URL

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If download fails after retries
        ValueError: If URL is invalid

    Example:
        >>> from setupgo.core.download import download_file
        >>> download_file("https://go.dev/dl/go1.21.0.linux-amd64.tar.gz", Path("step/go"))
        PosixPath('step/go/go1.21.0.linux-amd64.tar.gz')
    """
    if not url:
        raise ValueError("URL cannot be empty")

    destination_dir = Path(destination_dir)
    destination_dir.mkdir(parents=True, exist_ok=True)
    file_name = file_name_from_url(url)
    destination = destination_dir / file_name

    cache = None
    if cache_repository and cache_integration:
        cache = ArtifactoryCache(cache_integration, cache_repository, timeout=timeout)
        if not cache.is_configured():
            logger.warning(
                f"Integration {cache_integration.name} has no URL, caching disabled"
            )
            cache = None

    if cache and cache.fetch(file_name, destination):
        return destination

    path = _download_with_retries(
        url, destination, progress_callback, timeout, max_retries
    )

    if cache:
        cache.store(file_name, path)

    return path


def _download_with_retries(
    url: str,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]],
    timeout: int,
    max_retries: int,
) -> Path:
    for attempt in range(max_retries):
        try:
            return _download_with_progress(
                url=url,
                destination=destination,
                progress_callback=progress_callback,
                timeout=timeout,
            )
        except HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            # Client errors will not go away on retry
            if status is not None and 400 <= status < 500:
                raise DownloadError(f"Download failed: {e}") from e
            if attempt == max_retries - 1:
                raise DownloadError(
                    f"Download failed after {max_retries} attempts: {e}"
                ) from e
            _backoff(attempt, e)
        except (Timeout, ConnectionError, RequestException) as e:
            if attempt == max_retries - 1:
                raise DownloadError(
                    f"Download failed after {max_retries} attempts: {e}"
                ) from e
            _backoff(attempt, e)

    raise DownloadError("Download failed for unknown reason")


def _backoff(attempt: int, error: Exception) -> None:
    backoff_seconds = 2**attempt
    logger.warning(
        f"Download attempt {attempt + 1} failed: {error}. "
        f"Retrying in {backoff_seconds}s..."
    )
    time.sleep(backoff_seconds)


def _download_with_progress(
    url: str,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]],
    timeout: int,
) -> Path:
    """
    Perform download with streaming and progress updates.

    Args:
        url: URL to download
        destination: Destination file path
        progress_callback: Progress callback function
        timeout: Request timeout in seconds

    Returns:
        Path to downloaded file

    Raises:
        RequestException: If HTTP request fails
    """
    logger.info(f"Downloading from {url}")

    with requests.get(
        url, stream=True, timeout=timeout, allow_redirects=True
    ) as response:
        response.raise_for_status()
        _write_response(response, destination, progress_callback)

    logger.info(f"Download complete: {destination}")
    return destination


def _write_response(
    response: requests.Response,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]],
) -> None:
    content_length = response.headers.get("content-length")
    total_size = int(content_length) if content_length else 0

    downloaded = 0
    start_time = time.time()
    last_progress_time = start_time

    try:
        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                f.write(chunk)
                downloaded += len(chunk)

                # Report progress at most once per 0.5 seconds
                current_time = time.time()
                if progress_callback and (
                    current_time - last_progress_time >= 0.5
                    or downloaded == total_size
                ):
                    elapsed = current_time - start_time
                    speed = downloaded / elapsed if elapsed > 0 else 0
                    remaining = total_size - downloaded if total_size > 0 else 0
                    eta = remaining / speed if speed > 0 else 0

                    progress_callback(
                        DownloadProgress(
                            bytes_downloaded=downloaded,
                            total_bytes=total_size if total_size > 0 else downloaded,
                            percentage=(downloaded / total_size * 100)
                            if total_size > 0
                            else 0,
                            speed_bps=speed,
                            eta_seconds=eta,
                        )
                    )
                    last_progress_time = current_time
    except Exception as e:
        logger.debug(f"Error during download: {e}")
        destination.unlink(missing_ok=True)
        raise


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.total_bytes > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s "
            f"ETA: {progress.eta_seconds:.0f}s"
        )
    else:
        return f"{mb_downloaded:.1f} MB at {speed_mbps:.1f} MB/s"
