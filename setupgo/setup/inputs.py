"""
Step input validation.

Produces the SetupConfig value object passed through the run.
"""

import re
from dataclasses import dataclass
from typing import Optional

from setupgo.core.exceptions import InputValidationError
from setupgo.pipelines.inputs import InputReader

# Semantic Versioning 2.0.0 (https://semver.org)
SEMVER_PATTERN = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

MAX_LENGTH = 256
MAX_SAFE_INTEGER = 2**53 - 1


@dataclass(frozen=True)
class SetupConfig:
    """Validated inputs of a setup run."""

    version: str
    cache_integration: Optional[str] = None
    cache_repository: Optional[str] = None


def normalize_semver(value: str) -> Optional[str]:
    """
    Validate and normalize a semantic version.

    Surrounding whitespace and a 'v' prefix directly attached to the
    version are accepted; build metadata is dropped. Versions longer than
    MAX_LENGTH or with a component above MAX_SAFE_INTEGER are rejected.

    Returns:
        Normalized version, or None if value is not a semantic version

    Example:
        >>> normalize_semver("v1.21.0")
        '1.21.0'
        >>> normalize_semver("1.21") is None
        True
    """
    if len(value) > MAX_LENGTH:
        return None

    candidate = value.strip()
    if candidate.startswith("v"):
        candidate = candidate[1:]

    match = SEMVER_PATTERN.match(candidate)
    if not match:
        return None
    if any(
        int(match[part]) > MAX_SAFE_INTEGER for part in ("major", "minor", "patch")
    ):
        return None

    version = f"{match['major']}.{match['minor']}.{match['patch']}"
    if match["prerelease"]:
        version += f"-{match['prerelease']}"
    return version


def read_and_validate_input(reader: InputReader) -> SetupConfig:
    """
    Read and validate the step inputs.

    Raises:
        InputValidationError: If version is missing or not semver compatible
    """
    version = reader.get_input("version")
    if not version:
        raise InputValidationError("version input is required")

    normalized = normalize_semver(version)
    if not normalized:
        raise InputValidationError("version input must be semver compatible")

    return SetupConfig(
        version=normalized,
        cache_integration=reader.get_input("cacheIntegration") or None,
        cache_repository=reader.get_input("cacheRepository") or None,
    )
