"""
Centralized exception hierarchy for setup-go.

Every step of a setup run propagates these unchanged; the run orchestrator
is the only place they are caught.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class SetupGoError(Exception):
    """Base exception for all setup-go errors."""

    pass


# ============================================================================
# Input Exceptions
# ============================================================================


class InputValidationError(SetupGoError):
    """Raised when a required step input is missing or malformed."""

    pass


# ============================================================================
# Integration Exceptions
# ============================================================================


class IntegrationError(SetupGoError):
    """Base exception for integration lookup errors."""

    pass


class IntegrationNotFoundError(IntegrationError):
    """Raised when an integration cannot be found by name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Integration not found: {name}")


class IntegrationTypeMismatchError(IntegrationError):
    """Raised when a named integration has an unexpected provider type."""

    def __init__(self, master_name: str, expected: str = "Artifactory"):
        self.master_name = master_name
        self.expected = expected
        super().__init__(
            f"Input cacheIntegration is not an {expected} Integration. "
            f"Type: {master_name}"
        )


# ============================================================================
# Platform Exceptions
# ============================================================================


class UnsupportedArchitectureError(SetupGoError):
    """Raised when the agent architecture has no toolchain download."""

    def __init__(self, architecture: str):
        self.architecture = architecture
        super().__init__(f"Architecture not supported: {architecture}")


# ============================================================================
# Download / Extraction Exceptions
# ============================================================================


class DownloadError(SetupGoError):
    """Exception raised when download fails."""

    pass


class ArchiveExtractionError(SetupGoError):
    """Failed to extract an archive."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Process Exceptions
# ============================================================================


class CommandExecutionError(SetupGoError):
    """Raised when a toolchain command exits with a non-zero status."""

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command '{command}' failed with exit code {returncode}"
        if stderr:
            msg += f": {stderr.strip()}"
        super().__init__(msg)
