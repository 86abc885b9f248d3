"""
Pipeline environment mutation.

Variables and PATH entries are applied to the current process so that
commands run later in this step see them, and written as shell ``export``
lines to an export file that the pipeline sources before subsequent steps.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

EXPORT_FILE_ENV = "TASK_EXPORT_FILE"


def _escape(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("`", "\\`")
    )


class PipelineEnvironment:
    """Exports environment variables and PATH entries for later pipeline steps."""

    def __init__(self, export_file: Optional[Union[str, Path]] = None):
        """
        Initialize pipeline environment.

        Args:
            export_file: File receiving export lines. Defaults to the path in
                TASK_EXPORT_FILE; when neither is set, changes only apply to
                the current process.
        """
        if export_file is None:
            export_file = os.environ.get(EXPORT_FILE_ENV) or None
        self.export_file = Path(export_file) if export_file else None

    def _write_export(self, line: str) -> None:
        if self.export_file is None:
            logger.debug(f"No export file configured, not persisting: {line}")
            return
        self.export_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.export_file, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    def export_environment_variable(self, key: str, value: str) -> None:
        """Set an environment variable for this and subsequent steps."""
        logger.debug(f"Exporting {key}={value}")
        os.environ[key] = value
        self._write_export(f'export {key}="{_escape(value)}"')

    def append_to_path(self, path: Union[str, Path]) -> None:
        """
        Add a directory to PATH for this and subsequent steps.

        The directory takes precedence over existing entries. Adding a
        directory that is already first in PATH is a no-op for the process.
        """
        entry = str(path)
        current = os.environ.get("PATH", "")
        entries = current.split(os.pathsep) if current else []
        if not entries or entries[0] != entry:
            os.environ["PATH"] = os.pathsep.join([entry] + entries)
        logger.debug(f"Added {entry} to PATH")
        self._write_export(f'export PATH="{_escape(entry)}{os.pathsep}$PATH"')
