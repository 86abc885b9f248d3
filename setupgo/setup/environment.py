"""
Environment setup for an installed toolchain.

Exports the toolchain root and workspace path variables and puts their
binary directories on PATH, then reports the toolchain's own view of its
environment for diagnostics.
"""

import logging
import os
from pathlib import Path

from setupgo.core.process import ProcessExecutor
from setupgo.pipelines.environment import PipelineEnvironment
from setupgo.setup.toolchain import GO, ToolchainSpec

logger = logging.getLogger(__name__)


def configure_environment(
    target_folder: Path,
    environment: PipelineEnvironment,
    executor: ProcessExecutor,
    toolchain: ToolchainSpec = GO,
) -> None:
    """
    Export root/path variables for the toolchain installed in target_folder.

    The workspace path variable is only exported when the toolchain reports
    a non-empty value.

    Args:
        target_folder: Folder the archive was extracted into
        environment: Pipeline environment receiving the exports
        executor: Runs the installed toolchain
        toolchain: Toolchain naming conventions
    """
    root = os.path.join(str(target_folder), toolchain.name)
    root_bin = os.path.join(root, "bin")

    logger.info(f"Exporting {toolchain.root_variable}={root}")
    environment.export_environment_variable(toolchain.root_variable, root)

    logger.info(f"Appending {toolchain.name.capitalize()} binaries location to PATH")
    environment.append_to_path(root_bin)

    workspace_path = executor.execute(
        f"{toolchain.env_command} {toolchain.path_variable}"
    ).stdout.strip()
    if workspace_path:
        environment.export_environment_variable(
            toolchain.path_variable, workspace_path
        )
        logger.info(f"Appending {toolchain.path_variable} binaries location to PATH")
        environment.append_to_path(os.path.join(workspace_path, "bin"))


def log_environment(executor: ProcessExecutor, toolchain: ToolchainSpec = GO) -> None:
    """Log the output of the toolchain's env command."""
    output = executor.execute(toolchain.env_command).stdout
    logger.info(toolchain.env_banner + os.linesep + output)
