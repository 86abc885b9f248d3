"""
Setup run orchestration.

A run goes through these steps, in order:
1. Validate inputs
2. Resolve the Artifactory cache integration
3. Create the target folder
4. Download and extract the toolchain
5. Export toolchain environment
6. Log the toolchain environment

Any failure stops the run: the error is logged and the process exits with
status 1. Nothing done by earlier steps is rolled back.
"""

import logging
import os
import sys
import traceback
from pathlib import Path
from typing import NoReturn, Optional, Union

from setupgo.core.filesystem import ensure_directory
from setupgo.core.process import ProcessExecutor
from setupgo.pipelines.environment import PipelineEnvironment
from setupgo.pipelines.inputs import InputReader
from setupgo.pipelines.integrations import IntegrationDirectory
from setupgo.setup.environment import configure_environment, log_environment
from setupgo.setup.inputs import read_and_validate_input
from setupgo.setup.installer import ArchiveInstaller
from setupgo.setup.integration import find_artifactory_integration
from setupgo.setup.toolchain import GO, ToolchainSpec

logger = logging.getLogger(__name__)

WORKSPACE_ENV = "step_workspace_dir"


def get_step_workspace_dir() -> Path:
    """Workspace of the current pipeline step, or the working directory."""
    workspace = os.environ.get(WORKSPACE_ENV)
    return Path(workspace) if workspace else Path.cwd()


def create_target_folder(
    workspace_dir: Union[str, Path], toolchain: ToolchainSpec = GO
) -> Path:
    """Create ``<workspace>/<toolchain name>`` including parents."""
    return ensure_directory(Path(workspace_dir) / toolchain.name)


def log_error_and_exit(error: BaseException) -> NoReturn:
    """Log a failed run and terminate with status 1."""
    logger.error(str(error))
    logger.debug(
        "".join(traceback.format_exception(type(error), error, error.__traceback__))
    )
    sys.exit(1)


class SetupRunner:
    """Runs the toolchain setup step."""

    def __init__(
        self,
        reader: Optional[InputReader] = None,
        directory: Optional[IntegrationDirectory] = None,
        environment: Optional[PipelineEnvironment] = None,
        executor: Optional[ProcessExecutor] = None,
        workspace_dir: Optional[Path] = None,
        toolchain: ToolchainSpec = GO,
    ):
        self.reader = reader or InputReader()
        self.directory = directory
        self.environment = environment or PipelineEnvironment()
        self.executor = executor or ProcessExecutor()
        self.workspace_dir = workspace_dir
        self.toolchain = toolchain
        self.installer = ArchiveInstaller(toolchain)

    def run(self) -> int:
        """
        Run all steps.

        Returns:
            0 on success; failures exit the process with status 1
        """
        try:
            config = read_and_validate_input(self.reader)
            logger.debug(f"Validated inputs: {config}")

            directory = self.directory or IntegrationDirectory.load()
            integration = find_artifactory_integration(
                directory, config.cache_integration
            )

            workspace = self.workspace_dir or get_step_workspace_dir()
            target_folder = create_target_folder(workspace, self.toolchain)

            self.installer.install(
                config.version,
                target_folder,
                integration,
                config.cache_repository,
            )
            configure_environment(
                target_folder, self.environment, self.executor, self.toolchain
            )
            log_environment(self.executor, self.toolchain)
        except Exception as e:
            log_error_and_exit(e)

        return 0
