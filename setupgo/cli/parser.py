"""
setup-go command-line interface.

This module implements the command-line entry point of the step using argparse.
Flags override inputs published by the pipeline.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from setupgo import __version__
from setupgo.pipelines.environment import PipelineEnvironment
from setupgo.pipelines.inputs import DEFAULT_CONFIG_NAME, InputReader, load_yaml_config
from setupgo.pipelines.integrations import IntegrationDirectory
from setupgo.setup.runner import SetupRunner, get_step_workspace_dir

logger = logging.getLogger(__name__)


class CLI:
    """setup-go command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="setup-go",
            description="Install a Go toolchain on a pipeline build agent",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "--version", action="version", version=f"setup-go {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )

        # Step inputs
        parser.add_argument(
            "--go-version",
            metavar="VERSION",
            help="Go version to install (semver, e.g. 1.21.0)",
        )
        parser.add_argument(
            "--cache-integration",
            metavar="NAME",
            help="Artifactory integration used as download cache",
        )
        parser.add_argument(
            "--cache-repository",
            metavar="REPO",
            help="Artifactory repository used as download cache",
        )

        # Environment
        parser.add_argument(
            "--workspace",
            type=Path,
            metavar="DIR",
            help="Step workspace directory (default: $step_workspace_dir or cwd)",
        )
        parser.add_argument(
            "--export-file",
            type=Path,
            metavar="PATH",
            help="File receiving environment exports (default: $TASK_EXPORT_FILE)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help=f"Path to configuration file (default: <workspace>/{DEFAULT_CONFIG_NAME})",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        workspace = parsed_args.workspace or get_step_workspace_dir()

        try:
            config = self._load_config(parsed_args, workspace)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Error: {e}")
            return 1

        reader = InputReader(
            overrides={
                "version": parsed_args.go_version,
                "cacheIntegration": parsed_args.cache_integration,
                "cacheRepository": parsed_args.cache_repository,
            },
            config_inputs=config.get("inputs") or {},
        )
        runner = SetupRunner(
            reader=reader,
            directory=IntegrationDirectory.load(
                config_integrations=config.get("integrations") or []
            ),
            environment=PipelineEnvironment(parsed_args.export_file),
            workspace_dir=workspace,
        )

        try:
            return runner.run()
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT

    def _load_config(self, args, workspace: Path) -> dict:
        """Load the YAML config; an explicit --config must exist."""
        if args.config:
            return load_yaml_config(args.config, required=True)
        return load_yaml_config(Path(workspace) / DEFAULT_CONFIG_NAME, required=False)

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
