"""
Step input and configuration loading.

Inputs are resolved from, in order of precedence:
1. explicit overrides (command-line flags)
2. environment variables ``task_input_<name>`` or ``TASK_INPUT_<NAME>``
3. the ``inputs`` mapping of the YAML config file
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

INPUT_ENV_PREFIX = "task_input_"
DEFAULT_CONFIG_NAME = "setup-go.yaml"


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        FileNotFoundError: If required=True and file doesn't exist
        ValueError: If YAML parsing fails or the document is not a mapping

    Example:
        >>> config = load_yaml_config(Path("setup-go.yaml"))
        >>> config.get("inputs", {}).get("version")
        '1.21.0'
    """
    if not config_file.exists():
        if required:
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {config_file} must be a mapping")
    return config


class InputReader:
    """Reads step inputs by name."""

    def __init__(
        self,
        overrides: Optional[Mapping[str, Optional[str]]] = None,
        environ: Optional[Mapping[str, str]] = None,
        config_inputs: Optional[Mapping[str, Any]] = None,
    ):
        self.overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
        self.environ = os.environ if environ is None else environ
        self.config_inputs = dict(config_inputs or {})

    def get_input(self, name: str) -> Optional[str]:
        """
        Get an input value.

        Args:
            name: Input name as declared by the step (e.g. 'cacheIntegration')

        Returns:
            Input value, or None if the input is not set anywhere
        """
        if name in self.overrides:
            return self.overrides[name]

        for key in (INPUT_ENV_PREFIX + name, (INPUT_ENV_PREFIX + name).upper()):
            value = self.environ.get(key)
            if value is not None:
                return value

        value = self.config_inputs.get(name)
        if value is None:
            return None
        return str(value)
