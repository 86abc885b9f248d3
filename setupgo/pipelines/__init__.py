"""
Pipeline collaborators: step inputs, integrations and environment exports.
"""

from .environment import PipelineEnvironment
from .inputs import InputReader, load_yaml_config
from .integrations import (
    Integration,
    IntegrationDirectory,
    IntegrationLookup,
    LookupStatus,
)

__all__ = [
    "PipelineEnvironment",
    "InputReader",
    "load_yaml_config",
    "Integration",
    "IntegrationDirectory",
    "IntegrationLookup",
    "LookupStatus",
]
