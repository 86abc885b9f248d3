"""
Integration directory for pipeline steps.

Integrations attached to a step are published by the pipeline node as
environment variables named ``int_<integrationName>_<field>``, for example::

    int_myArtifactory_masterName=artifactory
    int_myArtifactory_url=https://acme.jfrog.io/artifactory
    int_myArtifactory_user=ci
    int_myArtifactory_apikey=...

Additional integrations can be declared in the ``integrations`` list of the
YAML config file. Environment values win over config values for the same
integration name.
"""

import logging
import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from setupgo.core.exceptions import IntegrationNotFoundError

logger = logging.getLogger(__name__)

ENV_PREFIX = "int_"

# Environment field suffix -> Integration attribute
_ENV_FIELDS = {
    "name": "name",
    "masterName": "master_name",
    "id": "id",
    "url": "url",
    "user": "user",
    "apikey": "api_key",
    "accessToken": "access_token",
}

# Config file keys -> Integration attribute
_CONFIG_FIELDS = {
    **_ENV_FIELDS,
    "master_name": "master_name",
    "api_key": "api_key",
    "access_token": "access_token",
}


@dataclass(frozen=True)
class Integration:
    """
    Reference to a pipeline integration.

    Attributes:
        name: Integration instance name
        master_name: Provider type (e.g. 'artifactory', 'github')
        id: Integration id, if known
        url: Service base URL
        user: User name for basic authentication
        api_key: API key for basic authentication
        access_token: Bearer token (preferred over user/api_key)
    """

    name: str
    master_name: str = ""
    id: Optional[str] = None
    url: Optional[str] = None
    user: Optional[str] = None
    api_key: Optional[str] = None
    access_token: Optional[str] = None

    def __repr__(self) -> str:
        # Credentials stay out of logs and tracebacks
        return (
            f"Integration(name={self.name!r}, master_name={self.master_name!r}, "
            f"url={self.url!r})"
        )


class LookupStatus(Enum):
    """Outcome of a type-based integration lookup."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class IntegrationLookup:
    """Tagged result of ``IntegrationDirectory.find_integration_by_type``."""

    status: LookupStatus
    integration: Optional[Integration] = None
    detail: str = ""

    @classmethod
    def found(cls, integration: Integration) -> "IntegrationLookup":
        return cls(LookupStatus.FOUND, integration=integration)

    @classmethod
    def not_found(cls, integration_type: str) -> "IntegrationLookup":
        return cls(
            LookupStatus.NOT_FOUND,
            detail=f"No integration of type {integration_type} found",
        )

    @classmethod
    def error(cls, detail: str) -> "IntegrationLookup":
        return cls(LookupStatus.ERROR, detail=detail)


def _split_env_key(key: str) -> Optional[tuple]:
    """Split ``int_<name>_<field>`` into (name, attribute), or None."""
    if not key.startswith(ENV_PREFIX):
        return None
    rest = key[len(ENV_PREFIX) :]

    # Longest suffix first so 'accessToken' is not mistaken for another field
    for suffix in sorted(_ENV_FIELDS, key=len, reverse=True):
        tail = "_" + suffix
        if rest.endswith(tail) and len(rest) > len(tail):
            return rest[: -len(tail)], _ENV_FIELDS[suffix]
    return None


class IntegrationDirectory:
    """Lookup of the integrations available to the current step."""

    def __init__(
        self,
        integrations: Optional[Dict[str, Integration]] = None,
        load_errors: Optional[List[str]] = None,
    ):
        self.integrations: Dict[str, Integration] = dict(integrations or {})
        self.load_errors: List[str] = list(load_errors or [])

    @classmethod
    def load(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        config_integrations: Optional[List[Any]] = None,
    ) -> "IntegrationDirectory":
        """
        Build the directory from config entries and environment variables.

        Args:
            environ: Environment mapping (defaults to os.environ)
            config_integrations: ``integrations`` list from the YAML config

        Returns:
            Populated IntegrationDirectory
        """
        environ = os.environ if environ is None else environ
        integrations: Dict[str, Integration] = {}
        errors: List[str] = []

        for index, entry in enumerate(config_integrations or []):
            if not isinstance(entry, dict) or not entry.get("name"):
                errors.append(f"integrations[{index}] must be a mapping with a name")
                continue
            values = {
                _CONFIG_FIELDS[k]: str(v)
                for k, v in entry.items()
                if k in _CONFIG_FIELDS and v is not None
            }
            integrations[values["name"]] = Integration(**values)

        env_values: Dict[str, Dict[str, str]] = {}
        for key, value in environ.items():
            split = _split_env_key(key)
            if split is None:
                continue
            name, attribute = split
            env_values.setdefault(name, {})[attribute] = value

        for name, values in env_values.items():
            values.setdefault("name", name)
            base = integrations.get(name)
            if base is not None:
                integrations[name] = replace(base, **values)
            else:
                integrations[name] = Integration(**values)

        logger.debug(f"Loaded {len(integrations)} integration(s)")
        return cls(integrations, errors)

    def get_integration(self, name: str) -> Integration:
        """
        Get an integration by name.

        Raises:
            IntegrationNotFoundError: If no integration has that name
        """
        integration = self.integrations.get(name)
        if integration is None:
            raise IntegrationNotFoundError(name)
        return integration

    def find_integration_by_type(self, integration_type: str) -> IntegrationLookup:
        """
        Find the first integration (by name order) of a provider type.

        Integrations without a provider type are ignored. Malformed config
        entries make the lookup an error, since the missing entry could have
        been the match.
        """
        if self.load_errors:
            return IntegrationLookup.error(
                "Invalid integration configuration: " + "; ".join(self.load_errors)
            )

        wanted = integration_type.lower()
        for name in sorted(self.integrations):
            integration = self.integrations[name]
            if not integration.master_name:
                logger.debug(f"Integration {name} has no type, skipping")
                continue
            if integration.master_name.lower() == wanted:
                return IntegrationLookup.found(integration)

        return IntegrationLookup.not_found(integration_type)


__all__ = [
    "Integration",
    "IntegrationDirectory",
    "IntegrationLookup",
    "LookupStatus",
]
