"""Selection of the Artifactory integration used as download cache."""

import logging
from typing import Optional

from setupgo.core.exceptions import IntegrationError, IntegrationTypeMismatchError
from setupgo.pipelines.integrations import (
    Integration,
    IntegrationDirectory,
    LookupStatus,
)

logger = logging.getLogger(__name__)

ARTIFACTORY = "artifactory"


def find_artifactory_integration(
    directory: IntegrationDirectory, name: Optional[str] = None
) -> Optional[Integration]:
    """
    Resolve the cache integration.

    Args:
        directory: Integrations available to the step
        name: Integration requested through the cacheIntegration input

    Returns:
        The integration, or None when none is named and none is discovered

    Raises:
        IntegrationNotFoundError: If the named integration does not exist
        IntegrationTypeMismatchError: If the named integration is not Artifactory
        IntegrationError: If discovery fails for any other reason
    """
    if name:
        integration = directory.get_integration(name)
        if integration.master_name.lower() != ARTIFACTORY:
            raise IntegrationTypeMismatchError(integration.master_name)
        return integration

    logger.info("Searching for Artifactory integration")
    lookup = directory.find_integration_by_type(ARTIFACTORY)

    if lookup.status is LookupStatus.FOUND:
        logger.info(f"Artifactory integration {lookup.integration.name} found")
        return lookup.integration
    if lookup.status is LookupStatus.NOT_FOUND:
        logger.debug(lookup.detail)
        return None
    raise IntegrationError(lookup.detail)
