"""Identity client factory.

Provides :func:`identity_factory`, the single entry-point for creating the
identity API client the editor talks to.  The function dispatches to a
provider-specific registry based on ``cloud_provider``.
"""

from trustedit.base import IdentityBlueprint, existing_cloud_providers
from trustedit.base.config import validate_config
from trustedit.aws.factory import SERVICE_REGISTRY as AWS_SERVICES


# Nested factory registry: cloud_provider -> service registry
_FACTORY_REGISTRY: dict[str, dict[str, type]] = {
    "aws": AWS_SERVICES,
}


def identity_factory(
    cloud_provider: existing_cloud_providers,
    config: dict,
) -> IdentityBlueprint:
    """
    Create the identity API client for a cloud provider.
    Args:
        cloud_provider: The cloud provider (e.g., 'aws').
        config: Configuration dictionary to initialize the client.
    Returns:
        An :class:`IdentityBlueprint` implementation.
    Raises:
        ValueError: If the cloud provider is not supported.
        pydantic.ValidationError: If the config is invalid.
    """
    if cloud_provider not in _FACTORY_REGISTRY:
        raise ValueError(f"Unsupported cloud provider: {cloud_provider}")

    service_class = _FACTORY_REGISTRY[cloud_provider]["iam"]
    configObj = validate_config(cloud_provider, config)
    return service_class(configObj)
