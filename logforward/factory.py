"""Provider factory.

Provides :func:`provider_factory`, the single entry-point for creating a
live cloud provider. Both the credential config and the deployment
naming config are validated with pydantic before any SDK client is
built.
"""

from logforward.base import CloudProviderBlueprint, existing_cloud_providers
from logforward.base.config import DeploymentConfig, validate_config
from logforward.aws.provider import AWSProvider


_PROVIDER_REGISTRY: dict[str, type[CloudProviderBlueprint]] = {
    "aws": AWSProvider,
}


def provider_factory(
    cloud_provider: existing_cloud_providers,
    config: dict,
    deployment: dict,
) -> CloudProviderBlueprint:
    """
    Create a cloud provider for live forwarder and subscription lookups.
    Args:
        cloud_provider: The cloud provider (e.g. 'aws').
        config: Credentials/region dictionary for the provider SDK.
        deployment: Naming dictionary (``service``, ``stage``, ``stack_name``).
    Returns:
        An instance of the requested provider class.
    Raises:
        ValueError: If the cloud provider is not supported.
        pydantic.ValidationError: If either config is invalid.
    """
    if cloud_provider not in _PROVIDER_REGISTRY:
        raise ValueError(f"Unsupported cloud provider: {cloud_provider}")

    provider_class = _PROVIDER_REGISTRY[cloud_provider]
    configObj = validate_config(cloud_provider, config)
    deploymentObj = DeploymentConfig(**deployment)
    return provider_class(configObj, deploymentObj)
