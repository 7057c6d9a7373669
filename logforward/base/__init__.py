"""Provider blueprint, template model and core utilities.

Import the blueprint to implement a provider for another account setup,
or the template types to build and inspect templates in code.
"""

from .provider import CloudProviderBlueprint, SubscriptionFilterRecord
from .template import (
    InfrastructureTemplate,
    LogGroup,
    SubscriptionFilter,
    OtherResource,
    LiteralArn,
    DeferredArn,
    forwarder_target,
)
from .supported_providers import existing_cloud_providers


__all__ = [
    "CloudProviderBlueprint",
    "SubscriptionFilterRecord",
    "InfrastructureTemplate",
    "LogGroup",
    "SubscriptionFilter",
    "OtherResource",
    "LiteralArn",
    "DeferredArn",
    "forwarder_target",
    "existing_cloud_providers",
]
