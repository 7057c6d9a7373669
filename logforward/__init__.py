"""Logforward — subscribe serverless Lambda log groups to a log forwarder.

Entry point for the library. Parse a compiled CloudFormation template,
build a provider and reconcile::

    from logforward import InfrastructureTemplate, Reconciler, provider_factory

    template = InfrastructureTemplate.from_cloudformation(compiled)
    provider = provider_factory("aws", {"region_name": "us-east-1"}, {"service": "orders"})
    warnings = Reconciler(provider).reconcile(template, forwarder_arn)
"""

from .base import (
    CloudProviderBlueprint,
    SubscriptionFilterRecord,
    InfrastructureTemplate,
    LiteralArn,
    DeferredArn,
    forwarder_target,
)
from .base.exceptions import LogForwardError, ForwarderNotFoundError
from .subscriptions import Reconciler, NamingContext, add_forwarder_subscriptions
from .factory import provider_factory

__all__ = [
    "CloudProviderBlueprint",
    "SubscriptionFilterRecord",
    "InfrastructureTemplate",
    "LiteralArn",
    "DeferredArn",
    "forwarder_target",
    "LogForwardError",
    "ForwarderNotFoundError",
    "Reconciler",
    "NamingContext",
    "add_forwarder_subscriptions",
    "provider_factory",
]
