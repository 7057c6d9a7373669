"""Forwarder subscription reconciliation engine."""

from .scanner import TemplateScanner, LAMBDA_LOG_GROUP_PREFIX
from .quota import SubscriptionQuotaChecker, MAX_SUBSCRIPTION_FILTERS
from .validator import ForwarderValidator
from .mutator import TemplateMutator, subscription_resource_name
from .reconciler import (
    NamingContext,
    Reconciler,
    add_forwarder_subscriptions,
)

__all__ = [
    "TemplateScanner",
    "LAMBDA_LOG_GROUP_PREFIX",
    "SubscriptionQuotaChecker",
    "MAX_SUBSCRIPTION_FILTERS",
    "ForwarderValidator",
    "TemplateMutator",
    "subscription_resource_name",
    "NamingContext",
    "Reconciler",
    "add_forwarder_subscriptions",
]
