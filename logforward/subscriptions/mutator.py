"""Template writes for forwarder subscriptions."""

from __future__ import annotations

from logforward.base.exceptions import TemplateError
from logforward.base.template import (
    DeferredArn,
    InfrastructureTemplate,
    LiteralArn,
    SubscriptionFilter,
)


def subscription_resource_name(log_group_resource_name: str) -> str:
    return f"{log_group_resource_name}Subscription"


class TemplateMutator:
    """Adds subscription filter resources to a template.

    Not thread-safe: callers must serialise writes to one template.
    """

    def add_subscription(
        self,
        template: InfrastructureTemplate,
        log_group_resource_name: str,
        target: LiteralArn | DeferredArn,
    ) -> str:
        """Subscribe a log group resource to the forwarder.

        The filter is stored as ``<log_group_resource_name>Subscription``
        with a match-all pattern; an existing resource of that name is
        replaced.

        Args:
            template: Template to modify in place.
            log_group_resource_name: Name of a log group resource in *template*.
            target: Forwarder ARN.

        Returns:
            The name of the subscription resource.

        Raises:
            TemplateError: If *log_group_resource_name* is not a log group
                resource of *template*.
        """
        resources = template.resources
        if resources is None:
            raise TemplateError("Template has no resources to subscribe")
        log_group = resources.get(log_group_resource_name)
        if log_group is None or log_group.kind != "log_group":
            raise TemplateError(
                f"Resource '{log_group_resource_name}' is not a log group"
            )

        name = subscription_resource_name(log_group_resource_name)
        resources[name] = SubscriptionFilter(
            destination_arn=target,
            filter_pattern="",
            log_group_reference=log_group_resource_name,
        )
        return name
