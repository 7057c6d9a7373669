"""
Forwarder subscription reconciliation.

Runs the forwarder check once, looks up live subscription filters for
every Lambda log group of a template concurrently, then writes one
subscription filter resource per admissible log group. Only a missing
forwarder aborts the run; everything else is reported back as a warning.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from pydantic import BaseModel, ConfigDict

from logforward.base.config import DEFAULT_MAX_WORKERS
from logforward.base.logger import lf_logger, new_request_id
from logforward.base.provider import CloudProviderBlueprint
from logforward.base.template import InfrastructureTemplate, forwarder_target
from logforward.subscriptions.mutator import TemplateMutator, subscription_resource_name
from logforward.subscriptions.quota import SubscriptionQuotaChecker
from logforward.subscriptions.scanner import TemplateScanner
from logforward.subscriptions.validator import ForwarderValidator

NO_RESOURCES_MESSAGE = (
    "No CloudFormation resources available. Skipping log forwarder subscriptions."
)


def quota_warning(log_group_name: str) -> str:
    return (
        "Could not subscribe log forwarder due to too many existing "
        f"subscription filter(s) for {log_group_name}."
    )


class NamingContext(BaseModel):
    """Inputs for recognising subscription filters created by earlier runs.

    CloudFormation names a filter ``<stack>-<resource>-<suffix>``; the
    stack name, when known, wins over ``<service>-<stage>``.
    """

    model_config = ConfigDict(frozen=True)

    service: str
    stage: str
    stack_name: str | None = None

    @classmethod
    def from_provider(cls, provider: CloudProviderBlueprint) -> NamingContext:
        return cls(
            service=provider.service_identifier(),
            stage=provider.stage_identifier(),
            stack_name=provider.stack_identifier(),
        )

    def expected_name_prefix(self, subscription_name: str) -> str:
        if self.stack_name:
            return f"{self.stack_name}-{subscription_name}-"
        return f"{self.service}-{self.stage}-{subscription_name}-"


class Reconciler:
    """Subscribes every Lambda log group of a template to the forwarder.

    Attributes:
        provider: Live account used for lookups.
        max_workers: Upper bound on concurrent subscription filter lookups.
    """

    def __init__(
        self,
        provider: CloudProviderBlueprint,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        scanner: TemplateScanner | None = None,
        quota_checker: SubscriptionQuotaChecker | None = None,
        validator: ForwarderValidator | None = None,
        mutator: TemplateMutator | None = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.provider = provider
        self.max_workers = max_workers
        self.scanner = scanner or TemplateScanner()
        self.quota_checker = quota_checker or SubscriptionQuotaChecker(provider)
        self.validator = validator or ForwarderValidator(provider)
        self.mutator = mutator or TemplateMutator()

    def reconcile(
        self,
        template: InfrastructureTemplate,
        target: Any,
        naming: NamingContext | None = None,
    ) -> list[str]:
        """Add forwarder subscriptions to *template* in place.

        Args:
            template: Compiled template; mutated in place.
            target: Forwarder ARN string, CloudFormation intrinsic dict, or
                an already-built forwarder target.
            naming: Naming inputs; read from the provider when omitted.

        Returns:
            Warnings in template order. Empty when every Lambda log group
            was subscribed.

        Raises:
            ForwarderNotFoundError: If a literal forwarder ARN does not
                exist. The template is left untouched.
            TemplateError: If *target* is not a valid forwarder ARN.
        """
        request_id = new_request_id()
        if template.resources is None:
            lf_logger.info(NO_RESOURCES_MESSAGE, operation="reconcile", request_id=request_id)
            return [NO_RESOURCES_MESSAGE]

        target = forwarder_target(target)
        warnings: list[str] = []
        advisory = self.validator.validate(target, request_id=request_id)
        if advisory:
            warnings.append(advisory)

        if naming is None:
            naming = NamingContext.from_provider(self.provider)
        log_groups = list(self.scanner.find_lambda_log_groups(template))
        admissible = self._check_quotas(log_groups, naming, request_id)

        for (resource_name, log_group_name), allowed in zip(log_groups, admissible):
            if not allowed:
                lf_logger.warning(
                    "Subscription filter quota reached, skipping log group",
                    log_group=log_group_name,
                    resource=resource_name,
                    operation="reconcile",
                    request_id=request_id,
                )
                warnings.append(quota_warning(log_group_name))
                continue
            subscription = self.mutator.add_subscription(template, resource_name, target)
            lf_logger.info(
                f"Subscribed log group to forwarder as {subscription}",
                log_group=log_group_name,
                resource=resource_name,
                operation="reconcile",
                request_id=request_id,
            )
        return warnings

    async def areconcile(
        self,
        template: InfrastructureTemplate,
        target: Any,
        naming: NamingContext | None = None,
    ) -> list[str]:
        """Awaitable :meth:`reconcile`, run in a worker thread."""
        return await asyncio.to_thread(self.reconcile, template, target, naming)

    def _check_quotas(
        self,
        log_groups: list[tuple[str, str]],
        naming: NamingContext,
        request_id: str,
    ) -> list[bool]:
        """Run the quota check of every log group, preserving order."""

        def check(entry: tuple[str, str]) -> bool:
            resource_name, log_group_name = entry
            prefix = naming.expected_name_prefix(subscription_resource_name(resource_name))
            return self.quota_checker.can_subscribe(
                log_group_name, prefix, request_id=request_id
            )

        if self.max_workers == 1 or len(log_groups) <= 1:
            return [check(entry) for entry in log_groups]
        workers = min(self.max_workers, len(log_groups))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(check, log_groups))


def add_forwarder_subscriptions(
    template: InfrastructureTemplate,
    provider: CloudProviderBlueprint,
    target: Any,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[str]:
    """Subscribe every Lambda log group of *template* to *target*.

    Shorthand for ``Reconciler(provider, max_workers=...).reconcile(...)``.
    """
    return Reconciler(provider, max_workers=max_workers).reconcile(template, target)
