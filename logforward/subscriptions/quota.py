"""
Subscription filter quota checks.

CloudWatch Logs allows at most two subscription filters per log group.
The forwarder must never be the filter that pushes a log group past that
limit, but a filter it created on a previous deploy (recognised by its
name prefix) must not block the next one.
"""

from __future__ import annotations

from logforward.base.exceptions import LogGroupNotFoundError, ProviderError
from logforward.base.logger import lf_logger
from logforward.base.provider import CloudProviderBlueprint, SubscriptionFilterRecord

MAX_SUBSCRIPTION_FILTERS = 2


class SubscriptionQuotaChecker:
    """Decides whether a log group can take one more subscription filter.

    Attributes:
        provider: Live account used to list existing filters.
        max_filters: Platform limit of filters per log group.
    """

    def __init__(
        self,
        provider: CloudProviderBlueprint,
        max_filters: int = MAX_SUBSCRIPTION_FILTERS,
    ) -> None:
        self.provider = provider
        self.max_filters = max_filters

    def existing_filters(
        self, log_group_name: str, *, request_id: str | None = None
    ) -> list[SubscriptionFilterRecord]:
        """Return the live filters of *log_group_name*.

        A log group that does not exist yet has no filters. Other lookup
        failures are logged and also count as no filters; the lookup is
        not retried.
        """
        try:
            return self.provider.list_subscription_filters(log_group_name)
        except LogGroupNotFoundError:
            lf_logger.debug(
                "Log group not deployed yet, assuming no subscription filters",
                log_group=log_group_name,
                operation="list_subscription_filters",
                request_id=request_id,
            )
            return []
        except ProviderError as e:
            lf_logger.warning(
                f"Could not list subscription filters, assuming none: {e}",
                log_group=log_group_name,
                operation="list_subscription_filters",
                request_id=request_id,
            )
            return []

    def can_subscribe(
        self,
        log_group_name: str,
        expected_name_prefix: str,
        *,
        request_id: str | None = None,
    ) -> bool:
        """Return whether a forwarder subscription may be added to *log_group_name*.

        Args:
            log_group_name: Live log group name.
            expected_name_prefix: Name stem of filters created by a previous run.
            request_id: Correlation ID of the reconciliation run.

        Returns:
            ``True`` if a matching filter already exists or the log group is
            below the quota, ``False`` otherwise.
        """
        filters = self.existing_filters(log_group_name, request_id=request_id)
        if any(f.filter_name.startswith(expected_name_prefix) for f in filters):
            return True
        return len(filters) < self.max_filters
