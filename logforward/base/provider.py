"""Cloud provider blueprint used by the reconciler for live lookups."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict


class SubscriptionFilterRecord(BaseModel):
    """A live subscription filter as reported by the logging service.

    Read-only; fetched per quota check and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    filter_name: str
    log_group_name: str
    destination_arn: str = ""
    filter_pattern: str = ""
    creation_time: int | None = None


class CloudProviderBlueprint(ABC):
    """Abstract interface for the live account the template deploys into.

    Maps to AWS Lambda (function lookup), CloudWatch Logs (subscription
    filters) and the deployment's naming inputs.
    """

    # --- Live lookups ---

    @abstractmethod
    def invoke_lookup(self, identifier: str) -> None:
        """Confirm that *identifier* names an invokable function.

        Raises:
            FunctionNotFoundError: If the function does not exist.
            ProviderError: On any other lookup failure.
        """

    @abstractmethod
    def list_subscription_filters(self, log_group_name: str) -> list[SubscriptionFilterRecord]:
        """List every subscription filter currently attached to a log group.

        Implementations must report every failure, including unreadable
        API responses, as a :class:`ProviderError`; anything else aborts
        the whole reconciliation run.

        Raises:
            LogGroupNotFoundError: If the log group does not exist.
            ProviderError: On any other lookup failure.
        """

    # --- Naming context ---

    @abstractmethod
    def stack_identifier(self) -> str | None:
        """Return the deployed stack name, or ``None`` if unknown."""

    @abstractmethod
    def service_identifier(self) -> str:
        """Return the service name."""

    @abstractmethod
    def stage_identifier(self) -> str:
        """Return the deployment stage."""
