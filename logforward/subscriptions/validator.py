"""Forwarder target validation."""

from __future__ import annotations

from logforward.base.exceptions import ForwarderNotFoundError, ProviderError
from logforward.base.logger import lf_logger
from logforward.base.provider import CloudProviderBlueprint
from logforward.base.template import DeferredArn, LiteralArn

DEFERRED_ARN_WARNING = (
    "Skipping forwarder ARN validation because forwarder ARN is defined "
    "with a CloudFormation function."
)


class ForwarderValidator:
    """Checks that the forwarder exists before anything subscribes to it."""

    def __init__(self, provider: CloudProviderBlueprint) -> None:
        self.provider = provider

    def validate(
        self,
        target: LiteralArn | DeferredArn,
        *,
        request_id: str | None = None,
    ) -> str | None:
        """Validate *target* against the live account.

        Returns:
            An advisory warning when *target* is a CloudFormation
            expression and cannot be checked, ``None`` otherwise.

        Raises:
            ForwarderNotFoundError: If a literal ARN cannot be looked up.
        """
        if target.kind == "deferred":
            lf_logger.warning(
                DEFERRED_ARN_WARNING,
                operation="validate_forwarder",
                request_id=request_id,
            )
            return DEFERRED_ARN_WARNING

        try:
            self.provider.invoke_lookup(target.arn)
        except ProviderError as e:
            lf_logger.error(
                f"Forwarder lookup failed: {e}",
                operation="validate_forwarder",
                request_id=request_id,
            )
            raise ForwarderNotFoundError(
                f"Could not perform GetFunction on {target.arn}."
            ) from e
        return None
