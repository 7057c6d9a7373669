"""AWS implementation of the cloud provider blueprint."""

from __future__ import annotations

from typing import Any, NoReturn

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from logforward.base.provider import CloudProviderBlueprint, SubscriptionFilterRecord
from logforward.base.client_cache import client_cache
from logforward.base.config import AWSConfig, DeploymentConfig
from logforward.base.exceptions import (
    ProviderError,
    FunctionNotFoundError,
    LogGroupNotFoundError,
)

# Lambda and CloudWatch Logs both report a missing resource with this code.
_LAMBDA_ERROR_MAP: dict[str, type[ProviderError]] = {
    "ResourceNotFoundException": FunctionNotFoundError,
}

_LOGS_ERROR_MAP: dict[str, type[ProviderError]] = {
    "ResourceNotFoundException": LogGroupNotFoundError,
}


def _handle(
    e: ClientError | BotoCoreError,
    msg: str,
    error_map: dict[str, type[ProviderError]],
) -> NoReturn:
    exc = None
    if isinstance(e, ClientError):
        exc = error_map.get(e.response["Error"]["Code"])
    raise (exc or ProviderError)(msg) from e


def _to_record(item: Any, log_group_name: str) -> SubscriptionFilterRecord:
    try:
        return SubscriptionFilterRecord(
            filter_name=item["filterName"],
            log_group_name=item.get("logGroupName", log_group_name),
            destination_arn=item.get("destinationArn", ""),
            filter_pattern=item.get("filterPattern", ""),
            creation_time=item.get("creationTime"),
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        raise ProviderError(
            f"Malformed subscription filter for '{log_group_name}': {item!r}"
        ) from e


def _create_client(service_name: str, config: dict[str, Any]) -> Any:
    return boto3.client(service_name, **config)


class AWSProvider(CloudProviderBlueprint):
    """AWS account the compiled template deploys into.

    Attributes:
        lambda_client: boto3 Lambda client.
        logs_client: boto3 CloudWatch Logs client.
        deployment: Naming inputs of the deployment.
    """

    def __init__(self, config: AWSConfig, deployment: DeploymentConfig) -> None:
        """Initialize the Lambda and CloudWatch Logs clients.

        Args:
            config: AWS configuration object containing credentials and region.
                   Expected attributes:
                   - aws_access_key_id: AWS access key ID
                   - aws_secret_access_key: AWS secret access key
                   - region_name: AWS region name (e.g., 'us-east-1')
            deployment: Service, stage and optional stack name.
        """
        client_config = {
            "aws_access_key_id": config.aws_access_key_id,
            "aws_secret_access_key": config.aws_secret_access_key,
            "region_name": config.region_name,
        }
        self.lambda_client = client_cache.get_or_create("lambda", client_config, _create_client)
        self.logs_client = client_cache.get_or_create("logs", client_config, _create_client)
        self.deployment = deployment

    # --- Live lookups ---

    def invoke_lookup(self, identifier: str) -> None:
        """Run ``GetFunction`` against *identifier*.

        Args:
            identifier: Function name, ARN or partial ARN.

        Raises:
            FunctionNotFoundError: If the function does not exist.
            ProviderError: On any other Lambda API failure.
        """
        try:
            self.lambda_client.get_function(FunctionName=identifier)
        except (ClientError, BotoCoreError) as e:
            _handle(e, f"Failed to get function '{identifier}'", _LAMBDA_ERROR_MAP)

    def list_subscription_filters(self, log_group_name: str) -> list[SubscriptionFilterRecord]:
        """List subscription filters of a CloudWatch Logs log group.

        Args:
            log_group_name: Log group name (e.g. ``/aws/lambda/my-fn``).

        Returns:
            One record per filter, in API order.

        Raises:
            LogGroupNotFoundError: If the log group does not exist.
            ProviderError: On any other CloudWatch Logs API failure, or when
                the API returns a filter entry that cannot be read.
        """
        try:
            records: list[SubscriptionFilterRecord] = []
            paginator = self.logs_client.get_paginator("describe_subscription_filters")
            for page in paginator.paginate(logGroupName=log_group_name):
                for f in page.get("subscriptionFilters", []):
                    records.append(_to_record(f, log_group_name))
            return records
        except (ClientError, BotoCoreError) as e:
            _handle(
                e,
                f"Failed to list subscription filters for '{log_group_name}'",
                _LOGS_ERROR_MAP,
            )

    # --- Naming context ---

    def stack_identifier(self) -> str | None:
        return self.deployment.stack_name

    def service_identifier(self) -> str:
        return self.deployment.service

    def stage_identifier(self) -> str:
        return self.deployment.stage
