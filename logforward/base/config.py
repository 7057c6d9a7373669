"""
Pydantic configuration models.

Validates provider credentials, deployment naming and reconciler tuning
up front instead of passing bad values to boto3 or deriving wrong
subscription names halfway through a run.
"""

from __future__ import annotations

import os
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator


DEFAULT_MAX_WORKERS = 4


class AWSConfig(BaseModel):
    """Configuration for the AWS provider.

    Credentials are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_DEFAULT_REGION).
    3. If neither is set, fields are left as None so boto3 can fall back to its
       own credential chain (instance metadata, ~/.aws/credentials, etc.).
    """

    model_config = ConfigDict(extra="forbid")

    aws_access_key_id: str | None = Field(default=None, description="AWS access key ID")
    aws_secret_access_key: str | None = Field(default=None, description="AWS secret access key")
    region_name: str | None = Field(default=None, description="AWS region (e.g. 'us-east-1')")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing credentials."""
        env_map = {
            "aws_access_key_id": "AWS_ACCESS_KEY_ID",
            "aws_secret_access_key": "AWS_SECRET_ACCESS_KEY",
            "region_name": "AWS_DEFAULT_REGION",
        }
        for field, env_var in env_map.items():
            if not values.get(field):
                values[field] = os.environ.get(env_var)
        return values


class DeploymentConfig(BaseModel):
    """Naming inputs of the deployment being reconciled.

    ``stack_name`` is optional; when present it takes precedence over
    ``service``/``stage`` for deriving subscription filter names.
    """

    model_config = ConfigDict(extra="forbid")

    service: str = Field(min_length=1, description="Serverless service name")
    stage: str = Field(default="dev", min_length=1, description="Deployment stage")
    stack_name: str | None = Field(default=None, description="CloudFormation stack name")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to LOGFORWARD_* environment variables."""
        env_map = {
            "service": "LOGFORWARD_SERVICE",
            "stage": "LOGFORWARD_STAGE",
            "stack_name": "LOGFORWARD_STACK_NAME",
        }
        for field, env_var in env_map.items():
            if not values.get(field) and os.environ.get(env_var):
                values[field] = os.environ[env_var]
        return values


class ReconcilerConfig(BaseModel):
    """Tuning for a reconciliation run."""

    model_config = ConfigDict(extra="forbid")

    max_workers: int = Field(
        default=DEFAULT_MAX_WORKERS,
        ge=1,
        description="Upper bound on concurrent subscription filter lookups",
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        if values.get("max_workers") is None and os.environ.get("LOGFORWARD_MAX_WORKERS"):
            values["max_workers"] = os.environ["LOGFORWARD_MAX_WORKERS"]
        return values


# Map provider names to their config models for dynamic validation
CONFIG_REGISTRY: dict[str, type[BaseModel]] = {
    "aws": AWSConfig,
}


def validate_config(cloud_provider: str, config: dict) -> BaseModel:
    """Validate and return a typed config model for the given provider.

    Args:
        cloud_provider: The cloud provider name (e.g. 'aws').
        config: Raw configuration dictionary.

    Returns:
        A validated Pydantic config model.

    Raises:
        ValueError: If the provider is unknown.
        pydantic.ValidationError: If the config is invalid.
    """
    model = CONFIG_REGISTRY.get(cloud_provider)
    if model is None:
        raise ValueError(f"No config model registered for provider: {cloud_provider}")
    return model(**config)


__all__ = [
    "AWSConfig",
    "DeploymentConfig",
    "ReconcilerConfig",
    "CONFIG_REGISTRY",
    "DEFAULT_MAX_WORKERS",
    "validate_config",
]
