"""Shared fixtures: an in-memory provider and template builders."""

import pytest

from logforward.base.exceptions import FunctionNotFoundError, LogGroupNotFoundError
from logforward.base.provider import CloudProviderBlueprint, SubscriptionFilterRecord
from logforward.base.template import InfrastructureTemplate

FORWARDER_ARN = "arn:aws:lambda:us-east-1:123456789012:function:forwarder"


class FakeProvider(CloudProviderBlueprint):
    """Provider backed by dicts; records every lookup it serves."""

    def __init__(self, *, functions=(), filters=None, service="my-service",
                 stage="dev", stack_name=None, errors=None):
        self.functions = set(functions)
        self.filters = filters or {}
        self.errors = errors or {}
        self.service = service
        self.stage = stage
        self.stack_name = stack_name
        self.lookups = []
        self.listed = []

    def invoke_lookup(self, identifier):
        self.lookups.append(identifier)
        if identifier not in self.functions:
            raise FunctionNotFoundError(f"Failed to get function '{identifier}'")

    def list_subscription_filters(self, log_group_name):
        self.listed.append(log_group_name)
        if log_group_name in self.errors:
            raise self.errors[log_group_name]
        if log_group_name not in self.filters:
            raise LogGroupNotFoundError(log_group_name)
        return [
            SubscriptionFilterRecord(filter_name=name, log_group_name=log_group_name)
            for name in self.filters[log_group_name]
        ]

    def stack_identifier(self):
        return self.stack_name

    def service_identifier(self):
        return self.service

    def stage_identifier(self):
        return self.stage


def log_group(name):
    return {"Type": "AWS::Logs::LogGroup", "Properties": {"LogGroupName": name}}


@pytest.fixture
def make_provider():
    def _make(**kwargs):
        kwargs.setdefault("functions", [FORWARDER_ARN])
        return FakeProvider(**kwargs)

    return _make


@pytest.fixture
def make_template():
    def _make(resources):
        return InfrastructureTemplate.from_cloudformation({"Resources": resources})

    return _make


@pytest.fixture
def func_template(make_template):
    return make_template({"FuncLogGroup": log_group("/aws/lambda/my-service-dev-func")})
