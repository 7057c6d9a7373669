"""Selection of Lambda-managed log groups from a template."""

from __future__ import annotations

from typing import Iterator

from logforward.base.template import InfrastructureTemplate

LAMBDA_LOG_GROUP_PREFIX = "/aws/lambda/"


class LambdaLogGroups:
    """Restartable view over the Lambda log groups of a template.

    Each iteration walks the resource map again, in template order, and
    yields ``(resource_name, log_group_name)`` pairs.
    """

    def __init__(self, template: InfrastructureTemplate, prefix: str) -> None:
        self._template = template
        self._prefix = prefix

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for name, resource in (self._template.resources or {}).items():
            if resource.kind != "log_group" or resource.log_group_name is None:
                continue
            if resource.log_group_name.startswith(self._prefix):
                yield name, resource.log_group_name


class TemplateScanner:
    """Finds log groups that belong to Lambda functions."""

    def __init__(self, prefix: str = LAMBDA_LOG_GROUP_PREFIX) -> None:
        self.prefix = prefix

    def find_lambda_log_groups(self, template: InfrastructureTemplate) -> LambdaLogGroups:
        return LambdaLogGroups(template, self.prefix)
