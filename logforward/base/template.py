"""
In-memory model of a compiled CloudFormation template.

Resources are parsed once into a closed, discriminated union
(:class:`LogGroup`, :class:`SubscriptionFilter`, :class:`OtherResource`)
keyed on ``kind``; nothing downstream looks at raw ``Type`` strings.
Resources the reconciler never touches keep their original body and
render back verbatim.
"""

from __future__ import annotations

import copy
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from logforward.base.exceptions import TemplateError

LOG_GROUP_TYPE = "AWS::Logs::LogGroup"
SUBSCRIPTION_FILTER_TYPE = "AWS::Logs::SubscriptionFilter"


# ── Forwarder target ──────────────────────────────────────────────────
class LiteralArn(BaseModel):
    """A forwarder ARN known at packaging time; can be checked live."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    arn: str = Field(min_length=1)

    def render(self) -> str:
        return self.arn


class DeferredArn(BaseModel):
    """A forwarder ARN given as a CloudFormation intrinsic (``Fn::Sub`` etc.).

    The expression only resolves when CloudFormation renders the stack,
    so it is carried through opaquely.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["deferred"] = "deferred"
    expression: dict[str, Any]

    def render(self) -> dict[str, Any]:
        return copy.deepcopy(self.expression)


ForwarderTarget = Annotated[Union[LiteralArn, DeferredArn], Field(discriminator="kind")]


def forwarder_target(value: Any) -> LiteralArn | DeferredArn:
    """Coerce a raw ARN string or intrinsic dict into a :data:`ForwarderTarget`.

    Raises:
        TemplateError: If *value* is neither a non-empty string nor a dict.
    """
    if isinstance(value, (LiteralArn, DeferredArn)):
        return value
    if isinstance(value, str) and value:
        return LiteralArn(arn=value)
    if isinstance(value, dict) and value:
        return DeferredArn(expression=value)
    raise TemplateError(f"Invalid forwarder ARN: {value!r}")


# ── Resources ─────────────────────────────────────────────────────────
class LogGroup(BaseModel):
    """``AWS::Logs::LogGroup``.

    ``log_group_name`` is ``None`` when the template computes the name
    with an intrinsic function.
    """

    kind: Literal["log_group"] = "log_group"
    log_group_name: str | None = None
    body: dict[str, Any] = Field(default_factory=dict)

    def to_cloudformation(self) -> dict[str, Any]:
        if self.body:
            return copy.deepcopy(self.body)
        return {"Type": LOG_GROUP_TYPE, "Properties": {"LogGroupName": self.log_group_name}}


class SubscriptionFilter(BaseModel):
    """``AWS::Logs::SubscriptionFilter`` attached to a log group resource.

    ``log_group_reference`` names another resource of the same template.
    """

    kind: Literal["subscription_filter"] = "subscription_filter"
    destination_arn: ForwarderTarget
    log_group_reference: str
    filter_pattern: str = ""
    body: dict[str, Any] = Field(default_factory=dict)

    def to_cloudformation(self) -> dict[str, Any]:
        rendered = copy.deepcopy(self.body)
        properties = dict(rendered.get("Properties") or {})
        properties.update(
            {
                "DestinationArn": self.destination_arn.render(),
                "FilterPattern": self.filter_pattern,
                "LogGroupName": {"Ref": self.log_group_reference},
            }
        )
        rendered["Type"] = SUBSCRIPTION_FILTER_TYPE
        rendered["Properties"] = properties
        return rendered


class OtherResource(BaseModel):
    """Any resource the reconciler does not care about."""

    kind: Literal["other"] = "other"
    body: dict[str, Any] = Field(default_factory=dict)

    def to_cloudformation(self) -> dict[str, Any]:
        return copy.deepcopy(self.body)


Resource = Annotated[
    Union[LogGroup, SubscriptionFilter, OtherResource],
    Field(discriminator="kind"),
]


def parse_resource(name: str, body: Any) -> LogGroup | SubscriptionFilter | OtherResource:
    """Classify one raw CloudFormation resource body.

    Raises:
        TemplateError: If *body* is not a mapping.
    """
    if not isinstance(body, dict):
        raise TemplateError(f"Resource '{name}' is not a mapping")
    properties = body.get("Properties")
    if not isinstance(properties, dict):
        properties = {}
    resource_type = body.get("Type")

    if resource_type == LOG_GROUP_TYPE:
        log_group_name = properties.get("LogGroupName")
        return LogGroup(
            log_group_name=log_group_name if isinstance(log_group_name, str) else None,
            body=body,
        )

    if resource_type == SUBSCRIPTION_FILTER_TYPE:
        ref = properties.get("LogGroupName")
        destination = properties.get("DestinationArn")
        filter_pattern = properties.get("FilterPattern", "")
        if (
            isinstance(ref, dict)
            and isinstance(ref.get("Ref"), str)
            and isinstance(destination, (str, dict))
            and destination
            and isinstance(filter_pattern, str)
        ):
            return SubscriptionFilter(
                destination_arn=forwarder_target(destination),
                log_group_reference=ref["Ref"],
                filter_pattern=filter_pattern,
                body=body,
            )

    return OtherResource(body=body)


# ── Template ──────────────────────────────────────────────────────────
class InfrastructureTemplate(BaseModel):
    """A compiled template: its resource map plus every other top-level key.

    ``resources`` is ``None`` when the document has no ``Resources``
    section at all, which is distinct from an empty one.
    """

    resources: dict[str, Resource] | None = None
    document: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_cloudformation(cls, doc: Any) -> InfrastructureTemplate:
        """Parse a raw CloudFormation document (as loaded from JSON).

        Raises:
            TemplateError: If the document or its resource section is malformed.
        """
        if not isinstance(doc, dict):
            raise TemplateError("Template document must be a mapping")
        document = {k: copy.deepcopy(v) for k, v in doc.items() if k != "Resources"}
        raw_resources = doc.get("Resources")
        if raw_resources is None:
            return cls(resources=None, document=document)
        if not isinstance(raw_resources, dict):
            raise TemplateError("Template 'Resources' section must be a mapping")
        resources = {
            name: parse_resource(name, copy.deepcopy(body))
            for name, body in raw_resources.items()
        }
        return cls(resources=resources, document=document)

    def to_cloudformation(self) -> dict[str, Any]:
        """Render back into a CloudFormation document."""
        doc = copy.deepcopy(self.document)
        if self.resources is not None:
            doc["Resources"] = {
                name: resource.to_cloudformation()
                for name, resource in self.resources.items()
            }
        return doc

    def subscription_filters(self) -> dict[str, SubscriptionFilter]:
        """Return every subscription filter resource, by resource name."""
        return {
            name: resource
            for name, resource in (self.resources or {}).items()
            if resource.kind == "subscription_filter"
        }


__all__ = [
    "LOG_GROUP_TYPE",
    "SUBSCRIPTION_FILTER_TYPE",
    "LiteralArn",
    "DeferredArn",
    "ForwarderTarget",
    "forwarder_target",
    "LogGroup",
    "SubscriptionFilter",
    "OtherResource",
    "Resource",
    "parse_resource",
    "InfrastructureTemplate",
]
